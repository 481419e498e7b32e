"""PayNow EMV QR payload encoder."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from .crc import checksum
from .models import PaymentIntent, Proxy, ProxyType, ValidatedIntent
from .tlv import TLVItem, build_tlv
from .validation import validate_intent

logger = logging.getLogger("paynowqr.encoder")

PAYNOW_GUID = "SG.PAYNOW"
# Banking apps treat this as "no expiry"; caller-supplied dates are not encoded.
FAR_FUTURE_EXPIRY = "99991231"
MERCHANT_CATEGORY_CODE = "0000"
CURRENCY_SGD = "702"
COUNTRY_CODE = "SG"
MERCHANT_CITY = "Singapore"
CRC_TAG = "6304"


@dataclass(frozen=True)
class MerchantAccountInfo:
    proxy: Proxy
    editable_amount: bool
    expiry: str = FAR_FUTURE_EXPIRY

    def to_subitems(self) -> Iterable[TLVItem]:
        yield TLVItem(tag="00", value=PAYNOW_GUID)
        yield TLVItem(tag="01", value=self.proxy.type.value)
        yield TLVItem(tag="02", value=self.proxy.value)
        yield TLVItem(tag="03", value="1" if self.editable_amount else "0")
        yield TLVItem(tag="04", value=self.expiry)

    def to_item(self) -> TLVItem:
        return TLVItem(tag="26", value=build_tlv(self.to_subitems()))


@dataclass(frozen=True)
class AdditionalData:
    """Tag 62 template. Bill number (62/01) is shown read-only by banking apps."""

    bill_number: str

    def to_item(self) -> TLVItem:
        return TLVItem(tag="62", value=build_tlv([TLVItem(tag="01", value=self.bill_number)]))


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str
    proxy_type: ProxyType


def format_amount(amount: Decimal, editable: bool) -> str:
    """Fixed 2 decimals for locked amounts, shortest decimal string otherwise."""

    if editable:
        return format(amount.normalize(), "f")
    return f"{amount:.2f}"


def payload_items(intent: ValidatedIntent) -> Iterable[TLVItem]:
    yield TLVItem(tag="00", value="01")
    yield TLVItem(tag="01", value="12")
    yield MerchantAccountInfo(proxy=intent.proxy, editable_amount=intent.editable_amount).to_item()
    yield TLVItem(tag="52", value=MERCHANT_CATEGORY_CODE)
    yield TLVItem(tag="53", value=CURRENCY_SGD)
    yield TLVItem(tag="54", value=format_amount(intent.amount, intent.editable_amount))
    yield TLVItem(tag="58", value=COUNTRY_CODE)
    yield TLVItem(tag="59", value=intent.merchant_name)
    yield TLVItem(tag="60", value=MERCHANT_CITY)
    yield AdditionalData(bill_number=intent.reference).to_item()


def assemble(intent: ValidatedIntent) -> str:
    """Return the payload up to and including the ``6304`` CRC marker."""

    return f"{build_tlv(payload_items(intent))}{CRC_TAG}"


def encode_validated(intent: ValidatedIntent) -> EncodedPayload:
    crc_input = assemble(intent)
    crc = checksum(crc_input)
    return EncodedPayload(payload=f"{crc_input}{crc}", crc=crc, proxy_type=intent.proxy.type)


def encode_payload(intent: PaymentIntent) -> EncodedPayload:
    """Validate ``intent`` and build the final EMV string with its CRC."""

    validated = validate_intent(intent)
    if intent.expiry is not None:
        logger.debug("expiry ignored", extra={"expiry": str(intent.expiry)})
    return encode_validated(validated)


def encode(intent: PaymentIntent) -> str:
    return encode_payload(intent).payload
