"""Validation of payment intents ahead of EMV encoding.

Rules run in a fixed order and stop at the first failure so the merchant
sees a single, unambiguous message.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from .models import PaymentIntent, Proxy, ProxyType, ValidatedIntent
from .services.errors import (
    err_amount_too_large,
    err_identifier_conflict,
    err_invalid_merchant_name,
    err_invalid_mobile,
    err_invalid_uen,
    err_missing_reference,
    err_non_positive_amount,
    err_reference_invalid_chars,
    err_reference_too_long,
    err_too_many_decimals,
)

MAX_REFERENCE_LENGTH = 25
# EMV tag 54 holds at most 13 characters.
MAX_AMOUNT_LENGTH = 13
MAX_MERCHANT_NAME_LENGTH = 25
DEFAULT_MERCHANT_NAME = "NA"

_MOBILE_STRIP = re.compile(r"[\s\-+]")
_UEN_STRIP = re.compile(r"[\s\-]")
_LOCAL_MOBILE = re.compile(r"[0-9]{8}")
_INTL_MOBILE = re.compile(r"65[0-9]{8}")
_UEN_PATTERNS = (
    re.compile(r"[0-9]{8,10}[A-Z]"),  # business
    re.compile(r"[A-Z][0-9]{2}[A-Z]{2}[0-9]{4}[A-Z]"),  # entity, e.g. T05LL1103B
    re.compile(r"[A-Z]{1,2}[0-9]{8,10}[A-Z]"),
    re.compile(r"[0-9]{4}[A-Z][0-9]{5}[A-Z]"),
)
_REFERENCE = re.compile(r"[A-Za-z0-9\-_/]+")


def normalize_mobile(mobile: str) -> str:
    """Return the PayNow proxy value (``+65XXXXXXXX``) for a mobile number."""

    cleaned = _MOBILE_STRIP.sub("", mobile)
    if _LOCAL_MOBILE.fullmatch(cleaned):
        return f"+65{cleaned}"
    if _INTL_MOBILE.fullmatch(cleaned):
        return f"+{cleaned}"
    raise err_invalid_mobile()


def normalize_uen(uen: str) -> str:
    cleaned = _UEN_STRIP.sub("", uen).upper()
    if any(pattern.fullmatch(cleaned) for pattern in _UEN_PATTERNS):
        return cleaned
    raise err_invalid_uen()


def resolve_proxy(mobile: str | None, uen: str | None) -> Proxy:
    if bool(mobile) == bool(uen):
        raise err_identifier_conflict()
    if mobile:
        return Proxy(type=ProxyType.MOBILE, value=normalize_mobile(mobile))
    return Proxy(type=ProxyType.UEN, value=normalize_uen(uen))


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """Coerce ``value`` into a positive Decimal with at most 2 decimals.

    Floats go through ``str`` so ``12.9`` is read as ``Decimal("12.9")``
    rather than its binary expansion.
    """

    if isinstance(value, bool):
        raise err_non_positive_amount("Amount must be a valid number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise err_non_positive_amount("Amount must be a valid number") from None
    if not amount.is_finite():
        raise err_non_positive_amount("Amount must be a valid number")
    if amount <= 0:
        raise err_non_positive_amount()
    exponent = amount.normalize().as_tuple().exponent
    if max(0, -exponent) > 2:
        raise err_too_many_decimals()
    if len(f"{amount:.2f}") > MAX_AMOUNT_LENGTH:
        raise err_amount_too_large()
    return amount


def check_reference(reference: str | None) -> str:
    if not reference:
        raise err_missing_reference()
    if len(reference) > MAX_REFERENCE_LENGTH:
        raise err_reference_too_long()
    if not _REFERENCE.fullmatch(reference):
        raise err_reference_invalid_chars()
    return reference


def resolve_merchant_name(merchant_name: str | None) -> str:
    """Tag 59 value: ``NA`` when absent, truncated to 25 characters.

    TLV lengths count characters and the checksum runs over bytes, so only
    printable ASCII is accepted.
    """

    if not merchant_name:
        return DEFAULT_MERCHANT_NAME
    if not (merchant_name.isascii() and merchant_name.isprintable()):
        raise err_invalid_merchant_name()
    return merchant_name[:MAX_MERCHANT_NAME_LENGTH]


def validate_intent(intent: PaymentIntent) -> ValidatedIntent:
    """Validate ``intent`` and return its normalized form.

    Raises :class:`~paynowqr.services.errors.ValidationError` on the first
    rule that fails. The intent itself is never modified.
    """

    proxy = resolve_proxy(intent.payee_mobile, intent.payee_uen)
    amount = to_amount(intent.amount)
    reference = check_reference(intent.reference)
    return ValidatedIntent(
        proxy=proxy,
        amount=amount,
        reference=reference,
        editable_amount=bool(intent.editable_amount),
        merchant_name=resolve_merchant_name(intent.merchant_name),
    )
