import re
from datetime import date
from decimal import Decimal

import pytest

from paynowqr import PaymentIntent, ValidationError, encode, encode_payload
from paynowqr.crc import checksum
from paynowqr.models import Proxy, ProxyType
from paynowqr.paynow_encoder import MerchantAccountInfo, assemble, format_amount
from paynowqr.validation import validate_intent

MOBILE_FIXED = (
    "00020101021226500009SG.PAYNOW010100211+65868542210301004089999123152040000"
    "530370254041.005802SG5902NA6009Singapore62080104test6304596F"
)
UEN_FIXED = (
    "00020101021226490009SG.PAYNOW010120210201912345Z0301004089999123152040000"
    "5303702540512.905802SG5902NA6009Singapore62140110TBL12-00016304B647"
)
MOBILE_EDITABLE = (
    "00020101021226500009SG.PAYNOW010100211+65868542210301104089999123152040000"
    "53037025402105802SG5902NA6009Singapore62080104test6304A2E8"
)

PAYLOAD_SHAPE = re.compile(r"^000201010212.*6304[A-F0-9]{4}$")


def test_mobile_fixed_amount(mobile_intent):
    payload = encode(mobile_intent)
    assert payload == MOBILE_FIXED
    assert payload.startswith("000201010212")
    assert "SG.PAYNOW" in payload
    assert "1.00" in payload
    assert "test" in payload


def test_uen_reference(uen_intent):
    payload = encode(uen_intent)
    assert payload == UEN_FIXED
    assert "201912345Z" in payload
    assert "12.90" in payload
    assert "TBL12-0001" in payload


def test_editable_amount():
    payload = encode(PaymentIntent.for_mobile("86854221", 10, "test", editable_amount=True))
    assert payload == MOBILE_EDITABLE
    assert "03011" in payload
    assert "540210" in payload
    assert "10.00" not in payload


def test_editable_flag_changes_marker_and_amount_format():
    fixed = encode(PaymentIntent.for_mobile("86854221", 10, "test"))
    editable = encode(PaymentIntent.for_mobile("86854221", 10, "test", editable_amount=True))
    assert "03010" in fixed and "03011" not in fixed
    assert "03011" in editable and "03010" not in editable
    assert "540510.00" in fixed
    assert "540210" in editable


@pytest.mark.parametrize(
    "intent",
    [
        PaymentIntent.for_mobile("86854221", Decimal("0.01"), "q"),
        PaymentIntent.for_mobile("+65 9123 4567", 99999.99, "ORDER/2024/0001", merchant_name="Kopi Stall"),
        PaymentIntent.for_uen("T05LL1103B", "5", "a_b-c", editable_amount=True),
        PaymentIntent.for_uen("1234A12345B", Decimal("250.5"), "X" * 25, merchant_name="N" * 40),
    ],
)
def test_payload_properties(intent):
    encoded = encode_payload(intent)
    payload = encoded.payload
    assert PAYLOAD_SHAPE.match(payload)
    assert "SG.PAYNOW" in payload
    assert payload.endswith(encoded.crc)
    assert checksum(payload[:-4]) == encoded.crc

    reference = intent.reference
    assert payload.count(reference) == 1
    block = f"01{len(reference):02d}{reference}"
    assert f"62{len(block):02d}{block}6304" in payload


def test_checksum_differs_for_amount_and_reference():
    base = encode_payload(PaymentIntent.for_mobile("86854221", Decimal("10.00"), "REF123"))
    other_amount = encode_payload(PaymentIntent.for_mobile("86854221", Decimal("10.01"), "REF123"))
    other_reference = encode_payload(PaymentIntent.for_mobile("86854221", Decimal("10.00"), "REF124"))
    assert base.crc != other_amount.crc
    assert base.crc != other_reference.crc


def test_merchant_name_field():
    payload = encode(PaymentIntent.for_mobile("86854221", 1, "test", merchant_name="My Restaurant"))
    assert "5913My Restaurant6009Singapore" in payload
    payload = encode(PaymentIntent.for_mobile("86854221", 1, "test", merchant_name=""))
    assert "5902NA6009Singapore" in payload


def test_expiry_is_not_encoded():
    with_expiry = encode(PaymentIntent.for_mobile("86854221", 1, "test", expiry=date(2030, 1, 31)))
    without_expiry = encode(PaymentIntent.for_mobile("86854221", 1, "test"))
    assert with_expiry == without_expiry
    assert "040899991231" in with_expiry
    assert "20300131" not in with_expiry


def test_merchant_account_info_layout():
    info = MerchantAccountInfo(proxy=Proxy(type=ProxyType.UEN, value="201912345Z"), editable_amount=False)
    item = info.to_item()
    assert item.tag == "26"
    assert item.value == "0009SG.PAYNOW010120210201912345Z03010040899991231"
    assert item.serialize().startswith("2649")


def test_assemble_ends_with_crc_marker(uen_intent):
    pre_checksum = assemble(validate_intent(uen_intent))
    assert pre_checksum.endswith("62140110TBL12-00016304")
    assert UEN_FIXED == pre_checksum + checksum(pre_checksum)


@pytest.mark.parametrize(
    ("amount", "editable", "expected"),
    [
        (Decimal("10"), False, "10.00"),
        (Decimal("10"), True, "10"),
        (Decimal("12.90"), False, "12.90"),
        (Decimal("12.90"), True, "12.9"),
        (Decimal("100"), True, "100"),
        (Decimal("0.5"), False, "0.50"),
    ],
)
def test_format_amount(amount, editable, expected):
    assert format_amount(amount, editable) == expected


@pytest.mark.parametrize(
    "intent",
    [
        PaymentIntent(amount=10, reference="test", payee_mobile="86854221", payee_uen="201912345Z"),
        PaymentIntent(amount=10, reference="test"),
        PaymentIntent.for_mobile("86854221", 0, "test"),
        PaymentIntent.for_mobile("86854221", Decimal("-10.00"), "test"),
        PaymentIntent.for_mobile("86854221", Decimal("10.123"), "test"),
        PaymentIntent.for_mobile("86854221", 10, "bad ref"),
        PaymentIntent.for_mobile("86854221", 10, "ref@1"),
        PaymentIntent.for_mobile("86854221", 10, "ref#1"),
        PaymentIntent.for_mobile("86854221", 10, "ref$1"),
        PaymentIntent.for_mobile("86854221", 10, "R" * 26),
    ],
)
def test_encode_rejects_invalid_intents(intent):
    with pytest.raises(ValidationError):
        encode(intent)


def test_oversized_amount_is_a_validation_error():
    with pytest.raises(ValidationError) as excinfo:
        encode(PaymentIntent.for_mobile("86854221", Decimal("1E+100"), "test"))
    assert excinfo.value.code == "ERR_AMOUNT_TOO_LARGE"


def test_largest_amount_fits_tag_54():
    payload = encode(PaymentIntent.for_mobile("86854221", Decimal("9999999999.99"), "test"))
    assert "54139999999999.99" in payload


def test_non_ascii_merchant_name_is_a_validation_error():
    with pytest.raises(ValidationError) as excinfo:
        encode(PaymentIntent.for_mobile("86854221", 1, "test", merchant_name="咖啡店"))
    assert excinfo.value.code == "ERR_INVALID_MERCHANT_NAME"


def test_payload_is_ascii(uen_intent):
    payload = encode(uen_intent)
    assert payload.isascii()
    assert len(payload.encode("ascii")) == len(payload)


def test_encoded_payload_carries_proxy_type(mobile_intent, uen_intent):
    assert encode_payload(mobile_intent).proxy_type is ProxyType.MOBILE
    assert encode_payload(uen_intent).proxy_type is ProxyType.UEN
