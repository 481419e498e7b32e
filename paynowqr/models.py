"""Payment intent and validated proxy types."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from decimal import Decimal


class ProxyType(str, enum.Enum):
    """PayNow proxy type codes carried in sub-tag 26/01."""

    MOBILE = "0"
    UEN = "2"


@dataclass(frozen=True)
class Proxy:
    type: ProxyType
    value: str


@dataclass(frozen=True)
class PaymentIntent:
    """A request to collect ``amount`` SGD from a payer.

    Exactly one of ``payee_mobile`` and ``payee_uen`` must be set. ``expiry``
    is accepted for callers that track one but is not encoded.
    """

    amount: Decimal | int | float | str
    reference: str
    payee_mobile: str | None = None
    payee_uen: str | None = None
    editable_amount: bool = False
    merchant_name: str | None = None
    expiry: date | None = None

    @classmethod
    def for_mobile(cls, mobile: str, amount: Decimal | int | float | str, reference: str, **kwargs) -> "PaymentIntent":
        return cls(amount=amount, reference=reference, payee_mobile=mobile, **kwargs)

    @classmethod
    def for_uen(cls, uen: str, amount: Decimal | int | float | str, reference: str, **kwargs) -> "PaymentIntent":
        return cls(amount=amount, reference=reference, payee_uen=uen, **kwargs)


@dataclass(frozen=True)
class ValidatedIntent:
    proxy: Proxy
    amount: Decimal
    reference: str
    editable_amount: bool
    merchant_name: str
