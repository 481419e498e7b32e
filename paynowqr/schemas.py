"""Pydantic schemas for API contracts."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from .models import PaymentIntent


class PayNowRequest(BaseModel):
    mobile: str | None = Field(default=None, description="Singapore mobile number, 8 digits or +65 prefixed")
    uen: str | None = Field(default=None, description="Singapore Unique Entity Number")
    amount: Decimal = Field(description="Amount in SGD, at most 2 decimal places")
    reference: str = Field(description="Bill reference shown read-only in banking apps")
    editable: bool = False
    merchant_name: str | None = None
    expiry: date | None = Field(default=None, description="Accepted but not encoded")

    def to_intent(self, default_merchant_name: str | None = None) -> PaymentIntent:
        return PaymentIntent(
            amount=self.amount,
            reference=self.reference,
            payee_mobile=self.mobile,
            payee_uen=self.uen,
            editable_amount=self.editable,
            merchant_name=self.merchant_name or default_merchant_name,
            expiry=self.expiry,
        )


class PayloadResponse(BaseModel):
    payload: str
    crc: str
    proxy_type: str


class QRResponse(PayloadResponse):
    qr_png_base64: str | None = None
    qr_svg: str | None = None


class ErrorResponse(BaseModel):
    code: str
    message: str
