"""Shared service error definitions."""
from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(slots=True, eq=False)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


class ValidationErrorKind(str, enum.Enum):
    IDENTIFIER_CONFLICT = "ERR_IDENTIFIER_CONFLICT"
    INVALID_MOBILE = "ERR_INVALID_MOBILE"
    INVALID_UEN = "ERR_INVALID_UEN"
    NON_POSITIVE_AMOUNT = "ERR_NON_POSITIVE_AMOUNT"
    TOO_MANY_DECIMALS = "ERR_TOO_MANY_DECIMALS"
    AMOUNT_TOO_LARGE = "ERR_AMOUNT_TOO_LARGE"
    MISSING_REFERENCE = "ERR_MISSING_REFERENCE"
    REFERENCE_TOO_LONG = "ERR_REFERENCE_TOO_LONG"
    REFERENCE_INVALID_CHARS = "ERR_REFERENCE_INVALID_CHARS"
    INVALID_MERCHANT_NAME = "ERR_INVALID_MERCHANT_NAME"


class ValidationError(ServiceError):
    """A payment intent was rejected before encoding started."""

    @property
    def kind(self) -> ValidationErrorKind:
        return ValidationErrorKind(self.code)


def _invalid(kind: ValidationErrorKind, message: str) -> ValidationError:
    return ValidationError(code=kind.value, message=message, status_code=422)


def err_identifier_conflict(message: str | None = None) -> ValidationError:
    return _invalid(ValidationErrorKind.IDENTIFIER_CONFLICT, message or "Exactly one of mobile or uen must be provided")


def err_invalid_mobile(message: str | None = None) -> ValidationError:
    return _invalid(ValidationErrorKind.INVALID_MOBILE, message or "Mobile number must be 8 digits or in +65XXXXXXXX format")


def err_invalid_uen(message: str | None = None) -> ValidationError:
    return _invalid(ValidationErrorKind.INVALID_UEN, message or "UEN must be in valid Singapore format")


def err_non_positive_amount(message: str | None = None) -> ValidationError:
    return _invalid(ValidationErrorKind.NON_POSITIVE_AMOUNT, message or "Amount must be greater than 0")


def err_too_many_decimals(message: str | None = None) -> ValidationError:
    return _invalid(ValidationErrorKind.TOO_MANY_DECIMALS, message or "Amount cannot have more than 2 decimal places")


def err_amount_too_large(message: str | None = None) -> ValidationError:
    return _invalid(ValidationErrorKind.AMOUNT_TOO_LARGE, message or "Amount cannot exceed 9999999999.99")


def err_missing_reference(message: str | None = None) -> ValidationError:
    return _invalid(ValidationErrorKind.MISSING_REFERENCE, message or "Reference is required")


def err_reference_too_long(message: str | None = None) -> ValidationError:
    return _invalid(ValidationErrorKind.REFERENCE_TOO_LONG, message or "Reference cannot exceed 25 characters")


def err_reference_invalid_chars(message: str | None = None) -> ValidationError:
    return _invalid(
        ValidationErrorKind.REFERENCE_INVALID_CHARS,
        message or "Reference can only contain letters, numbers, hyphens, underscores, and slashes",
    )


def err_invalid_merchant_name(message: str | None = None) -> ValidationError:
    return _invalid(
        ValidationErrorKind.INVALID_MERCHANT_NAME,
        message or "Merchant name can only contain printable ASCII characters",
    )
