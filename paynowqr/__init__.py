"""PayNow EMV QR payload encoder."""
from .models import PaymentIntent, Proxy, ProxyType
from .paynow_encoder import EncodedPayload, encode, encode_payload
from .services.errors import ServiceError, ValidationError, ValidationErrorKind

__all__ = [
    "EncodedPayload",
    "PaymentIntent",
    "Proxy",
    "ProxyType",
    "ServiceError",
    "ValidationError",
    "ValidationErrorKind",
    "encode",
    "encode_payload",
]
