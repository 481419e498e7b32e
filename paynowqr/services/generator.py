"""PayNow payload generation and QR rendering services."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from qrcode.exceptions import DataOverflowError

from ..models import PaymentIntent, ProxyType
from ..monitoring import record_payload_encoded, record_render_failure, time_stage
from ..paynow_encoder import EncodedPayload, encode_payload
from ..renderer import render_qr_payload

logger = logging.getLogger("paynowqr.generator")

Renderer = Callable[[str], dict[str, Any]]


@dataclass(slots=True)
class GenerateResult:
    encoded: EncodedPayload
    proxy_type: ProxyType
    qr_png_base64: str | None = None
    qr_svg: str | None = None


class PayNowQRGenerator:
    """Encode payment intents and optionally render them as QR images.

    Rendering is best effort: a renderer failure is logged and leaves the
    image fields empty, the encoded payload is still returned.
    """

    def __init__(self, renderer: Renderer | None = None):
        self.renderer = renderer or self._default_renderer

    @staticmethod
    def _default_renderer(payload: str) -> dict[str, Any]:
        return render_qr_payload(payload)

    def generate(self, intent: PaymentIntent, *, render: bool = True) -> GenerateResult:
        with time_stage("encode"):
            encoded = encode_payload(intent)
        proxy_type = encoded.proxy_type
        record_payload_encoded(proxy_type.name.lower(), bool(intent.editable_amount))
        logger.info(
            "paynow payload generated",
            extra={"proxy_type": proxy_type.name, "crc": encoded.crc, "payload_length": len(encoded.payload)},
        )

        result = GenerateResult(encoded=encoded, proxy_type=proxy_type)
        if not render:
            return result

        try:
            with time_stage("render"):
                images = self.renderer(encoded.payload)
        except (DataOverflowError, OSError, ValueError):
            logger.exception("qr render failed", extra={"crc": encoded.crc})
            record_render_failure()
            return result

        result.qr_png_base64 = images.get("png_base64")
        result.qr_svg = images.get("svg")
        return result
