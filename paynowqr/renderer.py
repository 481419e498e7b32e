"""QR image renderer for PayNow payloads.

The encoder never imports this module; it turns a finished payload string
into images for display.
"""
from __future__ import annotations

import base64
import io
from typing import Any

import qrcode
from PIL import Image, ImageDraw, ImageFont
from qrcode.image.svg import SvgPathFillImage

from .config import QRConfig, settings

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def _build_qr(data: str, config: QRConfig) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        version=None,
        error_correction=_ERROR_CORRECTION[config.error_correction],
        box_size=config.box_size,
        border=config.border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr


def generate_qr_image(data: str, title: str = "PayNow", config: QRConfig | None = None) -> Image.Image:
    """Generate QR image with a framed label underneath."""

    config = config or settings.qr
    qr = _build_qr(data, config)
    qr_img = qr.make_image(fill_color=config.fill_color, back_color=config.back_color).convert("RGBA")
    width, height = qr_img.size

    label_height = 40
    margin = 40
    canvas_width = width + margin * 2
    canvas_height = height + margin * 2 + label_height

    canvas = Image.new("RGBA", (canvas_width, canvas_height), color="#F5F7FA")
    canvas.paste(qr_img, (margin, margin))

    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default()
    text = title.upper()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    text_x = (canvas_width - (right - left)) // 2
    text_y = margin + height + (label_height - (bottom - top)) // 2
    draw.rectangle(
        [(margin // 2, margin + height), (canvas_width - margin // 2, margin + height + label_height)],
        fill="#FFFFFF",
    )
    draw.text((text_x, text_y), text, fill=config.fill_color, font=font)

    return canvas


def generate_qr_svg(data: str, config: QRConfig | None = None) -> str:
    """Generate a scalable SVG path image of the payload."""

    config = config or settings.qr
    factory = type(
        "PayNowSvgImage",
        (SvgPathFillImage,),
        {
            "background": config.back_color,
            "QR_PATH_STYLE": {
                "fill": config.fill_color,
                "fill-opacity": "1",
                "fill-rule": "nonzero",
                "stroke": "none",
            },
        },
    )
    qr = _build_qr(data, config)
    return qr.make_image(image_factory=factory).to_string(encoding="unicode")


def qr_image_to_png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def render_qr_payload(payload: str, title: str = "PayNow", config: QRConfig | None = None) -> dict[str, Any]:
    """Render payload into PNG bytes, base64 PNG and SVG markup."""

    image = generate_qr_image(payload, title=title, config=config)
    png_bytes = qr_image_to_png_bytes(image)
    return {
        "png_bytes": png_bytes,
        "png_base64": base64.b64encode(png_bytes).decode("ascii"),
        "svg": generate_qr_svg(payload, config=config),
    }
