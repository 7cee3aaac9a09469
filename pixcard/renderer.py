"""QR image renderer for Pix payment codes."""
from __future__ import annotations

import base64
import io
from typing import Any

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from PIL import Image, ImageDraw, ImageFont

ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


def generate_qr_image(data: str, title: str | None = None, *, level: str = "H", box_size: int = 10) -> Image.Image:
    """Generate QR image, optionally framed with a label under the code."""

    qr = qrcode.QRCode(version=None, error_correction=ERROR_CORRECTION_LEVELS[level], box_size=box_size, border=4)
    qr.add_data(data)
    qr.make(fit=True)

    qr_img = qr.make_image(fill_color="black", back_color="white").convert("RGBA")
    if not title:
        return qr_img
    width, height = qr_img.size

    label_height = 40
    margin = 40
    canvas_width = width + margin * 2
    canvas_height = height + margin * 2 + label_height

    canvas = Image.new("RGBA", (canvas_width, canvas_height), color="#FFFFFF")
    canvas.paste(qr_img, (margin, margin))

    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default()
    text = title.upper()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    text_x = (canvas_width - (right - left)) // 2
    text_y = margin + height + (label_height - (bottom - top)) // 2
    draw.text((text_x, text_y), text, fill="#1F2937", font=font)

    return canvas


def qr_image_to_png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def render_qr_payload(payload: str, title: str | None = None, *, level: str = "H", box_size: int = 10) -> dict[str, Any]:
    """Render payload into PNG bytes and base64 string."""

    image = generate_qr_image(payload, title=title, level=level, box_size=box_size)
    png_bytes = qr_image_to_png_bytes(image)
    return {
        "png_bytes": png_bytes,
        "png_base64": base64.b64encode(png_bytes).decode("ascii"),
    }
