"""Scan token generation and QR rendering."""

import hashlib
from typing import Callable

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from qrcode.image.svg import SvgPathImage

# Maps an email address to the opaque string encoded in the attendee's QR code
TokenGenerator = Callable[[str], str]

TOKEN_DIGEST_SIZE = 12


def email_token(email: str) -> str:
    """Derive a scan token from an email address (same email, same token)."""
    digest = hashlib.blake2b(email.strip().encode("utf-8"), digest_size=TOKEN_DIGEST_SIZE)
    return digest.hexdigest()


def render_qr_svg(data: str, box_size: int = 10, border: int = 4) -> bytes:
    """Render `data` as an SVG QR code."""
    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
        image_factory=SvgPathImage,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr.make_image().to_string()
