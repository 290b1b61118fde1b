"""QR code rendering for reward tokens."""

from __future__ import annotations

import base64
import io
from urllib.parse import urlencode

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from campustour.core.config import settings
from campustour.core.reward_policies import REDEEM_PATH


def build_redeem_url(qr_token: str, client_origin: str | None = None) -> str:
    """URL the staff scanner opens: <client-origin>/redeem?qrToken=<token>."""
    origin = (client_origin or settings.client_origin).rstrip("/")
    return f"{origin}{REDEEM_PATH}?{urlencode({'qrToken': qr_token})}"


def render_qr_data_url(payload: str) -> str:
    """Encode ``payload`` as a PNG QR code and return it as a data URL."""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=8, border=4)
    qr.add_data(payload)
    qr.make(fit=True)
    image = qr.make_image()

    buffer = io.BytesIO()
    image.save(buffer)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def reward_qr_code_url(qr_token: str) -> str:
    return render_qr_data_url(build_redeem_url(qr_token))
