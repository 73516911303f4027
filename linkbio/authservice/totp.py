"""
TOTP second factor (RFC 6238) on top of pyotp.

Secrets are base32, codes are 6 digits over 30 second steps. Verification
accepts the current step plus `valid_window` steps on either side to absorb
clock skew between server and authenticator app. A code stays reusable for
as long as it verifies; there is no replay tracking.
"""
from __future__ import annotations

import base64
import io
from typing import Optional

import pyotp
import qrcode
from qrcode.image.svg import SvgPathImage

from .contracts import ClockPort, MfaEnrollment


class TotpEngine:
    def __init__(self, *, issuer: str, clock: ClockPort, valid_window: int = 1):
        self.issuer = issuer
        self.clock = clock
        self.valid_window = valid_window

    def generate_secret(self, account_label: str) -> MfaEnrollment:
        secret = pyotp.random_base32()
        uri = pyotp.TOTP(secret).provisioning_uri(name=account_label, issuer_name=self.issuer)
        return MfaEnrollment(secret=secret, provisioning_uri=uri)

    def verify(self, secret: str, code: Optional[str], window: Optional[int] = None) -> bool:
        if not secret or not code:
            return False
        code = code.strip().replace(" ", "")
        if not code.isdigit():
            return False
        steps = self.valid_window if window is None else window
        return pyotp.TOTP(secret).verify(code, for_time=self.clock.now_utc_ts(), valid_window=steps)

    @staticmethod
    def qr_code_data_uri(uri: str) -> str:
        """Render the provisioning URI as an SVG QR code (data URI)."""
        img = qrcode.make(uri, image_factory=SvgPathImage)
        buf = io.BytesIO()
        img.save(buf)
        return "data:image/svg+xml;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
