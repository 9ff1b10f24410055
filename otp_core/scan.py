"""
scan.py — Entry point for text produced by a QR decoder.

The QR decoder itself is an external collaborator with the shape
``decode(pixels, width, height) -> str | None``; this module only decides
which parser a decoded string goes to.
"""
import logging
from typing import Callable, Optional

from . import base32
from .config import MIGRATION_SCHEME
from .errors import InvalidFormat, NoQrCodeFound, UnsupportedScheme
from .migration import parse_migration_uri
from .models import Account, ScanResult
from .uri import is_bare_secret, parse_otp_uri

logger = logging.getLogger(__name__)

QrDecoder = Callable[[bytes, int, int], Optional[str]]


def scan_text(text: Optional[str]) -> ScanResult:
    """
    Turn raw scanned text into a ScanResult.

    - ``otpauth-migration://...``: every account in the export
    - ``otpauth://...`` or a bare Base32 secret: exactly one account

    Raises:
        NoQrCodeFound: text is None or blank
        InvalidFormat: text is not a string
        plus any error from parse_otp_uri / parse_migration_uri
    """
    if text is not None and not isinstance(text, str):
        raise InvalidFormat(f"Scanned data must be text, got {type(text).__name__}")
    if text is None or not text.strip():
        raise NoQrCodeFound("No QR code found")

    if text.startswith(f"{MIGRATION_SCHEME}://"):
        logger.debug("Detected migration export payload")
        return ScanResult.of(parse_migration_uri(text))

    try:
        return ScanResult.of([parse_otp_uri(text)])
    except (InvalidFormat, UnsupportedScheme):
        # a secret with surrounding whitespace still counts as a plain secret
        candidate = text.strip()
        if is_bare_secret(candidate):
            return ScanResult.of([Account(secret=base32.normalize(candidate))])
        raise


def scan_image(decoder: QrDecoder, pixels: bytes, width: int, height: int) -> ScanResult:
    """Run the external QR decoder over a pixel buffer and scan its text."""
    text = decoder(pixels, width, height)
    if not text:
        raise NoQrCodeFound("No QR code found in image")
    return scan_text(text)
