"""otpauth:// URI parsing (single account)."""
import logging
import re
from urllib.parse import parse_qs, unquote, urlsplit

from . import base32
from .config import OTPAUTH_SCHEME
from .errors import InvalidFormat, MissingSecret, UnsupportedScheme
from .models import Account

logger = logging.getLogger(__name__)

_TYPE_PREFIX = re.compile(r"^/(totp|hotp)/", re.IGNORECASE)
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


def is_bare_secret(text: str) -> bool:
    """A bare secret is Base32 (optionally padded) and contains no ':'."""
    return bool(text) and ":" not in text and base32.is_base32(text)


def parse_otp_uri(uri: str) -> Account:
    """
    Parse a bare Base32 secret or an ``otpauth://totp|hotp/<label>?secret=...`` URI.

    The label is the path with its ``/totp/`` or ``/hotp/`` segment removed and
    percent-decoded; ``issuer`` is optional. The secret is always uppercased.

    Raises:
        InvalidFormat: no scheme or unparseable URI syntax
        UnsupportedScheme: scheme other than ``otpauth``
        MissingSecret: no ``secret`` query parameter
    """
    if is_bare_secret(uri):
        logger.debug("Detected plain Base32 secret")
        return Account(secret=base32.normalize(uri))

    if not uri or not _SCHEME_RE.match(uri):
        raise InvalidFormat("Not a URI: expected otpauth:// URI or Base32 secret")
    try:
        parsed = urlsplit(uri)
        query = parse_qs(parsed.query, keep_blank_values=True)
    except ValueError as e:
        raise InvalidFormat(f"Unparseable OTP URI: {e}", cause=e) from e

    if parsed.scheme != OTPAUTH_SCHEME:
        raise UnsupportedScheme(
            f"Unsupported scheme {parsed.scheme!r}: expected otpauth:// URI"
        )

    secret = (query.get("secret") or [""])[0].strip()
    if not secret:
        raise MissingSecret("No secret found in OTP URI")

    # netloc carries the otp type: otpauth://totp/Label -> netloc="totp", path="/Label"
    path = f"/{parsed.netloc}{parsed.path}" if parsed.netloc else parsed.path
    stripped = _TYPE_PREFIX.sub("", path, count=1)
    if stripped == path:
        stripped = path.lstrip("/")
    label = unquote(stripped)

    issuer = (query.get("issuer") or [""])[0]
    return Account(secret=base32.normalize(secret), issuer=issuer, label=label)
