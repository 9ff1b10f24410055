"""
otp_core package
================

Sinh mã TOTP (RFC 6238) và giải mã payload QR của authenticator:
URI otpauth://, Base32 secret trần và export otpauth-migration://.

──────────────────────────────────────────────
Giải thuật cốt lõi
──────────────────────────────────────────────
- TOTP: HOTP với counter = floor((timestamp + offset) / timestep),
  mặc định timestep = 30 giây, 6 chữ số, HMAC-SHA1.
- Dynamic Truncation: lấy 4 byte từ HMAC dựa vào offset (last byte & 0x0F).
- Migration export: Base64 -> chuỗi record độ dài 1 byte, mỗi record chứa
  secret / name / issuer; secret được mã hóa lại sang Base32.

──────────────────────────────────────────────
Ví dụ sử dụng nhanh
──────────────────────────────────────────────
>>> from otp_core import scan_text, generate
>>> result = scan_text("otpauth://totp/Example:alice@example.com?secret=JBSWY3DPEHPK3PXP&issuer=Example")
>>> account = result.default
>>> generate(account.secret).code  # doctest: +SKIP
'123456'
"""

from .base32 import decode as base32_decode, encode as base32_encode
from .errors import (
    GenerationFailed,
    InvalidEncoding,
    InvalidFormat,
    InvalidSecret,
    MissingSecret,
    NoAccountsFound,
    NoDataField,
    NoQrCodeFound,
    OtpError,
    UnsupportedScheme,
)
from .migration import MigrationPayloadParser, decode_migration_payload, parse_migration_uri
from .models import Account, ScanResult, TotpResult
from .scan import scan_image, scan_text
from .engine import dynamic_truncate, generate, hotp, time_remaining, totp
from .uri import parse_otp_uri

__all__ = [
    "Account",
    "GenerationFailed",
    "InvalidEncoding",
    "InvalidFormat",
    "InvalidSecret",
    "MigrationPayloadParser",
    "MissingSecret",
    "NoAccountsFound",
    "NoDataField",
    "NoQrCodeFound",
    "OtpError",
    "ScanResult",
    "TotpResult",
    "UnsupportedScheme",
    "base32_decode",
    "base32_encode",
    "decode_migration_payload",
    "dynamic_truncate",
    "generate",
    "hotp",
    "parse_migration_uri",
    "parse_otp_uri",
    "scan_image",
    "scan_text",
    "time_remaining",
    "totp",
]
