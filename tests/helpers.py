"""Builders for hand-made migration payloads."""
import base64
from urllib.parse import quote


def field(tag: int, value: bytes) -> bytes:
    return bytes([tag, len(value)]) + value


def account_record(secret: bytes = b"", name: str = "", issuer: str = "", extra: bytes = b"") -> bytes:
    inner = b""
    if secret:
        inner += field(0x0A, secret)
    if name:
        inner += field(0x12, name.encode("utf-8"))
    if issuer:
        inner += field(0x1A, issuer.encode("utf-8"))
    inner += extra
    return field(0x0A, inner)


def migration_uri(payload: bytes) -> str:
    data = base64.b64encode(payload).decode("ascii")
    return "otpauth-migration://offline?data=" + quote(data, safe="")
