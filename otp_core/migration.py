"""
migration.py — Decoder for authenticator "migration" exports.

Payload shape (``otpauth-migration://offline?data=<Base64>``)::

    0x0A <len> <account record>      repeated, top-level field 1
        0x0A <len> <secret bytes>    field 1
        0x12 <len> <name>            field 2
        0x1A <len> <issuer>          field 3
        <tag> <len> <bytes>          anything else: skipped

Only a constrained subset of protobuf wire format is understood: every
length prefix is a single byte (0-255), which covers observed exports. This
is not a general protobuf decoder.

All slicing is bounded by the real buffer. A record whose declared length
overruns the buffer is parsed over the bytes that are actually there; a field
that overruns its record ends that record and is discarded. Neither case
raises, and both loops advance at least one byte per iteration.
"""

import base64
import binascii
import logging
from typing import List, Optional
from urllib.parse import parse_qs, urlsplit

from . import base32
from .errors import InvalidFormat, NoAccountsFound, NoDataField
from .models import Account

logger = logging.getLogger(__name__)

TAG_ACCOUNT = 0x0A    # outer: field 1, wire type 2
TAG_SECRET = 0x0A     # inner: field 1, wire type 2
TAG_NAME = 0x12       # inner: field 2, wire type 2
TAG_ISSUER = 0x1A     # inner: field 3, wire type 2


def _decode_text(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


class MigrationPayloadParser:
    """
    Walk a migration buffer and collect accounts in encounter order.

    A parser instance is single-use and holds no state beyond the buffer::

        accounts = MigrationPayloadParser(raw).parse()
    """

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.truncated = False

    def parse(self) -> List[Account]:
        data = self.data
        accounts = []
        i = 0
        while i < len(data):
            if data[i] != TAG_ACCOUNT:
                # tolerate unexpected framing
                i += 1
                continue
            if i + 1 >= len(data):
                logger.warning("Migration payload ends after record tag at offset %d", i)
                self.truncated = True
                break
            length = data[i + 1]
            start = i + 2
            end = start + length
            if end > len(data):
                logger.warning(
                    "Record at offset %d declares %d bytes, only %d remain",
                    i, length, len(data) - start,
                )
                self.truncated = True
            account = self.parse_account(data[start:end])
            if account is not None:
                accounts.append(account)
            i = end
        logger.debug("Decoded %d account(s) from migration payload", len(accounts))
        return accounts

    def parse_account(self, record: bytes) -> Optional[Account]:
        """Parse one account record; None if it carries no secret."""
        secret = ""
        name = ""
        issuer = ""
        i = 0
        while i < len(record):
            tag = record[i]
            if i + 1 >= len(record):
                logger.warning("Field tag 0x%02X has no length byte", tag)
                self.truncated = True
                break
            length = record[i + 1]
            start = i + 2
            end = start + length
            if end > len(record):
                logger.warning(
                    "Field tag 0x%02X declares %d bytes, only %d remain; dropping it",
                    tag, length, len(record) - start,
                )
                self.truncated = True
                break
            value = record[start:end]
            if tag == TAG_SECRET:
                secret = base32.encode(value)
            elif tag == TAG_NAME:
                name = _decode_text(value)
            elif tag == TAG_ISSUER:
                issuer = _decode_text(value)
            else:
                logger.debug("Skipping unknown field tag 0x%02X (%d bytes)", tag, length)
            i = end

        if not secret:
            logger.warning("Dropping migration record without secret (name=%r)", name)
            return None
        return Account(secret=secret, issuer=issuer, label=name)


def decode_migration_payload(raw: bytes) -> List[Account]:
    """Decode a raw (already Base64-decoded) migration buffer. Never raises."""
    return MigrationPayloadParser(raw).parse()


def decode_data_field(data: str) -> bytes:
    """
    Base64-decode the ``data`` query value.

    Query decoding turns '+' into ' ', so spaces are mapped back; missing
    padding is tolerated.
    """
    cleaned = data.strip().replace(" ", "+")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidFormat(f"Migration data is not valid Base64: {e}", cause=e) from e


def parse_migration_uri(uri: str) -> List[Account]:
    """
    Giải mã URI ``otpauth-migration://`` thành danh sách account.

    Raises:
        InvalidFormat: URI hoặc Base64 không hợp lệ
        NoDataField: không có tham số ``data``
        NoAccountsFound: payload giải mã ra danh sách rỗng
    """
    try:
        query = parse_qs(urlsplit(uri).query)
    except ValueError as e:
        raise InvalidFormat(f"Unparseable migration URI: {e}", cause=e) from e

    data = (query.get("data") or [""])[0]
    if not data:
        raise NoDataField("No data in migration QR code")

    raw = decode_data_field(data)
    logger.debug("Migration data: %d bytes", len(raw))
    accounts = decode_migration_payload(raw)
    if not accounts:
        raise NoAccountsFound("No TOTP accounts found in migration data")
    return accounts
