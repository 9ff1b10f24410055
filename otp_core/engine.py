#!/usr/bin/env python3
"""
engine.py — OTP engine: HOTP primitive (RFC 4226) và TOTP (RFC 6238).

Mục tiêu:
- Hàm thuần (pure functions): không đọc/ghi file, không giữ state.
- generate() là hàm "total": luôn trả về TotpResult, không bao giờ raise.
  Caller (CLI, REST API, UI) tự quyết định cách hiển thị lỗi.
- hotp() / totp() raise lỗi có kiểu (InvalidSecret) cho caller cần exception.
- Giá trị mặc định cố định theo RFC (30 giây, 6 chữ số, offset 0); biến môi
  trường chỉ ảnh hưởng CLI và REST API.

Thuật toán:
    counter = floor((unix_time + offset) / time_step)
    digest  = HMAC-SHA1(key = Base32-decode(secret), msg = counter as 8 bytes BE)
    code    = DynamicTruncate(digest) mod 10^digits, zero-padded
"""

import hashlib
import hmac
import logging
import struct
import time
from typing import Optional, Tuple

from . import base32
from .config import DEFAULT_TIME_OFFSET, RFC_DIGITS, RFC_TIME_STEP
from .errors import GenerationFailed, InvalidEncoding, InvalidSecret
from .models import TotpResult

logger = logging.getLogger(__name__)


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Chuyển integer (counter) sang 8-byte big-endian như RFC4226 yêu cầu.

    Ví dụ: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        struct.error: counter âm hoặc vượt quá 64 bit
    """
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Áp dụng dynamic truncation theo RFC4226.

    - offset = last_byte & 0x0F
    - đọc 4 bytes big-endian từ offset
    - clear MSB (& 0x7FFFFFFF) để tránh nhập nhằng dấu
    """
    offset = hmac_digest[-1] & 0x0F
    return struct.unpack(">I", hmac_digest[offset:offset + 4])[0] & 0x7FFFFFFF


def decode_secret(secret_b32: str) -> bytes:
    """
    Base32-decode secret thành key bytes cho HMAC.

    Raises:
        InvalidSecret: secret rỗng, chứa ký tự ngoài Base32 (cause = InvalidEncoding)
            hoặc decode ra 0 byte
    """
    if not secret_b32 or not secret_b32.strip():
        raise InvalidSecret("Secret is empty")
    try:
        key = base32.decode(secret_b32.strip())
    except InvalidEncoding as e:
        raise InvalidSecret(f"Invalid Base32 secret: {e}", cause=e) from e
    if not key:
        raise InvalidSecret("Secret decodes to zero bytes")
    return key


def counter_at(timestamp: int, time_offset: int = DEFAULT_TIME_OFFSET,
               time_step: int = RFC_TIME_STEP) -> int:
    """TimeCounter = floor((timestamp + time_offset) / time_step)."""
    return (int(timestamp) + int(time_offset)) // time_step


def hotp(secret_b32: str, counter: int, digits: int = RFC_DIGITS) -> str:
    """
    Sinh mã HOTP theo RFC4226.

    Steps:
    1. Base32-decode secret -> raw key bytes
    2. Message = 8-byte counter (big-endian)
    3. HMAC-SHA1(key, message)
    4. Dynamic truncate -> dbc
    5. otp = dbc % 10^digits, zero-pad đủ "digits" chữ số

    Raises:
        InvalidSecret: nếu secret Base32 không hợp lệ
        ValueError: digits < 1
    """
    if digits < 1:
        raise ValueError(f"digits must be positive, got {digits}")
    key = decode_secret(secret_b32)
    msg = int_to_bytes(counter)
    digest = hmac.new(key, msg, hashlib.sha1).digest()
    dbc = dynamic_truncate(digest)
    return str(dbc % (10 ** digits)).zfill(digits)


def time_remaining(time_step: int = RFC_TIME_STEP, timestamp: Optional[int] = None,
                   time_offset: int = 0) -> int:
    """
    Số giây còn lại của mã hiện tại: time_step - (t mod time_step).

    Luôn nằm trong [1, time_step]; bằng đúng time_step tại thời điểm rollover,
    lúc đó caller cần gọi lại generate().
    """
    if timestamp is None:
        timestamp = int(time.time())
    return time_step - ((int(timestamp) + int(time_offset)) % time_step)


def totp(
    secret_b32: str,
    timestamp: int = None,
    timestep: int = RFC_TIME_STEP,
    t0: int = 0,
    digits: int = RFC_DIGITS,
) -> Tuple[str, int]:
    """
    Sinh mã TOTP theo RFC6238 = HOTP(counter = floor((now + t0) / X)).

    ``t0`` ở đây là clock offset (giây) cộng vào thời gian hiện tại.

    Trả về:
        (code, remaining_seconds)

    Raises:
        InvalidSecret, ValueError
    """
    if timestamp is None:
        timestamp = int(time.time())
    counter = counter_at(timestamp, t0, timestep)
    code = hotp(secret_b32, counter, digits)
    return code, time_remaining(timestep, timestamp, t0)


def generate(
    secret: str,
    time_offset: int = DEFAULT_TIME_OFFSET,
    time_step: int = RFC_TIME_STEP,
    digits: int = RFC_DIGITS,
    timestamp: Optional[int] = None,
) -> TotpResult:
    """
    Sinh mã TOTP hiện tại, không bao giờ raise.

    Arguments:
        secret: Base32 secret (không phân biệt hoa thường, chấp nhận padding)
        time_offset: giây cộng thêm vào đồng hồ để bù lệch (clock drift)
        time_step: TOTP period (giây)
        digits: số chữ số của mã
        timestamp: epoch seconds; None -> time.time()

    Trả về:
        TotpResult(code=...) khi thành công, TotpResult(error=GenerationFailed)
        khi thất bại. error.cause giữ lỗi gốc (vd. InvalidSecret).
    """
    if timestamp is None:
        timestamp = int(time.time())
    try:
        if time_step <= 0:
            raise ValueError(f"time_step must be positive, got {time_step}")
        counter = counter_at(timestamp, time_offset, time_step)
        code = hotp(secret, counter, digits)
    except Exception as e:
        logger.warning("TOTP generation failed: %s", e)
        return TotpResult(error=GenerationFailed(f"TOTP generation failed: {e}", cause=e))
    logger.debug("TOTP: time=%s, offset=%s, counter=%s", timestamp, time_offset, counter)
    return TotpResult(code=code, counter=counter)
