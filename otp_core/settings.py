"""
settings.py — Persisted preferences of the shell: secret, clock offset, copy format.

The file is a single JSON document. The password typed by the user is never
written here.
"""

import json
import logging
import os
import shutil
from dataclasses import asdict, dataclass

from . import base32
from .config import COPY_FORMAT_PASSWORD_FIRST, COPY_FORMATS, COPY_FORMAT_TOTP_FIRST, SETTINGS_FILE
from .engine import decode_secret

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    secret: str
    time_offset: int = 0
    copy_format: str = COPY_FORMAT_TOTP_FIRST

    @classmethod
    def create(cls, secret: str, time_offset=0, copy_format: str = COPY_FORMAT_TOTP_FIRST) -> "Settings":
        """
        Kiểm tra và chuẩn hóa input của người dùng.

        Raises:
            InvalidSecret: secret không phải Base32 hợp lệ
            ValueError: copy_format không hợp lệ, time_offset không phải số nguyên
        """
        decode_secret(secret)
        if copy_format not in COPY_FORMATS:
            raise ValueError(f"Unknown copy format {copy_format!r}, expected one of {COPY_FORMATS}")
        return cls(
            secret=base32.normalize(secret),
            time_offset=int(time_offset or 0),
            copy_format=copy_format,
        )


def save_settings(settings: Settings, path: str = SETTINGS_FILE) -> None:
    """
    Lưu settings vào file JSON.

    - Nếu file đã tồn tại, tạo backup path + ".bak".
    """
    if os.path.exists(path):
        shutil.copy2(path, path + ".bak")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(settings), f, indent=2)
        f.write("\n")
    logger.info("Settings saved to %s (secret %s...)", path, settings.secret[:4])


def load_settings(path: str = SETTINGS_FILE) -> Settings:
    """
    Đọc settings từ file JSON.

    Raises:
        FileNotFoundError: file không tồn tại
        InvalidSecret / ValueError: nội dung file không hợp lệ
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return Settings.create(
        secret=raw.get("secret", ""),
        time_offset=raw.get("time_offset", 0),
        copy_format=raw.get("copy_format", COPY_FORMAT_TOTP_FIRST),
    )


def compose_credential(code: str, password: str, copy_format: str = COPY_FORMAT_TOTP_FIRST) -> str:
    """Join code and password in the order the login form expects."""
    if copy_format == COPY_FORMAT_PASSWORD_FIRST:
        return password + code
    if copy_format == COPY_FORMAT_TOTP_FIRST:
        return code + password
    raise ValueError(f"Unknown copy format {copy_format!r}")
