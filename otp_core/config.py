"""
config.py — Defaults and environment overrides.

RFC_* are the fixed RFC 6238 defaults used by the OTP engine. DEFAULT_* may
be overridden from the environment and only change what the CLI and the
HTTP API fall back to.
"""

import os

# --- Config / constants ----------------------------------------------------
RFC_DIGITS = 6
RFC_TIME_STEP = 30                                          # seconds

DEFAULT_DIGITS = int(os.getenv("OTP_DIGITS", RFC_DIGITS))
DEFAULT_TIME_STEP = int(os.getenv("OTP_TIME_STEP", RFC_TIME_STEP))
DEFAULT_TIME_OFFSET = 0                                     # clock drift, seconds

SETTINGS_FILE = os.getenv("OTP_SETTINGS_FILE", "otp_settings.json")

COPY_FORMAT_TOTP_FIRST = "totp-first"
COPY_FORMAT_PASSWORD_FIRST = "password-first"
COPY_FORMATS = (COPY_FORMAT_TOTP_FIRST, COPY_FORMAT_PASSWORD_FIRST)

MIGRATION_SCHEME = "otpauth-migration"
OTPAUTH_SCHEME = "otpauth"

# HTTP API
API_HOST = os.getenv("OTP_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("OTP_API_PORT", 5000))
API_DEBUG = os.getenv("OTP_API_DEBUG", "").lower() in ("1", "true", "yes", "on")
