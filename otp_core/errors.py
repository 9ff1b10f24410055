"""
errors.py — Error kinds raised by the codec, the parsers and the OTP engine.

Every error carries a stable ``kind`` string so callers (CLI, HTTP API, a UI
shell) can render a specific message without matching on class names.
"""


class OtpError(ValueError):
    """Base class for every failure raised by otp_core."""

    kind = "OtpError"

    def __init__(self, message: str = "", cause: Exception = None):
        super().__init__(message or self.kind)
        self.cause = cause


class InvalidEncoding(OtpError):
    """A Base32 string contains a character outside the alphabet."""

    kind = "InvalidEncoding"


class InvalidSecret(OtpError):
    """The secret handed to the OTP engine could not be decoded."""

    kind = "InvalidSecret"


class UnsupportedScheme(OtpError):
    kind = "UnsupportedScheme"


class MissingSecret(OtpError):
    kind = "MissingSecret"


class InvalidFormat(OtpError):
    """Unparseable URI syntax or payload; the original error is kept as cause."""

    kind = "InvalidFormat"


class NoDataField(OtpError):
    kind = "NoDataField"


class NoAccountsFound(OtpError):
    kind = "NoAccountsFound"


class GenerationFailed(OtpError):
    """TOTP generation failed (bad secret, bad parameters, HMAC failure)."""

    kind = "GenerationFailed"


class NoQrCodeFound(OtpError):
    """The external QR decoder produced nothing."""

    kind = "NoQrCodeFound"
