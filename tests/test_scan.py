import pytest

from otp_core.errors import InvalidFormat, NoAccountsFound, NoQrCodeFound, UnsupportedScheme
from otp_core.models import Account, ScanResult
from otp_core.scan import scan_image, scan_text
from tests.helpers import account_record, migration_uri


@pytest.mark.parametrize("text", [None, "", "   \n"])
def test_empty_scan_is_no_qr_code(text):
    with pytest.raises(NoQrCodeFound):
        scan_text(text)


def test_otpauth_uri_gives_single_account():
    result = scan_text("otpauth://totp/Example:alice@example.com?secret=JBSWY3DPEHPK3PXP&issuer=Example")
    assert not result.is_ambiguous
    assert result.default == Account("JBSWY3DPEHPK3PXP", "Example", "Example:alice@example.com")


def test_bare_secret_with_surrounding_whitespace():
    result = scan_text("  jbswy3dpehpk3pxp\n")
    assert result.default.secret == "JBSWY3DPEHPK3PXP"


def test_migration_export_surfaces_all_candidates():
    payload = account_record(b"\x01" * 10, name="alice", issuer="GitHub") + account_record(
        b"\x02" * 10, name="bob"
    )
    result = scan_text(migration_uri(payload))
    assert result.is_ambiguous
    assert result.default.label == "alice"
    assert result.select(1).label == "bob"
    assert result.candidates() == ["1. GitHub (alice)", "2. bob"]


def test_select_out_of_range():
    result = scan_text("JBSWY3DP")
    with pytest.raises(IndexError):
        result.select(1)
    with pytest.raises(IndexError):
        result.select(-1)


def test_scan_result_requires_accounts():
    with pytest.raises(NoAccountsFound):
        ScanResult.of([])


def test_errors_propagate():
    with pytest.raises(UnsupportedScheme):
        scan_text("https://example.com?secret=ABC")
    with pytest.raises(InvalidFormat):
        scan_text("hello world")


def test_scan_image_uses_external_decoder():
    calls = []

    def decoder(pixels, width, height):
        calls.append((pixels, width, height))
        return "otpauth://totp/alice?secret=MZXW6YTBOI"

    result = scan_image(decoder, b"\x00" * 16, 2, 2)
    assert calls == [(b"\x00" * 16, 2, 2)]
    assert result.default.secret == "MZXW6YTBOI"


@pytest.mark.parametrize("decoded", [None, ""])
def test_scan_image_without_qr_code(decoded):
    with pytest.raises(NoQrCodeFound):
        scan_image(lambda pixels, width, height: decoded, b"", 0, 0)


@pytest.mark.parametrize("data", [123, b"JBSWY3DP", ["JBSWY3DP"]])
def test_non_text_scan_is_invalid_format(data):
    with pytest.raises(InvalidFormat):
        scan_text(data)
