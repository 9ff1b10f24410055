import pytest

from otp_backend.app import app as flask_app
from tests.helpers import account_record, migration_uri


@pytest.fixture()
def client():
    flask_app.config.update(TESTING=True)
    return flask_app.test_client()


def test_index_lists_endpoints(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "POST /api/totp" in response.get_json()["endpoints"]


def test_totp(client, rfc_secret, freeze_time):
    freeze_time(59)
    response = client.post("/api/totp", json={"secret": rfc_secret})
    assert response.status_code == 200
    assert response.get_json() == {"code": "287082", "counter": 1, "remaining": 1, "period": 30}


def test_totp_with_offset_and_digits(client, rfc_secret, freeze_time):
    freeze_time(1111111079)
    response = client.post("/api/totp", json={"secret": rfc_secret, "time_offset": 30, "digits": 8})
    assert response.get_json()["code"] == "07081804"


def test_totp_invalid_secret(client):
    response = client.post("/api/totp", json={"secret": "not base32!"})
    assert response.status_code == 400
    assert response.get_json()["kind"] == "GenerationFailed"


@pytest.mark.parametrize(
    "body",
    [None, {}, {"secret": ""}],
)
def test_totp_requires_secret(client, body):
    response = client.post("/api/totp", json=body)
    assert response.status_code == 400


def test_totp_rejects_non_integer_period(client, rfc_secret):
    response = client.post("/api/totp", json={"secret": rfc_secret, "period": "soon"})
    assert response.status_code == 400


def test_scan_otpauth(client):
    response = client.post(
        "/api/scan",
        json={"payload": "otpauth://totp/Example:alice@example.com?secret=JBSWY3DPEHPK3PXP&issuer=Example"},
    )
    data = response.get_json()
    assert response.status_code == 200
    assert data["ambiguous"] is False
    assert data["selected"] == {
        "secret": "JBSWY3DPEHPK3PXP",
        "issuer": "Example",
        "label": "Example:alice@example.com",
    }


def test_scan_migration_with_selection(client):
    payload = account_record(b"\x01" * 10, name="alice", issuer="GitHub") + account_record(
        b"\x02" * 10, name="bob"
    )
    uri = migration_uri(payload)

    data = client.post("/api/scan", json={"payload": uri}).get_json()
    assert data["ambiguous"] is True
    assert [a["label"] for a in data["accounts"]] == ["alice", "bob"]
    assert data["selected"]["label"] == "alice"
    assert data["candidates"] == ["1. GitHub (alice)", "2. bob"]

    data = client.post("/api/scan", json={"payload": uri, "select": 2}).get_json()
    assert data["selected"]["label"] == "bob"

    response = client.post("/api/scan", json={"payload": uri, "select": 3})
    assert response.status_code == 400


@pytest.mark.parametrize(
    "payload, kind",
    [
        (None, "NoQrCodeFound"),
        ("https://example.com?secret=ABC", "UnsupportedScheme"),
        ("otpauth://totp/X", "MissingSecret"),
        ("otpauth-migration://offline", "NoDataField"),
        (123, "InvalidFormat"),
        ({"secret": "JBSWY3DP"}, "InvalidFormat"),
    ],
)
def test_scan_errors_carry_kind(client, payload, kind):
    response = client.post("/api/scan", json={"payload": payload})
    assert response.status_code == 400
    assert response.get_json()["kind"] == kind


def test_scan_requires_json(client):
    response = client.post("/api/scan", data="payload", content_type="text/plain")
    assert response.status_code == 400


def test_remaining(client, freeze_time):
    freeze_time(65)
    assert client.get("/api/remaining?period=30").get_json() == {"remaining": 25, "period": 30}
    assert client.get("/api/remaining?period=0").status_code == 400
