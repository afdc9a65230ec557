import base64
import json

import pytest
import requests

from escrow_api_client.client import EscrowApiClient, with_query
from escrow_api_client.config import EscrowConfig
from escrow_api_client.errors import EscrowApiError, EscrowDecodeError, EscrowTransportError


class FakeResp:
    def __init__(self, status_code: int, text: str = "", headers=None, json_obj=None, reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self._json_obj = json_obj
        self.text = text if text or json_obj is None else json.dumps(json_obj)
        self.headers = headers if headers is not None else {"Content-Type": "application/json"}

    def json(self):
        if self._json_obj is None:
            raise ValueError("no json")
        return self._json_obj


def make_client(**overrides) -> EscrowApiClient:
    params = {"email": "me@example.com", "password": "s3cret", "sandbox": True}
    params.update(overrides)
    return EscrowApiClient(EscrowConfig(**params))


def capture(monkeypatch, client, resp):
    calls = []

    def fake_request(*args, **kwargs):
        calls.append(kwargs)
        return resp

    monkeypatch.setattr(client.session, "request", fake_request)
    return calls


@pytest.mark.parametrize("method", ["GET", "POST", "PATCH", "PUT", "DELETE"])
def test_url_is_host_version_and_path_for_every_verb(monkeypatch, method):
    client = make_client()
    calls = capture(monkeypatch, client, FakeResp(200, json_obj={}))

    client.request(method, "/customer/me")

    assert calls[0]["url"] == "https://api.escrow-sandbox.com/2017-09-01/customer/me"
    assert calls[0]["method"] == method


def test_production_host_selected_when_not_sandbox():
    client = make_client(sandbox=False)
    assert client.full_url("/transaction") == "https://api.escrow.com/2017-09-01/transaction"
    assert client.full_url("transaction") == "https://api.escrow.com/2017-09-01/transaction"


def test_basic_auth_and_json_headers_sent_per_request(monkeypatch):
    client = make_client()
    calls = capture(monkeypatch, client, FakeResp(200, json_obj={}))
    expected = "Basic " + base64.b64encode(b"me@example.com:s3cret").decode()

    client.request("GET", "/customer/me")

    assert client.auth_header == expected
    headers = calls[0]["headers"]
    assert headers["Authorization"] == expected
    assert headers["Accept"] == "application/json"
    assert headers["Content-Type"] == "application/json"


def test_caller_session_headers_left_untouched(monkeypatch):
    session = requests.Session()
    before = dict(session.headers)
    client = EscrowApiClient(EscrowConfig(email="a@b.co", password="x"), session=session)
    capture(monkeypatch, client, FakeResp(200, json_obj={}))

    client.request("GET", "/customer/me")

    assert client.session is session
    assert dict(session.headers) == before
    assert "Authorization" not in session.headers


def test_body_only_sent_for_write_verbs(monkeypatch):
    client = make_client()
    calls = capture(monkeypatch, client, FakeResp(200, json_obj={"ok": True}))

    client.request("GET", "/customer/me", json_body={"ignored": True})
    client.request("patch", "/transaction/1", json_body={"action": "agree"})
    client.request("POST", "/transaction/1/payment_methods/wire_transfer", json_body={})

    assert calls[0]["json"] is None
    assert calls[1]["method"] == "PATCH"
    assert calls[1]["json"] == {"action": "agree"}
    assert calls[2]["json"] == {}


def test_json_response_is_decoded(monkeypatch):
    client = make_client()
    payload = {"id": 42, "parties": [{"role": "buyer"}], "nested": {"x": [1, 2.5, None]}}
    capture(monkeypatch, client, FakeResp(200, json_obj=payload, headers={"Content-Type": "application/json; charset=utf-8"}))

    assert client.request("GET", "/transaction/42") == payload


def test_non_json_response_wrapped_in_message_envelope(monkeypatch):
    client = make_client()
    capture(monkeypatch, client, FakeResp(200, text="id,amount\n1,10", headers={"Content-Type": "text/csv"}))

    assert client.request("GET", "/partner/reports/7/download") == {"message": "id,amount\n1,10"}


def test_empty_json_body_wrapped(monkeypatch):
    client = make_client()
    capture(monkeypatch, client, FakeResp(204, text="", reason="No Content"))

    assert client.request("PATCH", "/transaction/1", json_body={"action": "cancel"}) == {"message": ""}


def test_error_uses_server_message_when_json(monkeypatch):
    client = make_client()
    resp = FakeResp(403, json_obj={"error": "Forbidden for this customer"}, reason="Forbidden")
    capture(monkeypatch, client, resp)

    with pytest.raises(EscrowApiError) as exc:
        client.request("GET", "/customer/123")

    assert exc.value.status_code == 403
    assert exc.value.message == "API Error: 403 - Forbidden for this customer"
    assert exc.value.response is resp


@pytest.mark.parametrize("status", [400, 401, 404, 422, 500, 503])
def test_error_falls_back_to_status_line_when_body_not_json(monkeypatch, status):
    client = make_client()
    capture(monkeypatch, client, FakeResp(status, text="<html>nope</html>", headers={"Content-Type": "text/html"}, reason="Nope"))

    with pytest.raises(EscrowApiError) as exc:
        client.request("GET", "/transaction")

    assert exc.value.status_code == status
    assert str(exc.value) == f"API Error: {status} - Nope"


def test_error_json_without_error_field_uses_status_line(monkeypatch):
    client = make_client()
    capture(monkeypatch, client, FakeResp(400, json_obj={"errors": {"amount": "bad"}}, reason="Bad Request"))

    with pytest.raises(EscrowApiError) as exc:
        client.request("POST", "/transaction", json_body={})

    assert exc.value.message == "API Error: 400 - Bad Request"


def test_connection_failure_raises_transport_error_without_status(monkeypatch):
    client = make_client()
    calls = {"n": 0}

    def fake_request(*args, **kwargs):
        calls["n"] += 1
        raise requests.ConnectionError("dns failure")

    monkeypatch.setattr(client.session, "request", fake_request)

    with pytest.raises(EscrowTransportError) as exc:
        client.request("GET", "/customer/me")

    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, requests.ConnectionError)
    # no retries
    assert calls["n"] == 1


def test_timeout_forwarded_from_config(monkeypatch):
    client = make_client(timeout_seconds=2.5)
    calls = capture(monkeypatch, client, FakeResp(200, json_obj={}))

    client.request("GET", "/customer/me")

    assert calls[0]["timeout"] == 2.5


def test_with_query_repeats_list_values_and_skips_none():
    path = with_query(
        "/partner/transactions",
        [("limit", 5), ("status", None), ("customer_ids", [1, 2]), ("as_json", True)],
    )
    assert path == "/partner/transactions?limit=5&customer_ids=1&customer_ids=2&as_json=true"


def test_with_query_encodes_values_and_leaves_bare_path():
    assert with_query("/x", {"return_url": "https://a.b/c?d=1"}) == "/x?return_url=https%3A%2F%2Fa.b%2Fc%3Fd%3D1"
    assert with_query("/x", {"a": None}) == "/x"


def real_response(status_code: int, body: bytes, content_type: str = "application/json", reason: str = "OK"):
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason
    resp._content = body
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = content_type
    return resp


@pytest.mark.parametrize(
    "value",
    [
        {"id": 7, "items": [{"schedule": [{"amount": "10.00"}]}], "is_draft": False},
        [1, "two", None, {"three": 3.5}],
        "plain string",
        42,
        True,
        None,
    ],
)
def test_json_body_decodes_to_encoded_value(monkeypatch, value):
    client = make_client()
    capture(monkeypatch, client, real_response(200, json.dumps(value).encode("utf-8")))

    assert client.request("GET", "/transaction/7") == value


def test_invalid_json_on_success_raises_decode_error_without_status(monkeypatch):
    client = make_client()
    resp = real_response(200, b"{not json")
    capture(monkeypatch, client, resp)

    with pytest.raises(EscrowDecodeError) as exc:
        client.request("GET", "/transaction/7")

    assert not isinstance(exc.value, EscrowApiError)
    assert exc.value.status_code is None
    assert exc.value.response is resp
    assert isinstance(exc.value.__cause__, ValueError)


def test_real_error_response_keeps_status_when_body_not_json(monkeypatch):
    client = make_client()
    capture(monkeypatch, client, real_response(502, b"<html>bad gateway</html>", "text/html", reason="Bad Gateway"))

    with pytest.raises(EscrowApiError) as exc:
        client.request("GET", "/transaction")

    assert exc.value.status_code == 502
    assert exc.value.message == "API Error: 502 - Bad Gateway"
