from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Tuple, Union
from urllib.parse import urlencode

import requests

from .config import EscrowConfig
from .errors import EscrowApiError, EscrowDecodeError, EscrowTransportError
from .logger import get_logger, new_correlation_id


log = get_logger("escrow_api_client.http")

BODY_METHODS = ("POST", "PUT", "PATCH")

QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


class RequestSender(Protocol):
    def request(self, method: str, path: str, *, json_body: Any = None) -> Any:
        ...


@dataclass(frozen=True)
class ApiRequest:
    method: str
    path: str
    json_body: Any = None

    @property
    def sends_body(self) -> bool:
        return self.json_body is not None and self.method in BODY_METHODS


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def with_query(path: str, params: QueryParams) -> str:
    """
    Append a form-encoded query string to `path`.

    None values are dropped, list/tuple values repeat the key once per
    element, order is preserved.
    """
    items = params.items() if isinstance(params, Mapping) else params

    pairs = []
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(v)) for v in value)
        else:
            pairs.append((key, _query_value(value)))

    if not pairs:
        return path
    return f"{path}?{urlencode(pairs)}"


def basic_auth_header(email: str, password: str) -> str:
    token = base64.b64encode(f"{email}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class EscrowApiClient:
    def __init__(
        self,
        config: EscrowConfig,
        *,
        session: Optional[requests.Session] = None,
        user_agent: str = "escrow-api-client/0.1",
    ) -> None:
        self.config = config
        self.base_url = config.base_url
        self.timeout_seconds = config.timeout_seconds
        self.auth_header = basic_auth_header(config.email, config.password)
        # sent per request so a caller-supplied session is never modified
        self.headers: Dict[str, str] = {
            "Authorization": self.auth_header,
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": user_agent,
        }
        self.session = session or requests.Session()

    def full_url(self, path: str) -> str:
        path = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{path}"

    def request(self, method: str, path: str, *, json_body: Any = None) -> Any:
        """
        Single authenticated round trip:
        - JSON body only for POST/PUT/PATCH
        - non-2xx raises EscrowApiError carrying the status code
        - JSON responses are decoded, anything else comes back as {"message": text}
        """
        req = ApiRequest(method=method.upper(), path=path, json_body=json_body)
        cid = new_correlation_id()
        url = self.full_url(req.path)

        try:
            log.info("http_request", extra={"cid": cid, "method": req.method, "url": url})

            resp = self.session.request(
                method=req.method,
                url=url,
                headers=self.headers,
                json=req.json_body if req.sends_body else None,
                timeout=self.timeout_seconds,
            )

        except requests.RequestException as e:
            log.info("http_transport_error", extra={"cid": cid, "url": url, "err": str(e)})
            raise EscrowTransportError(f"Request failed: {req.method} {url}: {e}") from e

        log.info(
            "http_response",
            extra={"cid": cid, "method": req.method, "url": url, "status": resp.status_code},
        )

        if not 200 <= resp.status_code < 300:
            raise EscrowApiError(
                self._error_message(resp, cid),
                status_code=resp.status_code,
                response=resp,
            )

        return self._decode(resp, cid)

    def _error_message(self, resp: requests.Response, cid: str) -> str:
        message = f"API Error: {resp.status_code} - {resp.reason}"
        try:
            data = resp.json()
        except ValueError as e:
            log.info("http_error_body_not_json", extra={"cid": cid, "err": str(e)})
            return message

        if isinstance(data, dict) and data.get("error"):
            message = f"API Error: {resp.status_code} - {data['error']}"
        return message

    def _decode(self, resp: requests.Response, cid: str) -> Any:
        content_type = resp.headers.get("Content-Type", "")
        if "application/json" in content_type and resp.text.strip():
            try:
                return resp.json()
            except ValueError as e:
                raise EscrowDecodeError(f"Invalid JSON response: {e}", response=resp) from e

        log.info("http_non_json_response", extra={"cid": cid, "content_type": content_type})
        return {"message": resp.text}
