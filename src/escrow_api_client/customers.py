from __future__ import annotations

from typing import Any, Union

from .client import RequestSender


class Customers:
    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def get_my_profile(self) -> Any:
        return self._sender.request("GET", "/customer/me")

    def get_customer(self, customer_id: Union[int, str]) -> Any:
        return self._sender.request("GET", f"/customer/{customer_id}")

    def get_api_keys(self) -> Any:
        return self._sender.request("GET", "/customer/me/api_key")

    def create_api_key(self, name: str) -> Any:
        return self._sender.request("POST", "/customer/me/api_key", json_body={"name": name})

    def get_disbursement_methods(self) -> Any:
        return self._sender.request("GET", "/customer/me/disbursement_methods")

    def get_webhooks(self) -> Any:
        return self._sender.request("GET", "/customer/me/webhook")

    def create_webhook(self, url: str) -> Any:
        return self._sender.request("POST", "/customer/me/webhook", json_body={"url": url})
