from __future__ import annotations

from typing import Any, Dict, Optional

from .client import RequestSender, with_query
from .transactions import TransactionId


class Payments:
    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def _path(self, transaction_id: TransactionId, suffix: str = "") -> str:
        return f"/transaction/{transaction_id}/payment_methods{suffix}"

    def get_payment_methods(self, transaction_id: TransactionId) -> Any:
        return self._sender.request("GET", self._path(transaction_id))

    def select_payment_method(
        self,
        transaction_id: TransactionId,
        payment_method: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Any:
        return self._sender.request(
            "POST",
            self._path(transaction_id, f"/{payment_method}"),
            json_body=options or {},
        )

    def get_wire_details(self, transaction_id: TransactionId) -> Any:
        return self._sender.request("GET", self._path(transaction_id, "/wire_transfer"))

    def get_paypal_url(
        self,
        transaction_id: TransactionId,
        return_url: str,
        redirect_type: str = "manual",
    ) -> Any:
        path = with_query(
            self._path(transaction_id, "/paypal"),
            [("return_url", return_url), ("redirect_type", redirect_type)],
        )
        return self._sender.request("GET", path)
