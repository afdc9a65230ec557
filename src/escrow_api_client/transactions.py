from __future__ import annotations

from typing import Any, Dict, Union

from .client import RequestSender, with_query

TransactionId = Union[int, str]


class Transactions:
    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def list_transactions(
        self,
        page: int = 1,
        per_page: int = 10,
        sort_by: str = "id",
        sort_direction: str = "desc",
    ) -> Any:
        path = with_query(
            "/transaction",
            [
                ("page", page),
                ("per_page", per_page),
                ("sort_by", sort_by),
                ("sort_direction", sort_direction),
            ],
        )
        return self._sender.request("GET", path)

    def get_transaction(self, transaction_id: TransactionId) -> Any:
        return self._sender.request("GET", f"/transaction/{transaction_id}")

    def get_transaction_by_reference(self, reference: str) -> Any:
        return self._sender.request("GET", f"/transaction/reference/{reference}")

    def create_transaction(self, transaction_data: Dict[str, Any]) -> Any:
        return self._sender.request("POST", "/transaction", json_body=transaction_data)

    def perform_action(self, transaction_id: TransactionId, action: Dict[str, Any]) -> Any:
        """PATCH an action payload (agree, ship, accept, reject, cancel, ...) onto a transaction."""
        return self._sender.request("PATCH", f"/transaction/{transaction_id}", json_body=action)

    def get_timeline(self, transaction_id: TransactionId) -> Any:
        return self._sender.request("GET", f"/transaction/{transaction_id}/timeline-entries")
