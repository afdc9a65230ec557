from __future__ import annotations

from typing import Any, Dict, Union

from .client import RequestSender
from .transactions import TransactionId

ItemId = Union[int, str]


class Milestones:
    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def perform_item_action(
        self,
        transaction_id: TransactionId,
        item_id: ItemId,
        action: Dict[str, Any],
    ) -> Any:
        return self._sender.request(
            "PATCH",
            f"/transaction/{transaction_id}/item/{item_id}",
            json_body=action,
        )

    def get_item_web_link(self, transaction_id: TransactionId, item_id: ItemId, action: str) -> Any:
        return self._sender.request(
            "GET",
            f"/transaction/{transaction_id}/item/{item_id}/web_link/{action}",
        )
