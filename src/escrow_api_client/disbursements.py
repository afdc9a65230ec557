from __future__ import annotations

from typing import Any, Dict

from .client import RequestSender
from .transactions import TransactionId


class Disbursements:
    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def get_transaction_disbursements(self, transaction_id: TransactionId) -> Any:
        return self._sender.request("GET", f"/transaction/{transaction_id}/disbursement_methods")

    def set_disbursement_method(
        self,
        transaction_id: TransactionId,
        disbursement_data: Dict[str, Any],
    ) -> Any:
        return self._sender.request(
            "PATCH",
            f"/transaction/{transaction_id}/disbursement_methods",
            json_body=disbursement_data,
        )
