from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union

from .client import RequestSender, with_query

Amount = Union[int, float, str]


class Partner:
    """Broker endpoints: cursor-paginated listings and report tasks."""

    def __init__(self, sender: RequestSender) -> None:
        self._sender = sender

    def list_partner_transactions(
        self,
        limit: int = 10,
        next_cursor: Union[int, str] = 1,
        sort_by: str = "id",
        sort_direction: str = "desc",
        status: Optional[str] = None,
        customer_ids: Optional[Sequence[Union[int, str]]] = None,
        min_amount: Optional[Amount] = None,
        max_amount: Optional[Amount] = None,
        initiation_start_date: Optional[str] = None,
        initiation_end_date: Optional[str] = None,
    ) -> Any:
        # customer_ids is sent as customer_ids=1&customer_ids=2
        path = with_query(
            "/partner/transactions",
            [
                ("limit", limit),
                ("next_cursor", next_cursor),
                ("sort_by", sort_by),
                ("sort_direction", sort_direction),
                ("status", status),
                ("customer_ids", list(customer_ids) if customer_ids is not None else None),
                ("min_amount", min_amount),
                ("max_amount", max_amount),
                ("initiation_start_date", initiation_start_date),
                ("initiation_end_date", initiation_end_date),
            ],
        )
        return self._sender.request("GET", path)

    def list_partner_customers(
        self,
        limit: int = 10,
        next_cursor: Union[int, str] = 1,
        sort_by: str = "id",
        sort_direction: str = "desc",
    ) -> Any:
        path = with_query(
            "/partner/customers",
            [
                ("limit", limit),
                ("next_cursor", next_cursor),
                ("sort_by", sort_by),
                ("sort_direction", sort_direction),
            ],
        )
        return self._sender.request("GET", path)

    def generate_report(self, report_data: Dict[str, Any]) -> Any:
        return self._sender.request("POST", "/partner/reports", json_body=report_data)

    def list_reports(self) -> Any:
        return self._sender.request("GET", "/partner/reports")

    def download_report(self, task_id: Union[int, str], as_json: bool = False) -> Any:
        path = f"/partner/reports/{task_id}/download"
        if as_json:
            path = with_query(path, [("as_json", True)])
        return self._sender.request("GET", path)
