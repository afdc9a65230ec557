from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple


class TransactionStatus(str, Enum):
    CANCELLED = "cancelled"
    DRAFT = "draft"
    PENDING_AGREEMENT = "pending_agreement"
    PENDING_PAYMENT = "pending_payment"
    PENDING_SHIPMENT = "pending_shipment"
    PENDING_ACCEPTANCE = "pending_acceptance"
    COMPLETED = "completed"


Rule = Tuple[TransactionStatus, Callable[[Mapping[str, Any]], bool]]


def _list(record: Mapping[str, Any], key: str) -> List[Dict[str, Any]]:
    return record.get(key) or []


def _status_flag(record: Mapping[str, Any], flag: str) -> bool:
    return bool((record.get("status") or {}).get(flag))


def _items(tx: Mapping[str, Any]) -> Iterable[Dict[str, Any]]:
    return _list(tx, "items")


def _all_agreed(tx: Mapping[str, Any]) -> bool:
    return all(party.get("agreed") for party in _list(tx, "parties"))


def _any_secured(tx: Mapping[str, Any]) -> bool:
    return any(
        _status_flag(entry, "secured")
        for item in _items(tx)
        for entry in _list(item, "schedule")
    )


def _any_item(tx: Mapping[str, Any], flag: str) -> bool:
    return any(_status_flag(item, flag) for item in _items(tx))


# First match wins.
STATUS_RULES: Tuple[Rule, ...] = (
    (TransactionStatus.CANCELLED, lambda tx: bool(tx.get("is_cancelled"))),
    (TransactionStatus.DRAFT, lambda tx: bool(tx.get("is_draft"))),
    (TransactionStatus.PENDING_AGREEMENT, lambda tx: not _all_agreed(tx)),
    (TransactionStatus.PENDING_PAYMENT, lambda tx: not _any_secured(tx)),
    (TransactionStatus.PENDING_SHIPMENT, lambda tx: not _any_item(tx, "shipped")),
    (TransactionStatus.PENDING_ACCEPTANCE, lambda tx: not _any_item(tx, "accepted")),
)


def transaction_status(
    transaction: Mapping[str, Any],
    rules: Tuple[Rule, ...] = STATUS_RULES,
) -> TransactionStatus:
    """Classify a decoded transaction record into its lifecycle stage."""
    for status, matches in rules:
        if matches(transaction):
            return status
    return TransactionStatus.COMPLETED
