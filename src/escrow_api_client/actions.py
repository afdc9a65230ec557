"""Payload builders for transaction creation and the PATCH actions the API accepts."""

from __future__ import annotations

from typing import Any, Dict

from .utils import Number, days_to_seconds, format_amount


INSPECTION_PERIOD_SECONDS = days_to_seconds(3)
ITEM_TYPE = "general_merchandise"
FEE_TYPE = "escrow"


def basic_transaction(
    buyer_email: str,
    seller_email: str,
    item_title: str,
    item_description: str,
    amount: Number,
    currency: str = "usd",
) -> Dict[str, Any]:
    """Two parties, one item, one payment, escrow fee split 50/50."""
    return {
        "description": f"Sale of {item_title}",
        "currency": currency,
        "parties": [
            {"customer": buyer_email, "role": "buyer"},
            {"customer": seller_email, "role": "seller"},
        ],
        "items": [
            {
                "title": item_title,
                "description": item_description,
                "type": ITEM_TYPE,
                "inspection_period": INSPECTION_PERIOD_SECONDS,
                "quantity": 1,
                "schedule": [
                    {
                        "amount": format_amount(amount),
                        "payer_customer": buyer_email,
                        "beneficiary_customer": seller_email,
                    }
                ],
                "fees": [
                    {"type": FEE_TYPE, "payer_customer": buyer_email, "split": "0.5"},
                    {"type": FEE_TYPE, "payer_customer": seller_email, "split": "0.5"},
                ],
            }
        ],
    }


def agree() -> Dict[str, Any]:
    return {"action": "agree"}


def ship(carrier: str, tracking_id: str) -> Dict[str, Any]:
    return {
        "action": "ship",
        "shipping_information": {
            "tracking_information": {
                "carrier": carrier,
                "tracking_id": tracking_id,
            },
        },
    }


def accept() -> Dict[str, Any]:
    return {"action": "accept"}


def reject(reason: str) -> Dict[str, Any]:
    return {
        "action": "reject",
        "rejection_information": {"rejection_reason": reason},
    }


def cancel() -> Dict[str, Any]:
    return {"action": "cancel"}
