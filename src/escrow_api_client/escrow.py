from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from . import actions
from .client import EscrowApiClient
from .config import EscrowConfig
from .customers import Customers
from .disbursements import Disbursements
from .milestones import Milestones
from .partner import Partner
from .payments import Payments
from .status import transaction_status
from .transactions import TransactionId, Transactions
from .utils import Number


class EscrowClient:
    """
    All resource facades over one shared EscrowApiClient, plus shortcuts for
    the common transaction lifecycle actions.
    """

    def __init__(
        self,
        config: EscrowConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.api = EscrowApiClient(config, session=session)

        self.customers = Customers(self.api)
        self.transactions = Transactions(self.api)
        self.payments = Payments(self.api)
        self.disbursements = Disbursements(self.api)
        self.milestones = Milestones(self.api)
        self.partner = Partner(self.api)

    transaction_status = staticmethod(transaction_status)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        dotenv_path: Optional[str] = None,
        load_env_file: bool = True,
        session: Optional[requests.Session] = None,
    ) -> "EscrowClient":
        config = EscrowConfig.from_env(
            environ,
            dotenv_path=dotenv_path,
            load_env_file=load_env_file,
        )
        return cls(config, session=session)

    def create_basic_transaction(
        self,
        buyer_email: str,
        seller_email: str,
        item_title: str,
        item_description: str,
        amount: Number,
        currency: str = "usd",
    ) -> Any:
        payload = actions.basic_transaction(
            buyer_email,
            seller_email,
            item_title,
            item_description,
            amount,
            currency,
        )
        return self.transactions.create_transaction(payload)

    def agree_to_transaction(self, transaction_id: TransactionId) -> Any:
        return self.transactions.perform_action(transaction_id, actions.agree())

    def ship_item(self, transaction_id: TransactionId, carrier: str, tracking_id: str) -> Any:
        return self.transactions.perform_action(transaction_id, actions.ship(carrier, tracking_id))

    def accept_item(self, transaction_id: TransactionId) -> Any:
        return self.transactions.perform_action(transaction_id, actions.accept())

    def reject_item(self, transaction_id: TransactionId, reason: str) -> Any:
        return self.transactions.perform_action(transaction_id, actions.reject(reason))

    def cancel_transaction(self, transaction_id: TransactionId) -> Any:
        return self.transactions.perform_action(transaction_id, actions.cancel())
