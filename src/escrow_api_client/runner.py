"""Manual test harness: probes the live Escrow API with the configured account.

Run:

    escrow-api-test            # same as `escrow-api-test run`
    escrow-api-test check-env
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from dotenv import dotenv_values
from rich.console import Console
from rich.table import Table

from .config import EscrowConfig, env_report
from .errors import ConfigurationError, EscrowError
from .escrow import EscrowClient
from .logger import get_logger

log = get_logger("escrow_api_client.runner")

app = typer.Typer(help="Escrow API test suite.", add_completion=False)

_console = Console()

TEST_CARRIER = "UPS"
TEST_TRACKING_ID = "1Z999TEST123"


def _describe(result: Any, key: str, default: Any = None) -> Any:
    if isinstance(result, dict):
        return result.get(key, default)
    return default


class EscrowApiTester:
    def __init__(
        self,
        config: EscrowConfig,
        client: Optional[EscrowClient] = None,
        echo: Callable[[str], None] = typer.echo,
    ) -> None:
        self.config = config
        self.client = client
        self.echo = echo
        self.test_transaction_id: Optional[Any] = None

    def initialize(self) -> None:
        if self.client is None:
            self.client = EscrowClient(self.config)
        self.echo(f"Initialized Escrow API client ({self.config.environment_name})")

    def run_tests(self) -> None:
        self.echo("\nStarting Escrow API tests...\n")
        self.test_customer_endpoints()
        self.test_transaction_endpoints()
        self.test_partner_endpoints()
        self.echo("\nAll tests completed.")

    def _warn(self, what: str, error: EscrowError) -> None:
        self.echo(f"  [warn] {what}: {error.message}")
        log.info("probe_failed", extra={"probe": what, "status": error.status_code})

    def test_customer_endpoints(self) -> None:
        self.echo("Testing customer endpoints...")
        customers = self.client.customers
        try:
            self.echo("  getting customer profile...")
            profile = customers.get_my_profile()
            self.echo(f"  [ok] profile retrieved: {_describe(profile, 'email') or _describe(profile, 'id')}")

            self.echo("  getting API keys...")
            customers.get_api_keys()
            self.echo("  [ok] API keys retrieved")

            self.echo("  getting disbursement methods...")
            customers.get_disbursement_methods()
            self.echo("  [ok] disbursement methods retrieved")

            self.echo("  getting webhooks...")
            customers.get_webhooks()
            self.echo("  [ok] webhooks retrieved")
        except EscrowError as e:
            self._warn("customer endpoint test failed", e)

    def test_transaction_endpoints(self) -> None:
        self.echo("\nTesting transaction endpoints...")
        try:
            self.echo("  listing transactions...")
            listing = self.client.transactions.list_transactions(per_page=5)
            self.echo(f"  [ok] found {_describe(listing, 'total', 0)} transactions")

            if not self.can_create_test_transaction():
                self.echo("  [skip] transaction creation (no test data available)")
                return

            transaction = self.create_test_transaction()
            if not transaction or not _describe(transaction, "id"):
                return

            transaction_id = transaction["id"]
            self.test_transaction_id = transaction_id
            status = self.client.transaction_status(transaction)
            self.echo(f"  [ok] created transaction: {transaction_id} ({status.value})")
            self._probe_created_transaction(transaction)
        except EscrowError as e:
            self._warn("transaction endpoint test failed", e)

    def _probe_created_transaction(self, transaction: dict) -> None:
        transaction_id = transaction["id"]

        self.echo("  getting transaction details...")
        self.client.transactions.get_transaction(transaction_id)
        self.echo("  [ok] transaction details retrieved")

        self.echo("  getting transaction timeline...")
        self.client.transactions.get_timeline(transaction_id)
        self.echo("  [ok] transaction timeline retrieved")

        self.echo("  getting payment methods...")
        self.client.payments.get_payment_methods(transaction_id)
        self.echo("  [ok] payment methods retrieved")

        self.echo("  getting transaction disbursement methods...")
        self.client.disbursements.get_transaction_disbursements(transaction_id)
        self.echo("  [ok] transaction disbursement methods retrieved")

        self.echo("  testing transaction actions...")
        try:
            self.client.agree_to_transaction(transaction_id)
            self.echo("  [ok] buyer agreed to transaction")
        except EscrowError as e:
            self._warn("agree action failed (expected in sandbox)", e)

        if transaction.get("items"):
            self.echo("  testing milestone actions...")
            try:
                self.client.ship_item(transaction_id, TEST_CARRIER, TEST_TRACKING_ID)
                self.echo("  [ok] item marked as shipped")
            except EscrowError as e:
                self._warn("ship action failed (expected in sandbox)", e)

    def test_partner_endpoints(self) -> None:
        self.echo("\nTesting partner endpoints...")
        partner = self.client.partner
        try:
            self.echo("  listing partner transactions...")
            transactions = partner.list_partner_transactions(limit=5)
            self.echo(f"  [ok] found {_describe(transactions, 'total', 0)} partner transactions")

            self.echo("  listing partner customers...")
            customers = partner.list_partner_customers(limit=5)
            self.echo(f"  [ok] found {_describe(customers, 'total', 0)} partner customers")

            self.echo("  listing reports...")
            partner.list_reports()
            self.echo("  [ok] reports retrieved")
        except EscrowError as e:
            self._warn("partner endpoint test failed", e)

    def can_create_test_transaction(self) -> bool:
        return bool(
            self.config.test_buyer_email
            and self.config.test_seller_email
            and self.config.sandbox
        )

    def create_test_transaction(self) -> Optional[Any]:
        # The authenticated account is the buyer, so the sandbox lets it agree.
        self.echo("  creating test transaction...")
        try:
            return self.client.create_basic_transaction(
                self.config.email,
                self.config.test_seller_email,
                "Test Item - Digital Camera",
                "Professional digital camera for testing purposes",
                450,
            )
        except EscrowError as e:
            self._warn("failed to create test transaction", e)
            self.echo("  this is expected in sandbox if the test emails don't exist")
            return None

    def cleanup(self) -> None:
        if self.test_transaction_id is None:
            return

        self.echo(f"\nCleaning up test transaction {self.test_transaction_id}...")
        try:
            self.client.cancel_transaction(self.test_transaction_id)
            self.echo("  [ok] test transaction cancelled")
        except EscrowError as e:
            self._warn("cleanup failed", e)
            self.echo("  test transaction may need manual cleanup in sandbox")


@app.callback(invoke_without_command=True)
def _default(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        run()


@app.command()
def run() -> None:
    """Run the probe sequence against the configured environment."""
    typer.echo("Escrow.com API Test Suite")
    typer.echo("=========================")

    try:
        config = EscrowConfig.from_env()
    except ConfigurationError as e:
        typer.echo(f"Fatal error: {e.message}", err=True)
        raise typer.Exit(code=1)

    tester = EscrowApiTester(config)
    tester.initialize()
    tester.run_tests()
    tester.cleanup()

    typer.echo("\nTest suite completed.")


@app.command("check-env")
def check_env() -> None:
    """Show which Escrow variables are set and whether a .env file is present."""
    env_file = Path(".env")
    # process environment wins over the .env file
    merged = {**dotenv_values(env_file), **os.environ} if env_file.is_file() else dict(os.environ)

    table = Table(title="Environment Variables")
    table.add_column("Variable", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")

    for name, value in env_report(merged).items():
        table.add_row(name, value)

    _console.print(table)

    if env_file.is_file():
        lines = env_file.read_text(encoding="utf-8").splitlines()
        _console.print(f".env found ({len(lines)} lines)")
    else:
        _console.print("[yellow].env not found[/yellow] in the current directory")
