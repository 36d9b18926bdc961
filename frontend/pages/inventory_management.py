import logging
from typing import List, Optional

from rich.console import Group, RenderableType
from rich.text import Text

from frontend.components.supply_list import supply_table
from frontend.components.transaction_form import TransactionForm
from frontend.components.transaction_table import transaction_table
from frontend.core.api import RESPONSE_ERRORS
from frontend.core.ui import TerminalUI
from frontend.hooks.use_supplies import SupplyCollection
from frontend.pages.base import Page, parse_id
from frontend.schemas.supply import InventoryTransaction, InventoryTransactionRequest
from frontend.services.inventory_service import InventoryService
from frontend.services.supply_service import SupplyService

logger = logging.getLogger(__name__)


class InventoryManagementPage(Page):
    title = "Inventory management"
    commands = {
        "move": "register a stock in / stock out",
        "history [<id>]": "show the ledger, optionally for one supply",
        "refresh": "reload supplies and transactions",
    }

    def __init__(self, ui: TerminalUI, inventory_service: InventoryService, supply_service: SupplyService):
        super().__init__(ui)
        self.service = inventory_service
        self.supplies = SupplyCollection(supply_service)
        self.transactions: List[InventoryTransaction] = []
        self.loading = True
        self.supply_filter: Optional[int] = None
        self.form = TransactionForm()

    def mount(self) -> None:
        with self.ui.status("Loading..."):
            self.supplies.mount()
            self.fetch_transactions()

    def unmount(self) -> None:
        self.supplies.unmount()

    def fetch_transactions(self) -> None:
        self.loading = True
        try:
            if self.supply_filter is None:
                self.transactions = self.service.get_all()
            else:
                self.transactions = self.service.get_by_supply_id(self.supply_filter)
        except RESPONSE_ERRORS:
            logger.exception("Error fetching transactions")
            self.ui.alert("Failed to fetch transactions.")
        finally:
            self.loading = False

    def refetch(self) -> None:
        with self.ui.status("Loading..."):
            self.supplies.refetch()
            self.fetch_transactions()

    def render(self) -> RenderableType:
        if self.loading and not self.supplies.data:
            return Text("Loading...")

        parts: List[RenderableType] = [Text(self.title, style="bold")]
        if self.supplies.error:
            parts.append(Text(self.supplies.error, style="red"))
        else:
            parts.append(supply_table(self.supplies.data, title="Stock levels"))

        title = "Transaction history"
        if self.supply_filter is not None:
            title = f"Transaction history (supply {self.supply_filter})"
        parts.append(transaction_table(self.transactions, title=title))
        parts.append(self.help())
        return Group(*parts)

    def dispatch(self, command: str, args: List[str]) -> bool:
        if command == "move":
            self.open_form()
        elif command == "history":
            if args:
                try:
                    self.supply_filter = parse_id(args)
                except ValueError:
                    self.ui.alert("Usage: history [<id>]")
                    return True
            else:
                self.supply_filter = None
            self.fetch_transactions()
        elif command == "refresh":
            self.refetch()
        else:
            return False
        return True

    def open_form(self) -> None:
        if not self.supplies.data:
            self.ui.alert("No supplies registered yet.")
            return
        self.form.set_supplies(self.supplies.data)
        while True:
            request = self.form.ask(self.ui)
            if request is None:
                return
            if self.handle_submit(request):
                return

    def handle_submit(self, request: InventoryTransactionRequest) -> bool:
        try:
            self.service.submit(request)
        except RESPONSE_ERRORS:
            logger.exception("Error submitting transaction")
            self.ui.alert("Failed to submit.")
            return False

        self.form.reset()
        # Quantities are derived by the server; reload both views instead of patching locally.
        self.refetch()
        return True
