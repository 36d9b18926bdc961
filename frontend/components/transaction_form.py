from typing import Optional, Sequence

from pydantic import ValidationError
from rich.table import Table
from rich.text import Text

from frontend.components.forms import FormField, FormState, parse_int
from frontend.core.ui import TerminalUI
from frontend.schemas.supply import InventoryTransactionRequest, Supply

TRANSACTION_FIELDS = (
    FormField("supplyId", "Supply ID", parse=parse_int, default=None),
    FormField("type", "Type", choices=("IN", "OUT"), default="IN"),
    FormField("quantity", "Quantity", parse=parse_int, minimum=1, default=0),
    FormField("note", "Note", required=False),
)

SUBMIT = "submit"
CANCEL = "cancel"


def supply_options(supplies: Sequence[Supply]) -> Table:
    table = Table(title="Select a supply", show_header=True)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("In stock", justify="right")
    for supply in supplies:
        table.add_row(str(supply.id), supply.name, str(supply.quantity))
    return table


class TransactionForm:
    def __init__(self, supplies: Sequence[Supply] = ()):
        self.state = FormState(TRANSACTION_FIELDS)
        self.set_supplies(supplies)

    def set_supplies(self, supplies: Sequence[Supply]) -> None:
        self.supplies = list(supplies)
        fields = dict(self.state.fields)
        fields["supplyId"] = fields["supplyId"].with_choices(str(s.id) for s in self.supplies)
        self.state.fields = fields

    def reset(self) -> None:
        self.state.reset()

    def request(self) -> InventoryTransactionRequest:
        return InventoryTransactionRequest.model_validate(self.state.values)

    def ask(self, ui: TerminalUI) -> Optional[InventoryTransactionRequest]:
        ui.show(Text("Stock in / stock out", style="bold"))
        ui.show(supply_options(self.supplies))
        while True:
            self.state.ask(ui)
            action = ui.prompt("Register or cancel?", default=SUBMIT, choices=(SUBMIT, CANCEL))
            if action == CANCEL:
                return None
            try:
                return self.request()
            except ValidationError as exc:
                ui.alert("; ".join(err["msg"] for err in exc.errors()))
