from decimal import Decimal
from typing import Optional

from pydantic import ValidationError
from rich.text import Text

from frontend.components.forms import FormField, FormState, parse_decimal, parse_int
from frontend.core.ui import TerminalUI
from frontend.schemas.supply import Supply, SupplyFormData

SUPPLY_FIELDS = (
    FormField("name", "Name"),
    FormField("quantity", "Quantity", parse=parse_int, minimum=0, default=0),
    FormField("unitPrice", "Unit price", parse=parse_decimal, minimum=Decimal("0"), default=Decimal("0")),
    FormField("category", "Category"),
)

SUBMIT = "submit"
CANCEL = "cancel"


class SupplyForm:
    """Create form when no supply is given, edit form pre-filled from it otherwise."""

    def __init__(self, supply: Optional[Supply] = None):
        self.supply = supply
        self.state = FormState(SUPPLY_FIELDS)
        if supply is not None:
            self.state.reset(SupplyFormData.from_supply(supply).model_dump(by_alias=True))

    @property
    def editing(self) -> bool:
        return self.supply is not None

    @property
    def title(self) -> str:
        return "Edit supply" if self.editing else "New supply"

    @property
    def submit_label(self) -> str:
        return "Update" if self.editing else "Register"

    def form_data(self) -> SupplyFormData:
        return SupplyFormData.model_validate(self.state.values)

    def ask(self, ui: TerminalUI) -> Optional[SupplyFormData]:
        """Run the form; None means the user cancelled."""
        ui.show(Text(self.title, style="bold"))
        while True:
            self.state.ask(ui)
            action = ui.prompt(f"{self.submit_label} or cancel?", default=SUBMIT, choices=(SUBMIT, CANCEL))
            if action == CANCEL:
                return None
            try:
                return self.form_data()
            except ValidationError as exc:
                ui.alert("; ".join(err["msg"] for err in exc.errors()))
