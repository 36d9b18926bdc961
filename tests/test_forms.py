from datetime import datetime
from decimal import Decimal

import pytest

from frontend.components.forms import FieldError, FormField, FormState, parse_decimal, parse_int
from frontend.components.supply_form import SUPPLY_FIELDS, SupplyForm
from frontend.components.transaction_form import TransactionForm
from frontend.schemas.supply import Supply, SupplyFormData


def _supply():
    return Supply(
        id=7,
        name="Gauze",
        quantity=12,
        unit_price=Decimal("1.50"),
        category="Medical",
        created_at=datetime(2024, 12, 17),
        updated_at=datetime(2024, 12, 17),
    )


def test_numeric_fields_are_coerced_and_text_fields_are_kept():
    state = FormState(SUPPLY_FIELDS)

    assert state.set("quantity", "5") == 5
    assert state.set("unitPrice", "2.50") == Decimal("2.50")
    assert state.set("name", "  Tape ") == "Tape"
    assert state.set("category", "007") == "007"


@pytest.mark.parametrize(
    "name, raw, message",
    [
        ("name", "", "Name is required"),
        ("quantity", "abc", "Quantity must be a number"),
        ("quantity", "-1", "Quantity must be at least 0"),
        ("unitPrice", "NaN", "Unit price must be a number"),
        ("unitPrice", "-0.01", "Unit price must be at least 0"),
    ],
)
def test_invalid_input_raises_field_error(name, raw, message):
    state = FormState(SUPPLY_FIELDS)
    with pytest.raises(FieldError, match=message):
        state.set(name, raw)


def test_optional_field_falls_back_to_default():
    field = FormField("note", "Note", required=False, default="")
    assert field.coerce("   ") == ""


def test_choices_are_enforced():
    field = FormField("type", "Type", choices=("IN", "OUT"))
    assert field.coerce("OUT") == "OUT"
    with pytest.raises(FieldError):
        field.coerce("SIDEWAYS")


def test_parsers():
    assert parse_int("3") == 3
    assert parse_decimal("1.10") == Decimal("1.10")
    with pytest.raises(ValueError):
        parse_decimal("Infinity")


def test_ask_reprompts_until_valid(ui):
    ui.answers = ["Tape", "x", "3", "0.5", "Office"]
    state = FormState(SUPPLY_FIELDS)

    values = state.ask(ui)

    assert values == {"name": "Tape", "quantity": 3, "unitPrice": Decimal("0.5"), "category": "Office"}
    assert ui.alerts == ["Quantity must be a number"]


def test_create_form_starts_from_defaults():
    form = SupplyForm()

    assert not form.editing
    assert form.title == "New supply"
    assert form.submit_label == "Register"
    assert form.state.values == {"name": "", "quantity": 0, "unitPrice": Decimal("0"), "category": ""}


def test_edit_form_is_prefilled_from_supply(ui):
    form = SupplyForm(_supply())

    assert form.editing
    assert form.title == "Edit supply"
    assert form.submit_label == "Update"

    # Accept every default, then submit.
    ui.answers = ["", "", "", "", "submit"]
    data = form.ask(ui)

    assert data == SupplyFormData(name="Gauze", quantity=12, unit_price=Decimal("1.50"), category="Medical")


def test_form_cancel_returns_none(ui):
    ui.answers = ["Tape", "1", "1", "Office", "cancel"]
    assert SupplyForm().ask(ui) is None


def test_transaction_form_builds_request(ui):
    form = TransactionForm([_supply()])
    ui.answers = ["7", "OUT", "2", "issued to ward", "submit"]

    request = form.ask(ui)

    assert request.supply_id == 7
    assert request.type == "OUT"
    assert request.quantity == 2
    assert request.note == "issued to ward"


def test_transaction_form_rejects_unknown_supply_and_zero_quantity(ui):
    form = TransactionForm([_supply()])
    ui.answers = ["8", "7", "", "0", "1", "", "submit"]

    request = form.ask(ui)

    assert request.supply_id == 7
    assert request.type == "IN"
    assert request.quantity == 1
    assert request.note is None
    assert ui.alerts == ["Supply ID must be one of: 7", "Quantity must be at least 1"]


def test_transaction_form_reset():
    form = TransactionForm([_supply()])
    form.state.set("quantity", "4")
    form.reset()
    assert form.state.values["quantity"] == 0
    assert form.state.fields["supplyId"].choices == ("7",)
