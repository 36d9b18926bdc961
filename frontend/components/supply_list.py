from decimal import Decimal
from typing import Sequence

from rich.table import Table

from frontend.schemas.supply import Supply


def format_price(value: Decimal) -> str:
    return f"{value:,.2f}"


def supply_table(supplies: Sequence[Supply], title: str = "Supplies") -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Quantity", justify="right")
    table.add_column("Unit price", justify="right")
    table.add_column("Category")

    for supply in supplies:
        table.add_row(
            str(supply.id),
            supply.name,
            str(supply.quantity),
            format_price(supply.unit_price),
            supply.category or "",
        )
    return table
