from typing import Sequence

from rich.table import Table
from rich.text import Text

from frontend.schemas.supply import InventoryTransaction

TYPE_LABELS = {
    "IN": ("Stock in", "green"),
    "OUT": ("Stock out", "red"),
}


def transaction_table(transactions: Sequence[InventoryTransaction], title: str = "Transaction history") -> Table:
    table = Table(title=title)
    table.add_column("Date")
    table.add_column("Supply ID", justify="right")
    table.add_column("Type")
    table.add_column("Quantity", justify="right")
    table.add_column("Note")

    for tx in transactions:
        label, style = TYPE_LABELS[tx.type]
        table.add_row(
            tx.transaction_date.strftime("%Y-%m-%d %H:%M:%S") if tx.transaction_date else "-",
            str(tx.supply_id),
            Text(label, style=style),
            str(tx.quantity),
            tx.note or "-",
        )
    return table
