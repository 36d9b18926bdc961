from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from frontend.pages.base import Page

CARDS = (
    ("Supply management", "Register, edit, delete and list supplies", "/supplies"),
    ("Inventory management", "Record stock in / stock out, browse stock levels", "/inventory"),
    ("File import / export", "CSV import, Excel export (from the supplies page)", "/supplies"),
)


class DashboardPage(Page):
    title = "Dashboard"

    def render(self) -> RenderableType:
        cards = [
            Panel(Text(description), title=name, subtitle=f"go {path}", width=36)
            for name, description, path in CARDS
        ]
        return Group(Text(self.title, style="bold"), Columns(cards))
