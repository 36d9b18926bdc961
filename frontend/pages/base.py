from typing import Dict, List

from rich.console import RenderableType
from rich.table import Table

from frontend.core.ui import TerminalUI


class Page:
    title: str = ""
    # command -> help text
    commands: Dict[str, str] = {}

    def __init__(self, ui: TerminalUI):
        self.ui = ui

    def mount(self) -> None:
        pass

    def unmount(self) -> None:
        pass

    def render(self) -> RenderableType:
        raise NotImplementedError

    def dispatch(self, command: str, args: List[str]) -> bool:
        """Handle a page command; False when the page does not know it."""
        return False

    def help(self) -> Table:
        table = Table(show_header=False, box=None, padding=(0, 2))
        for name, text in self.commands.items():
            table.add_row(name, text)
        return table


def parse_id(args: List[str]) -> int:
    if not args:
        raise ValueError("an id is required")
    return int(args[0])
