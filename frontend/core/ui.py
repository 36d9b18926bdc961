from typing import Optional, Sequence

from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.prompt import Confirm, Prompt


class TerminalUI:
    """Thin wrapper over a rich Console: the only place that talks to the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show(self, renderable: RenderableType) -> None:
        self.console.print(renderable)

    def info(self, message: str) -> None:
        self.console.print(f"[green]{message}[/]")

    def alert(self, message: str) -> None:
        self.console.print(Panel(message, border_style="red", expand=False))

    def prompt(self, label: str, default: Optional[str] = None, choices: Optional[Sequence[str]] = None) -> str:
        kwargs = {"default": default} if default is not None else {}
        return Prompt.ask(
            label,
            console=self.console,
            choices=list(choices) if choices else None,
            **kwargs,
        )

    def confirm(self, message: str) -> bool:
        return Confirm.ask(message, console=self.console, default=False)

    def status(self, message: str):
        return self.console.status(message)
