from typing import Sequence, Tuple

from rich.text import Text

APP_TITLE = "Supply Management"

NAV_LINKS: Tuple[Tuple[str, str], ...] = (
    ("/", "Dashboard"),
    ("/supplies", "Supplies"),
    ("/inventory", "Inventory"),
)


def header(current_path: str, links: Sequence[Tuple[str, str]] = NAV_LINKS) -> Text:
    text = Text()
    text.append(APP_TITLE, style="bold white on dark_blue")
    text.append("   ")
    for path, label in links:
        style = "bold underline" if path == current_path else "dim"
        text.append(f"{label} ({path})", style=style)
        text.append("  ")
    return text
