"""
Declarative form fields.

Each field says how to turn typed text into a value (parser, required, minimum,
allowed choices). FormState applies them uniformly, so adding a field to a form
only means adding a FormField.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from frontend.core.ui import TerminalUI


class FieldError(ValueError):
    pass


def parse_text(raw: str) -> str:
    return raw


def parse_int(raw: str) -> int:
    return int(raw)


def parse_decimal(raw: str) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"invalid decimal: {raw!r}")
    if not value.is_finite():
        raise ValueError(f"invalid decimal: {raw!r}")
    return value


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    parse: Callable[[str], Any] = parse_text
    required: bool = True
    minimum: Optional[Any] = None
    choices: Optional[Sequence[str]] = None
    default: Any = ""

    @property
    def numeric(self) -> bool:
        return self.parse is not parse_text

    def coerce(self, raw: Optional[str]) -> Any:
        text = (raw or "").strip()
        if not text:
            if self.required:
                raise FieldError(f"{self.label} is required")
            return self.default
        if self.choices is not None and text not in self.choices:
            raise FieldError(f"{self.label} must be one of: {', '.join(self.choices)}")
        try:
            value = self.parse(text)
        except ValueError:
            raise FieldError(f"{self.label} must be a number" if self.numeric else f"{self.label} is invalid")
        if self.minimum is not None and value < self.minimum:
            raise FieldError(f"{self.label} must be at least {self.minimum}")
        return value

    def with_choices(self, choices: Iterable[str]) -> "FormField":
        return replace(self, choices=tuple(choices))


class FormState:
    def __init__(self, fields: Sequence[FormField], values: Optional[Dict[str, Any]] = None):
        self.fields: Dict[str, FormField] = {f.name: f for f in fields}
        self.values: Dict[str, Any] = {}
        self.reset(values)

    def reset(self, values: Optional[Dict[str, Any]] = None) -> None:
        self.values = {name: f.default for name, f in self.fields.items()}
        if values:
            for name, value in values.items():
                if name in self.fields:
                    self.values[name] = value

    def set(self, name: str, raw: Optional[str]) -> Any:
        value = self.fields[name].coerce(raw)
        self.values[name] = value
        return value

    def ask(self, ui: TerminalUI) -> Dict[str, Any]:
        """Prompt every field in order, current value as default, until each one parses."""
        for name, f in self.fields.items():
            while True:
                current = self.values.get(name)
                default = None if current in (None, "") else str(current)
                raw = ui.prompt(f.label, default=default, choices=f.choices)
                try:
                    self.set(name, raw)
                    break
                except FieldError as exc:
                    ui.alert(str(exc))
        return dict(self.values)
