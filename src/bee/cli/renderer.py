"""Terminal rendering of buffered messages and command output.

The renderer prints exactly what it is given, in order: no sorting,
truncation or de-duplication.  Text coming from handlers is never
interpreted as Rich markup.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from bee.cli.console import get_console
from bee.core.messages import MessageBuffer
from bee.core.models import (
    ConfirmationElement,
    KeyValueElement,
    Message,
    RenderElement,
    Severity,
    TableElement,
    TextElement,
)

_SEVERITY_STYLE: dict[Severity, tuple[str, str]] = {
    Severity.INFO: ("", ""),
    Severity.SUCCESS: ("", "green"),
    Severity.WARNING: ("Warning: ", "yellow"),
    Severity.ERROR: ("Error: ", "bold red"),
}


def format_key_values(pairs: Iterable[tuple[str, str]]) -> list[str]:
    """Return ``key: value`` lines with values aligned in one column."""
    pairs = list(pairs)
    if not pairs:
        return []
    width = max(len(key) for key, _ in pairs) + 1
    return [f"{key + ':':<{width}} {value}" for key, value in pairs]


class Renderer:
    """Serialises render elements to a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console: Console = console or get_console()

    def render(self, elements: Iterable[RenderElement]) -> None:
        for element in elements:
            self.render_element(element)

    def render_element(self, element: RenderElement) -> None:
        if isinstance(element, TextElement):
            self._line(element.text)
        elif isinstance(element, TableElement):
            self._console.print(self._table(element))
        elif isinstance(element, KeyValueElement):
            for line in format_key_values(element.pairs):
                self._line(line)
        elif isinstance(element, ConfirmationElement):
            self._line(f"{element.question}: {'yes' if element.answer else 'no'}")
        else:
            raise TypeError(f"Cannot render {element!r}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _line(self, text: str) -> None:
        self._console.print(Text(text))

    @staticmethod
    def _table(element: TableElement) -> Table:
        table = Table(
            title=element.title,
            show_header=True,
            header_style="bold",
            box=box.SIMPLE,
            pad_edge=False,
        )
        for header in element.headers:
            table.add_column(header)
        for row in element.rows:
            table.add_row(*(Text(cell) for cell in row))
        return table


def print_message(message: Message, console: Console) -> None:
    prefix, style = _SEVERITY_STYLE[message.severity]
    console.print(Text(prefix + message.text, style=style))


def flush_messages(messages: MessageBuffer, console: Console | None = None) -> int:
    """Flush *messages* to *console*; returns how many were printed."""
    target = console or get_console()
    return messages.flush(lambda message: print_message(message, target))
