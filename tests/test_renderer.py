"""Tests for terminal rendering (cli/renderer.py)."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from bee.cli.renderer import Renderer, flush_messages, format_key_values
from bee.core.messages import MessageBuffer
from bee.core.models import ConfirmationElement, KeyValueElement, TableElement, TextElement


@pytest.fixture
def buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(buffer: io.StringIO) -> Console:
    return Console(file=buffer, width=120, highlight=False, soft_wrap=True, color_system=None)


class TestElements:
    def test_text_is_verbatim(self, console: Console, buffer: io.StringIO) -> None:
        Renderer(console).render([TextElement("[bold]not markup[/bold] :smile:")])
        assert buffer.getvalue() == "[bold]not markup[/bold] :smile:\n"

    def test_key_values_aligned(self, console: Console, buffer: io.StringIO) -> None:
        Renderer(console).render([KeyValueElement((("Root", "/srv"), ("Debug mode", "off")))])
        assert buffer.getvalue().splitlines() == ["Root:       /srv", "Debug mode: off"]

    def test_table_contains_cells(self, console: Console, buffer: io.StringIO) -> None:
        table = TableElement(headers=("Theme", "Name"), rows=(("bartik", "Bartik"), ("seven", "Seven")))
        Renderer(console).render([table])
        out = buffer.getvalue()
        assert "Theme" in out and "bartik" in out and "Seven" in out
        assert out.index("bartik") < out.index("seven")

    def test_confirmation(self, console: Console, buffer: io.StringIO) -> None:
        Renderer(console).render([ConfirmationElement("Create it?", False)])
        assert buffer.getvalue() == "Create it?: no\n"

    def test_order_and_duplicates_kept(self, console: Console, buffer: io.StringIO) -> None:
        Renderer(console).render([TextElement("b"), TextElement("a"), TextElement("b")])
        assert buffer.getvalue().splitlines() == ["b", "a", "b"]

    def test_unknown_element(self, console: Console) -> None:
        with pytest.raises(TypeError):
            Renderer(console).render_element("text")  # type: ignore[arg-type]

    def test_format_key_values_empty(self) -> None:
        assert format_key_values([]) == []


class TestMessages:
    def test_flush_prefixes_and_order(self, console: Console, buffer: io.StringIO) -> None:
        messages = MessageBuffer()
        messages.info("Drush mode on")
        messages.warning("Careful")
        messages.error("Broken")
        messages.success("Done")

        assert flush_messages(messages, console) == 4
        assert buffer.getvalue().splitlines() == [
            "Drush mode on",
            "Warning: Careful",
            "Error: Broken",
            "Done",
        ]
        assert len(messages) == 0

    def test_messages_before_elements(self, console: Console, buffer: io.StringIO) -> None:
        messages = MessageBuffer()
        messages.info("first")
        flush_messages(messages, console)
        Renderer(console).render([TextElement("second")])
        assert buffer.getvalue().splitlines() == ["first", "second"]
