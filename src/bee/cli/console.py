"""CLI console helpers.

Command output and buffered messages go to stdout through one Rich
console so their relative order is exactly the order they were flushed
in.  Errors that happen before a run has a buffer (malformed
invocations, the script-level boundary) go to stderr.
"""

from __future__ import annotations

from rich.console import Console


def get_console(*, stderr: bool = False) -> Console:
    """Create a Rich console bound to the current ``sys.stdout``/``sys.stderr``."""
    return Console(stderr=stderr, highlight=False, soft_wrap=True)


class _ConsoleProxy:
    """``print``-compatible proxy that resolves its console on each call.

    Resolving late keeps redirection (pytest's ``capsys``, shell pipes)
    working even though the proxy is a module-level singleton.
    """

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def print(self, *objects: object, **kwargs: object) -> None:
        get_console(stderr=self._stderr).print(*objects, **kwargs)  # type: ignore[arg-type]


console = _ConsoleProxy(stderr=False)
error_console = _ConsoleProxy(stderr=True)
