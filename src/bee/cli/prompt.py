"""Interactive yes/no confirmation for the CLI layer.

Only used when yes mode is off; ``--yes`` answers every question
without prompting.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from bee.exceptions import EnvironmentError

logger = logging.getLogger(__name__)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive confirmation."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def confirm(question: str) -> bool:
    """Ask *question* on the terminal.

    Returns ``False`` without prompting when stdin is not interactive.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C during the prompt.
    """
    if not sys.stdin.isatty():
        logger.debug("stdin is not a terminal; answering no to %r", question)
        return False

    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(question, default=False).ask()
    if answer is None:  # Ctrl+C / Esc
        raise KeyboardInterrupt
    return answer
