"""Append-only buffer of user-facing status messages.

Any component may append; the CLI flushes the buffer exactly once per
run, after dispatch and before rendered command output.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from bee.core.models import Message, Severity

logger = logging.getLogger(__name__)


class MessageBuffer:
    """Single-threaded, call-ordered message log."""

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._sequence: int = 0

    def append(self, text: str, severity: Severity = Severity.INFO) -> Message:
        """Buffer *text* and return the stored :class:`Message`."""
        message = Message(text=text, severity=severity, sequence=self._sequence)
        self._sequence += 1
        self._messages.append(message)
        logger.debug("message #%d (%s): %s", message.sequence, severity.value, text)
        return message

    def info(self, text: str) -> Message:
        return self.append(text, Severity.INFO)

    def success(self, text: str) -> Message:
        return self.append(text, Severity.SUCCESS)

    def warning(self, text: str) -> Message:
        return self.append(text, Severity.WARNING)

    def error(self, text: str) -> Message:
        return self.append(text, Severity.ERROR)

    def flush(self, sink: Callable[[Message], None]) -> int:
        """Pass every buffered message to *sink* in order, then clear.

        Returns the number of messages flushed.
        """
        pending, self._messages = self._messages, []
        for message in pending:
            sink(message)
        return len(pending)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)
