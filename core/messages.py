# core/messages.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger(__name__)

FILE_NOT_FOUND = "file_not_found"

MESSAGES = {
    FILE_NOT_FOUND: "Unable to find the selected file. Please try again.",
}


@dataclass(frozen=True)
class SnackbarMessage:
    """A user-facing message meant for a short-lived banner in the UI."""

    key: str
    message: str

    @classmethod
    def of(cls, key: str) -> SnackbarMessage:
        return cls(key=key, message=MESSAGES.get(key, key))


MessageHandler = Callable[[SnackbarMessage], None]


class MessageChannel:
    """
    Delivers user-facing messages to subscribers.

    Messages emitted while nobody is listening are held and handed to the next
    subscriber exactly once (or drained with consume()).
    """

    def __init__(self) -> None:
        self._subscribers: List[MessageHandler] = []
        self._pending: List[SnackbarMessage] = []

    def subscribe(self, handler: MessageHandler) -> None:
        if handler in self._subscribers:
            return
        self._subscribers.append(handler)

        pending, self._pending = self._pending, []
        for message in pending:
            self._deliver(handler, message)

    def unsubscribe(self, handler: MessageHandler) -> None:
        if handler in self._subscribers:
            self._subscribers.remove(handler)

    def emit(self, message: SnackbarMessage) -> None:
        if not self._subscribers:
            logger.debug("No subscribers for message %r; holding it.", message.key)
            self._pending.append(message)
            return

        for handler in list(self._subscribers):
            self._deliver(handler, message)

    def consume(self) -> List[SnackbarMessage]:
        """Return and clear any messages nobody has received yet."""
        pending, self._pending = self._pending, []
        return pending

    def _deliver(self, handler: MessageHandler, message: SnackbarMessage) -> None:
        handler_name = getattr(handler, "__name__", str(handler))
        try:
            handler(message)
        except Exception:
            logger.exception("Message handler '%s' failed for %r", handler_name, message.key)
