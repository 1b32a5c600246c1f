"""Single message surface with automatic dismissal."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Literal, Optional

MessageKind = Literal["success", "error"]

PROCESSING_TEXT = "Procesando archivo..."
GENERIC_ERROR_TEXT = "Ha ocurrido un error al procesar el archivo."


@dataclass(frozen=True)
class Message:
    text: str
    kind: MessageKind
    expires_at: float


class MessageBoard:
    """Holds at most one message; a newer one replaces it immediately."""

    def __init__(self, timeout_seconds: float = 10.0, clock: Callable[[], float] = time.monotonic):
        self.timeout_seconds = timeout_seconds
        self._clock = clock
        self._message: Optional[Message] = None

    def show(self, text: str, kind: MessageKind = "success") -> Message:
        message = Message(text=text, kind=kind, expires_at=self._clock() + self.timeout_seconds)
        self._message = message
        return message

    def show_processing(self) -> Message:
        return self.show(PROCESSING_TEXT, "success")

    def show_error(self, error: Optional[BaseException]) -> Message:
        detail = str(error) if error is not None else ""
        return self.show(f"Error: {detail or GENERIC_ERROR_TEXT}", "error")

    def current(self) -> Optional[Message]:
        """Return the live message, dropping it once its interval has elapsed."""

        if self._message is not None and self._clock() >= self._message.expires_at:
            self._message = None
        return self._message

    def clear(self) -> None:
        self._message = None
