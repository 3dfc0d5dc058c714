from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class NotificationKind(Enum):
    ERROR = "error"
    LOADING = "loading"
    SUCCESS = "success"


@dataclass(frozen=True)
class NotificationEvent:
    kind: NotificationKind
    message: str
    dismiss_previous: bool = False


class Notifier:
    """Passive sink for the runner's notification events.

    Subclasses render or record notices. ``dismiss(None)`` removes every
    visible notice.
    """

    def __init__(self) -> None:
        self._last_handle: Any = None

    def notify(self, kind: NotificationKind, message: str) -> Any:
        raise NotImplementedError

    def dismiss(self, handle: Any = None) -> None:
        raise NotImplementedError

    def handle_event(self, event: NotificationEvent) -> None:
        if event.dismiss_previous:
            self.dismiss(self._last_handle)
        self._last_handle = self.notify(event.kind, event.message)


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple] = []
        self._next_handle = 0

    def notify(self, kind: NotificationKind, message: str) -> int:
        self._next_handle += 1
        self.calls.append(("notify", kind, message))
        return self._next_handle

    def dismiss(self, handle: Any = None) -> None:
        self.calls.append(("dismiss", handle))

    @property
    def notices(self) -> list[tuple[NotificationKind, str]]:
        return [(call[1], call[2]) for call in self.calls if call[0] == "notify"]


class LogNotifier(Notifier):
    def __init__(self, log: logging.Logger | None = None) -> None:
        super().__init__()
        self.log = log or logger
        self._next_handle = 0

    def notify(self, kind: NotificationKind, message: str) -> int:
        self._next_handle += 1
        if kind is NotificationKind.ERROR:
            self.log.error(message)
        else:
            self.log.info(message)
        return self._next_handle

    def dismiss(self, handle: Any = None) -> None:
        self.log.debug("dismiss notice %s", "all" if handle is None else handle)


def attach(runner, notifier: Notifier) -> None:
    runner.notified.connect(notifier.handle_event)
