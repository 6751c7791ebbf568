# services/notifier.py

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

LEVELS = ("success", "error", "warning", "info")


@dataclass(frozen=True)
class Notification:
    message: str
    level: str = "info"


class Notifier(ABC):
    """
    Sink for user-facing messages. Components receive one explicitly
    instead of reaching for a global callback.
    """

    @abstractmethod
    def notify(self, message: str, level: str = "info") -> None:
        ...

    def success(self, message: str) -> None:
        self.notify(message, "success")

    def error(self, message: str) -> None:
        self.notify(message, "error")

    def warning(self, message: str) -> None:
        self.notify(message, "warning")

    def info(self, message: str) -> None:
        self.notify(message, "info")


class QueueNotifier(Notifier):
    """
    Buffers notifications until the UI drains them.

    Pass the list stored in st.session_state so messages survive st.rerun().
    """

    def __init__(self, queue: Optional[List[Notification]] = None):
        self._queue = queue if queue is not None else []

    def notify(self, message: str, level: str = "info") -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown notification level: {level}")
        logger.debug("notify[%s]: %s", level, message)
        self._queue.append(Notification(message=message, level=level))

    @property
    def pending(self) -> List[Notification]:
        return list(self._queue)

    def drain(self) -> List[Notification]:
        items = list(self._queue)
        self._queue.clear()
        return items
