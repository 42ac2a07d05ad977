"""User-facing notifications (the toast sink).

Notifications are fire-and-forget: nothing in the core reads a return
value, and a notifier must never raise into the operation that called it.
"""

import abc
import logging
from typing import Literal

NotifyKind = Literal["success", "error", "info"]

logger = logging.getLogger("erpdash.notify")


class Notifier(abc.ABC):
    @abc.abstractmethod
    def notify(self, kind: NotifyKind, message: str) -> None:
        ...


class LoggingNotifier(Notifier):
    """Writes notifications to the application log."""

    def notify(self, kind: NotifyKind, message: str) -> None:
        if kind == "error":
            logger.warning(message)
        else:
            logger.info(message)


class NullNotifier(Notifier):
    def notify(self, kind: NotifyKind, message: str) -> None:
        pass
