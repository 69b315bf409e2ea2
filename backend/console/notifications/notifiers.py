"""
Concrete notifiers.

Registered notifiers:
  response — ResponseNotifier (collected, returned in the JSON body)
  log      — LogNotifier      (written to the console logger only)
"""

import logging

from .base import BaseNotifier
from .types import Notification

logger = logging.getLogger(__name__)


class ResponseNotifier(BaseNotifier):
    """Collects notifications for the current request."""

    def __init__(self):
        self._pending: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self._pending.append(notification)

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[dict]:
        drained = [n.as_dict() for n in self._pending]
        self._pending.clear()
        return drained


class LogNotifier(BaseNotifier):

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.variant == "destructive" else logging.INFO
        logger.log(level, "[Notify] %s: %s", notification.title, notification.description)
