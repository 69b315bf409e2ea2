"""
BaseNotifier — injected capability every operation uses to report outcomes.

Each notifier only needs:
1. subclass BaseNotifier
2. implement notify()
3. register one line in factory._build_registry()

Services receive a notifier; they never know where the toast ends up.
"""

from abc import ABC, abstractmethod

from .types import Notification


class BaseNotifier(ABC):

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver one notification."""

    def success(self, title: str, description: str = "") -> None:
        self.notify(Notification(title=title, description=description))

    def error(self, title: str, description: str = "") -> None:
        self.notify(Notification(title=title, description=description, variant="destructive"))

    def drain(self) -> list[dict]:
        """Notifications to hand back to the caller. Only collecting notifiers have any."""
        return []
