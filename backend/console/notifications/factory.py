"""
Factory: return the notifier selected by settings.CONSOLE_NOTIFIER.

CONSOLE_NOTIFIER comes from the environment (default "response").
"""

from django.conf import settings

from .base import BaseNotifier


def _build_registry() -> dict[str, type[BaseNotifier]]:
    from .notifiers import LogNotifier, ResponseNotifier

    return {
        "response": ResponseNotifier,
        "log":      LogNotifier,
    }


def get_notifier() -> BaseNotifier:
    """
    Raises:
        ValueError: CONSOLE_NOTIFIER is unknown
    """
    name = getattr(settings, "CONSOLE_NOTIFIER", "response")
    registry = _build_registry()
    notifier_cls = registry.get(name)

    if notifier_cls is None:
        raise ValueError(
            f"Unknown CONSOLE_NOTIFIER: {name!r}. "
            f"Known notifiers: {list(registry.keys())}"
        )

    return notifier_cls()
