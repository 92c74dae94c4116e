"""
Notification bus.

Owned by the application root and handed to whatever produces user-facing
notifications. Listeners subscribe through handles that unsubscribe on
close, so nothing outlives the component that registered it.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from marquee_core import get_logger

logger = get_logger(__name__)


class Level(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Action:
    """Follow-up offered alongside a notification."""

    label: str
    callback: Callable[[], object]


@dataclass(frozen=True)
class Notification:
    level: Level
    message: str
    title: str | None = None
    action: Action | None = None


Listener = Callable[[Notification], None]


class Subscription:
    """Handle returned by NotificationBus.subscribe."""

    def __init__(self, bus: "NotificationBus", listener: Listener):
        self._bus = bus
        self._listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._bus._remove(self._listener)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class NotificationBus:
    """Fan-out of notifications to subscribed listeners."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def publish(self, notification: Notification) -> None:
        """
        Deliver a notification to every current listener.

        A failing listener is logged and does not stop delivery to the rest.
        """
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                logger.exception(
                    "Notification listener failed", extra={"level": notification.level}
                )

    def success(self, message: str, *, title: str | None = None) -> None:
        self.publish(Notification(Level.SUCCESS, message, title))

    def warning(
        self, message: str, *, title: str | None = None, action: Action | None = None
    ) -> None:
        self.publish(Notification(Level.WARNING, message, title, action))

    def error(
        self, message: str, *, title: str | None = None, action: Action | None = None
    ) -> None:
        self.publish(Notification(Level.ERROR, message, title, action))
