"""
Change Notifier.

Synchronous publish/subscribe used by the editor core to tell front ends
that state changed. Listeners receive the event name and a payload dict.

Events:
    articles_changed, trash_changed, selection_changed, content_loaded,
    saved, discarded_changes, address_changed, preferences_changed,
    persistence_warning
"""

from collections.abc import Callable
from typing import Any

Listener = Callable[[str, dict[str, Any]], None]


class ChangeNotifier:
    """Fan-out of change events to registered listeners."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: str, **payload: Any) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(event, payload)
