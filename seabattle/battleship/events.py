from __future__ import annotations

from typing import Any, Callable, List

Listener = Callable[[Any], None]


class Event:
    """Synchronous publish/subscribe hook.

    Listeners are called with the sender (and any extra arguments) before
    ``emit`` returns. Delivery order is not part of the contract.
    """

    def __init__(self) -> None:
        self._listeners: List[Callable[..., None]] = []

    def subscribe(self, listener: Callable[..., None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[..., None]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def emit(self, sender: Any, *args: Any) -> None:
        # copy so a listener may unsubscribe itself while being notified
        for listener in list(self._listeners):
            listener(sender, *args)

    def __len__(self) -> int:
        return len(self._listeners)
