"""Single-process observer registry used to announce content refreshes."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

Observer = Callable[[], None]


class Subscription:
    """Handle returned by :meth:`ChangeNotifier.subscribe`.

    Calling the handle (or :meth:`unsubscribe`) removes exactly the
    registration it was created for; repeated calls are harmless.
    """

    __slots__ = ("_notifier", "observer", "_active")

    def __init__(self, notifier: ChangeNotifier, observer: Observer) -> None:
        self._notifier = notifier
        self.observer = observer
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._notifier._discard(self)

    def __call__(self) -> None:
        self.unsubscribe()


class ChangeNotifier:
    """Synchronous fan-out to zero-argument observers in registration order.

    The same callable may be registered several times; each registration is
    independent and is invoked once per notification. An observer that raises
    is logged and does not prevent the remaining observers from running.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, observer: Observer) -> Subscription:
        subscription = Subscription(self, observer)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.unsubscribe()

    def _discard(self, subscription: Subscription) -> None:
        # Identity comparison: two registrations of one callable stay distinct.
        self._subscriptions = [
            existing for existing in self._subscriptions if existing is not subscription
        ]

    def notify(self) -> int:
        """Invoke every current observer and return how many were called.

        Observers added or removed during the fan-out take effect from the
        next notification.
        """

        delivered = 0
        for subscription in list(self._subscriptions):
            try:
                subscription.observer()
            except Exception:  # type: ignore[broad-except]
                logger.exception("Content observer %r failed", subscription.observer)
            delivered += 1
        return delivered


__all__ = ["ChangeNotifier", "Observer", "Subscription"]
