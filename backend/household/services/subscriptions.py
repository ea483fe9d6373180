import logging
from collections.abc import Callable, Hashable
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class ChangeHub:
    """
    In-process registry of change callbacks, keyed by topic.

    Stores publish the full current snapshot of a topic after every
    committed write; handlers run synchronously, in registration order.
    """

    def __init__(self):
        self._subscribers: dict[Hashable, list[Handler]] = {}

    def subscribe(self, topic: Hashable, handler: Handler) -> Callable[[], None]:
        """Register a handler; returns a callable that removes it again."""
        self._subscribers.setdefault(topic, []).append(handler)
        logger.debug("Subscribed to %s (%d handlers)", topic, len(self._subscribers[topic]))

        def unsubscribe() -> None:
            handlers = self._subscribers.get(topic)
            if handlers and handler in handlers:
                handlers.remove(handler)
                if not handlers:
                    del self._subscribers[topic]
                logger.debug("Unsubscribed from %s", topic)

        return unsubscribe

    def has_subscribers(self, topic: Hashable) -> bool:
        return bool(self._subscribers.get(topic))

    def publish(self, topic: Hashable, snapshot: Any) -> int:
        """Deliver a snapshot to every handler of the topic."""
        # Copy so handlers may unsubscribe while being notified
        handlers = list(self._subscribers.get(topic, ()))
        for handler in handlers:
            handler(snapshot)
        return len(handlers)


# Shared by every store in the process
change_hub = ChangeHub()
