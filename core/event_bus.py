"""In-memory publish/subscribe bus connecting the generation systems."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Mapping, Sequence

from core.events.topics import EventTopic

__all__ = ["EventBus", "Subscriber", "Topic"]

Topic = str | EventTopic
Subscriber = Callable[..., None]

logger = logging.getLogger(__name__)


def _topic_key(topic: Topic) -> str:
    if isinstance(topic, EventTopic):
        return topic.value
    return str(topic)


class EventBus:
    """Synchronous dispatcher keyed by topic name.

    ``EventTopic`` members and their string values address the same
    subscribers. A payload may arrive as a positional mapping, as keywords,
    or both (keywords override). Subscribers run in registration order and
    their exceptions reach the publisher unchanged.
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[str, list[Subscriber]] = defaultdict(list)

    def subscribe(self, topic: Topic, callback: Subscriber) -> None:
        """Register ``callback``; registering the same callback twice is a no-op."""

        handlers = self._handlers[_topic_key(topic)]
        if callback not in handlers:
            handlers.append(callback)

    def unsubscribe(self, topic: Topic, callback: Subscriber) -> None:
        key = _topic_key(topic)
        handlers = self._handlers.get(key, [])
        if callback in handlers:
            handlers.remove(callback)
        if key in self._handlers and not handlers:
            del self._handlers[key]

    def publish(
        self,
        topic: Topic,
        payload: Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ) -> None:
        key = _topic_key(topic)
        arguments = {**(payload or {}), **kwargs}
        handlers = tuple(self._handlers.get(key, ()))
        logger.debug("Dispatching %s to %d subscriber(s)", key, len(handlers))
        for handler in handlers:
            handler(**arguments)

    def get_subscribers(self, topic: Topic) -> Sequence[Subscriber]:
        return tuple(self._handlers.get(_topic_key(topic), ()))
