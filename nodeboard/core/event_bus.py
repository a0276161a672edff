"""Event bus — an in-process ``EventSource`` that validates and dispatches build events.

Engine adapters, the ``replay`` and ``demo`` commands and the tests all
publish through an ``EventBus``.  Handlers run synchronously on the
publishing thread, so several producer threads may be inside handlers
at the same time.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from nodeboard.models.events import EVENT_TYPE_MAP, BuildEvent, EventKind

logger = logging.getLogger(__name__)

EventHandler = Callable[[BuildEvent], None]


class EventValidationError(ValueError):
    """Raised when an inbound event fails validation."""


@runtime_checkable
class EventSource(Protocol):
    """Anything a ``NodeLogger`` can subscribe to.

    Engine adapters implement this by registering *handler* against the
    engine's native callback for *kind* and converting payloads into
    ``nodeboard.models.events`` models.
    """

    def subscribe(self, kind: EventKind, handler: EventHandler) -> None:
        ...


def parse_event(data: Any) -> BuildEvent:
    """Validate a decoded event mapping into its concrete event model."""
    if not isinstance(data, dict):
        raise EventValidationError(
            f"Event must be a JSON object, got {type(data).__name__}"
        )

    kind_str = data.get("kind")
    if not kind_str:
        raise EventValidationError("Missing kind field")

    try:
        kind = EventKind(kind_str)
    except ValueError as exc:
        raise EventValidationError(f"Unknown event kind: {kind_str!r}") from exc

    model_cls = EVENT_TYPE_MAP[kind]
    try:
        return model_cls.model_validate(data)
    except Exception as exc:
        raise EventValidationError(f"Event validation failed: {exc}") from exc


class EventBus:
    """Routes build events to the handlers subscribed for their kind."""

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[EventHandler]] = {
            kind: [] for kind in EventKind
        }
        self._subscribe_lock = threading.Lock()

    def subscribe(self, kind: EventKind, handler: EventHandler) -> None:
        """Register a handler for a specific event kind."""
        with self._subscribe_lock:
            self._handlers[EventKind(kind)].append(handler)

    def handler_count(self, kind: EventKind) -> int:
        return len(self._handlers[EventKind(kind)])

    def publish(self, event: BuildEvent) -> None:
        """Dispatch *event* to every handler subscribed for its kind.

        Handler exceptions propagate to the publisher.
        """
        handlers = list(self._handlers[event.kind])
        if not handlers:
            logger.debug("No handlers for %s event", event.kind.value)
        for handler in handlers:
            handler(event)

    # ------------------------------------------------------------------
    # Receive (deserialize + validate)
    # ------------------------------------------------------------------

    def receive(self, raw_json: bytes | str) -> BuildEvent:
        """Deserialize and validate a raw JSON event."""
        try:
            if isinstance(raw_json, bytes):
                raw_json = raw_json.decode("utf-8")
            data = json.loads(raw_json)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise EventValidationError(f"Invalid JSON: {exc}") from exc

        return parse_event(data)

    def publish_raw(self, raw_json: bytes | str) -> BuildEvent:
        """Validate a raw JSON event and dispatch it.  Returns the parsed event."""
        event = self.receive(raw_json)
        self.publish(event)
        return event
