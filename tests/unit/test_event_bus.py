"""Tests for the in-process EventBus and event parsing."""

from __future__ import annotations

import json

import pytest

from nodeboard.core.event_bus import EventBus, EventSource, EventValidationError, parse_event
from nodeboard.models.events import (
    EventKind,
    MessageEvent,
    ProjectStartedEvent,
    TargetFinishedEvent,
)
from nodeboard.models.identity import BuildEventContext


class TestSubscribePublish:
    def test_bus_satisfies_event_source(self):
        assert isinstance(EventBus(), EventSource)

    def test_publish_routes_by_kind(self):
        bus = EventBus()
        received: list = []
        bus.subscribe(EventKind.PROJECT_STARTED, received.append)

        event = ProjectStartedEvent(project_file="a.csproj")
        bus.publish(event)
        bus.publish(MessageEvent(message="ignored"))

        assert received == [event]

    def test_multiple_handlers_in_subscription_order(self):
        bus = EventBus()
        calls: list[str] = []
        bus.subscribe(EventKind.MESSAGE, lambda e: calls.append("first"))
        bus.subscribe(EventKind.MESSAGE, lambda e: calls.append("second"))
        bus.publish(MessageEvent())
        assert calls == ["first", "second"]
        assert bus.handler_count(EventKind.MESSAGE) == 2

    def test_publish_without_handlers_is_silent(self):
        EventBus().publish(MessageEvent(message="nobody listens"))

    def test_handler_exceptions_propagate(self):
        bus = EventBus()

        def explode(event):
            raise RuntimeError("boom")

        bus.subscribe(EventKind.MESSAGE, explode)
        with pytest.raises(RuntimeError, match="boom"):
            bus.publish(MessageEvent())


class TestReceive:
    def test_round_trips_serialized_event(self):
        bus = EventBus()
        event = TargetFinishedEvent(
            context=BuildEventContext(project_context_id=4, project_instance_id=2, node_id=3),
            project_file="b.csproj",
            target_name="CoreCompile",
        )
        parsed = bus.receive(event.model_dump_json())
        assert isinstance(parsed, TargetFinishedEvent)
        assert parsed.context.node_id == 3
        assert parsed.target_name == "CoreCompile"

    def test_accepts_bytes(self):
        raw = json.dumps({"kind": "message", "message": "hi"}).encode("utf-8")
        assert EventBus().receive(raw).message == "hi"

    def test_publish_raw_dispatches(self):
        bus = EventBus()
        received: list = []
        bus.subscribe(EventKind.PROJECT_STARTED, received.append)
        bus.publish_raw(json.dumps({"kind": "project_started", "project_file": "c.csproj"}))
        assert received[0].project_file == "c.csproj"

    def test_invalid_json(self):
        with pytest.raises(EventValidationError, match="Invalid JSON"):
            EventBus().receive("{not json")

    def test_parse_event_rejects_non_object(self):
        with pytest.raises(EventValidationError, match="JSON object"):
            parse_event(["project_started"])
