"""Tests for identity, dashboard and event models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from nodeboard.core.timer import ProjectTimer
from nodeboard.models.dashboard import NodeSlot, NotabilityRecord
from nodeboard.models.events import (
    EVENT_TYPE_MAP,
    BuildStartedEvent,
    EventKind,
    ProjectStartedEvent,
    TargetStartedEvent,
)
from nodeboard.models.identity import (
    INVALID_ID,
    BuildEventContext,
    ProjectContext,
    ProjectInstance,
)


class TestIdentityModels:
    def test_structural_equality(self):
        assert ProjectContext(id=3) == ProjectContext(id=3)
        assert ProjectContext(id=3) != ProjectContext(id=4)
        assert ProjectInstance(id=3) == ProjectInstance(id=3)

    def test_usable_as_dict_keys(self):
        timers = {ProjectContext(id=1): "a", ProjectContext(id=2): "b"}
        assert timers[ProjectContext(id=1)] == "a"
        assert len({ProjectInstance(id=9), ProjectInstance(id=9)}) == 1

    def test_identities_are_frozen(self):
        context = ProjectContext(id=1)
        with pytest.raises(ValidationError):
            context.id = 2

    def test_event_context_defaults_to_invalid(self):
        context = BuildEventContext()
        assert context.project_context_id == INVALID_ID
        assert context.project_instance_id == INVALID_ID
        assert context.node_id == INVALID_ID


class TestDashboardModels:
    def test_node_slot_reads_shared_timer(self, clock):
        timer = ProjectTimer(clock)
        slot = NodeSlot(project_path="a.csproj", target_name="Build", timer=timer)
        clock.advance(2.5)
        assert slot.elapsed_seconds == pytest.approx(2.5)
        assert slot.timer is timer

    def test_notability_record(self):
        record = NotabilityRecord(
            is_notable=False, path="a.csproj", requested_targets="GetNativeManifest"
        )
        assert not record.is_notable
        assert record.requested_targets == "GetNativeManifest"


class TestTimer:
    def test_elapsed_tracks_clock(self, clock):
        timer = ProjectTimer.start_new(clock)
        assert timer.elapsed_seconds == 0.0
        clock.advance(1.5)
        assert timer.elapsed_seconds == pytest.approx(1.5)

    def test_elapsed_never_negative(self, clock):
        timer = ProjectTimer(clock)
        clock.advance(-1.0)
        assert timer.elapsed_seconds == 0.0


class TestEvents:
    def test_every_kind_has_a_model(self):
        assert set(EVENT_TYPE_MAP) == set(EventKind)
        for kind, model_cls in EVENT_TYPE_MAP.items():
            assert model_cls.model_fields["kind"].default == kind

    def test_project_started_defaults(self):
        event = ProjectStartedEvent(project_file="a.csproj")
        assert event.kind == EventKind.PROJECT_STARTED
        assert event.target_names == ""
        assert event.context == BuildEventContext()

    def test_target_started_requires_target_name(self):
        with pytest.raises(ValidationError):
            TargetStartedEvent(project_file="a.csproj")

    def test_events_are_frozen(self):
        event = BuildStartedEvent()
        with pytest.raises(ValidationError):
            event.message = "changed"
