"""
Unit tests for the ActiveTrackingSession state machine.
"""

import pytest
from datetime import datetime, timedelta
import uuid

from smartflow.domain.models.base import InvalidStateError, ValidationError
from smartflow.domain.models.tracking_session import ActiveTrackingSession, TrackingStatus


T0 = datetime(2024, 3, 4, 8, 0, 0)


def at(minutes: int, seconds: int = 0) -> datetime:
    return T0 + timedelta(minutes=minutes, seconds=seconds)


class TestActiveTrackingSession:
    """Test cases for ActiveTrackingSession."""

    def setup_method(self):
        self.session = ActiveTrackingSession.start(
            tenant_id=uuid.uuid4(),
            user_id=uuid.uuid4(),
            time_category_id=uuid.uuid4(),
            now=T0,
            description="Sprint planning"
        )

    def test_start_creates_running_session(self):
        assert self.session.id is not None
        assert self.session.status == TrackingStatus.RUNNING
        assert self.session.is_active is True
        assert self.session.start_time == T0
        assert self.session.last_activity_time == T0
        assert self.session.paused_minutes == 0
        assert self.session.created_at == T0

    def test_start_requires_category(self):
        with pytest.raises(ValidationError, match="Time category ID is required"):
            ActiveTrackingSession.start(
                tenant_id=uuid.uuid4(), user_id=uuid.uuid4(), time_category_id=None, now=T0
            )

    def test_pause_then_resume_accumulates_paused_minutes(self):
        self.session.pause(at(30))
        assert self.session.status == TrackingStatus.PAUSED
        assert self.session.last_activity_time == at(30)

        self.session.resume(at(45))

        assert self.session.status == TrackingStatus.RUNNING
        assert self.session.paused_minutes == 15
        assert self.session.last_activity_time == at(45)

    def test_repeated_pauses_add_up(self):
        self.session.pause(at(10))
        self.session.resume(at(20))
        self.session.pause(at(40))
        self.session.resume(at(45))

        assert self.session.paused_minutes == 15

    def test_pause_rounds_to_nearest_minute(self):
        self.session.pause(at(10))
        self.session.resume(at(12, 40))

        assert self.session.paused_minutes == 3

    def test_pause_when_paused_is_rejected(self):
        self.session.pause(at(5))

        with pytest.raises(InvalidStateError, match="Session is not currently running"):
            self.session.pause(at(6))

    def test_resume_when_running_is_rejected(self):
        with pytest.raises(InvalidStateError, match="Session is not currently paused"):
            self.session.resume(at(5))

    def test_stop_is_terminal(self):
        self.session.stop(at(60))

        assert self.session.status == TrackingStatus.STOPPED
        assert self.session.is_active is False
        assert self.session.updated_at == at(60)

        with pytest.raises(InvalidStateError, match="Session is already stopped"):
            self.session.stop(at(61))
        with pytest.raises(InvalidStateError):
            self.session.pause(at(61))
        with pytest.raises(InvalidStateError):
            self.session.resume(at(61))

    def test_update_details_merges_provided_fields(self):
        project_id = uuid.uuid4()
        original_category = self.session.time_category_id

        self.session.update_details(at(20), project_id=project_id)

        assert self.session.project_id == project_id
        assert self.session.time_category_id == original_category
        assert self.session.description == "Sprint planning"
        assert self.session.last_activity_time == at(20)

    def test_tracked_minutes_subtracts_pauses(self):
        self.session.pause(at(30))
        self.session.resume(at(45))

        assert self.session.tracked_minutes(at(90)) == 75

    def test_tracked_minutes_never_negative(self):
        self.session.paused_minutes = 500

        assert self.session.tracked_minutes(at(10)) == 0

    def test_elapsed_minutes_running(self):
        assert self.session.elapsed_minutes(at(25)) == 25

    def test_elapsed_minutes_frozen_while_paused(self):
        self.session.pause(at(20))

        assert self.session.elapsed_minutes(at(50)) == 20

    def test_elapsed_minutes_after_resume(self):
        self.session.pause(at(20))
        self.session.resume(at(30))

        assert self.session.elapsed_minutes(at(40)) == 30

    def test_elapsed_minutes_stopped_is_zero(self):
        self.session.stop(at(40))

        assert self.session.elapsed_minutes(at(50)) == 0
