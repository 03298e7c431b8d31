# File: tests/unit/test_models.py
"""
Unit tests for data models.
Tests the Interval value type, sources and result models.
"""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, date, timedelta

from availability.core.config_manager import Config
from availability.core.exceptions import SynthesizedIntervalError
from availability.utils.clock import local_now
from availability.models import (
    Interval,
    IntervalSource,
    interval_from_dict,
    parse_iso_datetime,
    AvailabilityStatistics,
    WriteResult,
    ValidationError,
)


# ==================== IntervalSource Tests ====================

class TestIntervalSource:
    """Tests for IntervalSource enum."""

    def test_priority_ranking(self):
        """Override beats manual beats imports beats recurring."""
        assert IntervalSource.OVERRIDE.priority == 4
        assert IntervalSource.MANUAL.priority == 3
        assert IntervalSource.GOOGLE_CALENDAR.priority == 2
        assert IntervalSource.RECURRING.priority == 1

    def test_only_imports_are_read_only(self):
        """Test editability flags."""
        assert IntervalSource.MANUAL.is_editable() is True
        assert IntervalSource.OVERRIDE.is_editable() is True
        assert IntervalSource.RECURRING.is_editable() is True
        assert IntervalSource.GOOGLE_CALENDAR.is_editable() is False

    def test_classification_helpers(self):
        assert IntervalSource.OVERRIDE.is_manual() is True
        assert IntervalSource.RECURRING.is_manual() is False
        assert IntervalSource.GOOGLE_CALENDAR.is_imported() is True
        assert IntervalSource.MANUAL.is_currently_supported() is True
        assert IntervalSource.RECURRING.is_currently_supported() is False

    def test_display_name(self):
        assert str(IntervalSource.RECURRING) == "Recurring Pattern"
        assert IntervalSource.GOOGLE_CALENDAR.display_name == "Google Calendar"


# ==================== Interval Tests ====================

class TestInterval:
    """Tests for the Interval dataclass."""

    def test_defaults(self):
        """Test basic interval creation."""
        interval = Interval(owner_id=1, start=datetime(2030, 1, 1, 9), end=datetime(2030, 1, 1, 10))

        assert interval.id is None
        assert interval.timezone_label == "UTC"
        assert interval.source == IntervalSource.MANUAL
        assert interval.is_busy is False
        assert interval.is_all_day is False
        assert interval.synthesized is False

    def test_blank_timezone_label_defaults_to_utc(self):
        interval = Interval(1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10), timezone_label="  ")
        assert interval.timezone_label == "UTC"

    def test_string_source_is_converted(self):
        interval = Interval(1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10), source="OVERRIDE")
        assert interval.source == IntervalSource.OVERRIDE

    def test_interval_is_immutable(self):
        interval = Interval(1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10))
        with pytest.raises(FrozenInstanceError):
            interval.title = "Changed"

    def test_with_changes_returns_new_value(self):
        interval = Interval(1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10), title="Old")
        changed = interval.with_changes(title="New")

        assert changed.title == "New"
        assert interval.title == "Old"

    def test_merged_with_ignores_none_and_unknown_fields(self):
        """Partial updates only overwrite non-null fields."""
        interval = Interval(
            1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10),
            title="Gym", location="Downtown", is_busy=True
        )
        merged = interval.merged_with({'title': None, 'location': "Uptown", 'is_busy': False, 'owner_id': 99})

        assert merged.title == "Gym"
        assert merged.location == "Uptown"
        assert merged.is_busy is False
        assert merged.owner_id == 1

    def test_duration(self):
        """Test duration calculation."""
        interval = Interval(1, datetime(2030, 1, 1, 9, 0), datetime(2030, 1, 1, 11, 30))

        assert interval.duration_minutes() == 150
        assert interval.duration_hours() == 2

    def test_duration_of_invalid_range_is_zero(self):
        interval = Interval(1, datetime(2030, 1, 1, 11), datetime(2030, 1, 1, 9))
        assert interval.duration_minutes() == 0

    def test_overlap_is_strict(self):
        """Touching endpoints do not overlap."""
        first = Interval(1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10))
        overlapping = Interval(1, datetime(2030, 1, 1, 9, 30), datetime(2030, 1, 1, 10, 30))
        touching = Interval(1, datetime(2030, 1, 1, 10), datetime(2030, 1, 1, 11))

        assert first.overlaps_with(overlapping) is True
        assert overlapping.overlaps_with(first) is True
        assert first.overlaps_with(touching) is False
        assert touching.overlaps_with(first) is False

    def test_contains_is_inclusive(self):
        interval = Interval(1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10))

        assert interval.contains(datetime(2030, 1, 1, 9)) is True
        assert interval.contains(datetime(2030, 1, 1, 10)) is True
        assert interval.contains(datetime(2030, 1, 1, 10, 0, 1)) is False

    def test_is_in_past(self):
        interval = Interval(1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10))

        assert interval.is_in_past(datetime(2030, 1, 1, 10, 1)) is True
        assert interval.is_in_past(datetime(2030, 1, 1, 10)) is False

    def test_past_and_today_default_to_configured_zone(self, monkeypatch):
        """Without arguments, "now" is wall time in TIMEZONE rather than host time."""
        monkeypatch.setattr(Config, "TARGET_TIMEZONE", "Pacific/Kiritimati")
        zone_now = local_now()
        just_ended = Interval(1, zone_now - timedelta(hours=3), zone_now - timedelta(hours=1))
        upcoming = Interval(1, zone_now + timedelta(hours=1), zone_now + timedelta(hours=2))

        assert just_ended.is_in_past() is True
        assert upcoming.is_in_past() is False
        assert Interval(1, zone_now, zone_now + timedelta(minutes=1)).is_today() is True

    def test_date_helpers(self):
        """Multi-day intervals are on both their start and end dates."""
        interval = Interval(1, datetime(2030, 1, 1, 22), datetime(2030, 1, 2, 2))

        assert interval.is_multi_day() is True
        assert interval.is_on_date(date(2030, 1, 1)) is True
        assert interval.is_on_date(date(2030, 1, 2)) is True
        assert interval.is_on_date(date(2030, 1, 3)) is False
        assert interval.is_today(date(2030, 1, 2)) is True

    def test_all_day_shape(self):
        good = Interval(1, datetime(2030, 1, 1, 0, 0), datetime(2030, 1, 2, 23, 59), is_all_day=True)
        bad = Interval(1, datetime(2030, 1, 1, 8, 0), datetime(2030, 1, 1, 23, 59), is_all_day=True)
        not_all_day = Interval(1, datetime(2030, 1, 1, 8, 0), datetime(2030, 1, 1, 9, 0))

        assert good.is_valid_all_day() is True
        assert bad.is_valid_all_day() is False
        assert not_all_day.is_valid_all_day() is True

    def test_reminder_time(self):
        start = datetime(2030, 1, 1, 9)
        interval = Interval(1, start, start + timedelta(hours=1), reminder_offset_minutes=15)

        assert interval.reminder_time == datetime(2030, 1, 1, 8, 45)
        assert interval.with_changes(reminder_offset_minutes=None).reminder_time is None

    def test_free_slot_shape(self):
        """Implied free time is tagged and carries no id or reminder."""
        slot = Interval.free_slot(1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10))

        assert slot.synthesized is True
        assert slot.id is None
        assert slot.is_persisted is False
        assert slot.is_busy is False
        assert slot.source == IntervalSource.MANUAL
        assert slot.reminder_offset_minutes is None
        assert slot.title == "Available"

    def test_to_dict(self):
        """Test conversion to dictionary."""
        interval = Interval(
            owner_id=7,
            start=datetime(2030, 1, 1, 9),
            end=datetime(2030, 1, 1, 10),
            is_busy=True,
            title="Standup",
            reminder_offset_minutes=10,
        )

        result = interval.to_dict()

        assert result['ownerId'] == 7
        assert result['start'] == "2030-01-01T09:00:00"
        assert result['isBusy'] is True
        assert result['source'] == "MANUAL"
        assert result['reminderTime'] == "2030-01-01T08:50:00"
        assert result['synthesized'] is False

    def test_from_dict_accepts_camel_case(self):
        """Test creating an interval from wire-format keys."""
        data = {
            'ownerId': 3,
            'startTime': '2030-01-01T09:00:00Z',
            'endTime': '2030-01-01T10:00:00+02:00',
            'isBusy': True,
            'reminderMinutes': '5',
            'title': 'Call',
        }

        interval = interval_from_dict(data)

        assert interval.owner_id == 3
        assert interval.start == datetime(2030, 1, 1, 9)
        assert interval.end == datetime(2030, 1, 1, 10)
        assert interval.is_busy is True
        assert interval.reminder_offset_minutes == 5

    def test_from_dict_accepts_snake_case(self):
        interval = interval_from_dict({
            'owner_id': 1,
            'start': '2030-01-01',
            'end': '2030-01-01T23:59:00',
            'is_all_day': True,
            'source': 'GOOGLE_CALENDAR',
        })

        assert interval.start == datetime(2030, 1, 1)
        assert interval.is_all_day is True
        assert interval.source == IntervalSource.GOOGLE_CALENDAR

    def test_from_dict_parses_string_booleans(self):
        interval = interval_from_dict({
            "ownerId": 1,
            "start": "2030-01-01T09:00:00",
            "end": "2030-01-01T10:00:00",
            "isBusy": "false",
            "isAllDay": "0",
        })

        assert interval.is_busy is False
        assert interval.is_all_day is False
        assert interval_from_dict({"ownerId": 1, "isBusy": "True"}).is_busy is True

    def test_free_slot_survives_dict_round_trip(self, store):
        """A serialized free slot stays synthesized and is still refused by the store."""
        slot = Interval.free_slot(1, datetime(2030, 1, 1, 8), datetime(2030, 1, 1, 9))

        restored = interval_from_dict(slot.to_dict())

        assert restored.synthesized is True
        with pytest.raises(SynthesizedIntervalError):
            store.insert(restored)
        assert store.find_all_for_owner(1) == []


# ==================== Helper Tests ====================

class TestParseIsoDatetime:

    def test_empty_values(self):
        assert parse_iso_datetime(None) is None
        assert parse_iso_datetime("") is None

    def test_garbage_returns_none(self):
        assert parse_iso_datetime("next tuesday") is None

    def test_offset_is_dropped_not_converted(self):
        assert parse_iso_datetime("2030-01-01T09:00:00-05:00") == datetime(2030, 1, 1, 9)


# ==================== Result Model Tests ====================

class TestResultModels:

    def test_statistics_to_dict(self):
        stats = AvailabilityStatistics(total=5, free=2, busy=3)
        assert stats.to_dict() == {'totalEvents': 5, 'freeTimeSlots': 2, 'busyTimeSlots': 3}

    def test_write_result_conflicts(self):
        interval = Interval(1, datetime(2030, 1, 1, 9), datetime(2030, 1, 1, 10), id=1)

        assert WriteResult(interval).has_conflicts() is False
        assert WriteResult(interval, [interval]).has_conflicts() is True
        assert len(WriteResult(interval, [interval]).to_dict()['conflicts']) == 1

    def test_validation_error_str(self):
        assert str(ValidationError("start", "bad")) == "start: bad"
        assert str(ValidationError("start", "bad", 4)) == "Interval 4 - start: bad"
