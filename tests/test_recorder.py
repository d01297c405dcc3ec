#!/usr/bin/env python3
"""Tests for record_service, update_odometer and parse_odometer."""
import pytest
from dataclasses import replace
from datetime import datetime

from motocare import (
    ENGINE_OIL_ID,
    InvalidInputError,
    NotFoundError,
    Status,
    evaluate,
    get_item,
    new_state,
    parse_odometer,
    record_service,
    update_odometer,
)

CREATED = datetime(2025, 1, 10)
NOW = datetime(2025, 8, 15, 9, 30)


@pytest.fixture
def state():
    return new_state(CREATED, "Click 125i", 12500)


class TestRecordService:
    """Tests for record_service."""

    def test_prepends_history_entry(self, state):
        first = record_service(state, "tires", NOW, log_id="a")
        second = record_service(first, "battery", NOW, log_id="b")
        assert len(second.history) == len(first.history) + 1
        assert second.history[0].id == "b"
        assert second.history[1:] == first.history

    def test_history_entry_fields(self, state):
        result = record_service(state, "gear-oil", NOW, notes="80W-90", log_id="log-1")
        log = result.history[0]
        assert log.id == "log-1"
        assert log.item_id == "gear-oil"
        assert log.item_name == "Gear Oil"
        assert log.odo_at_service == 12500
        assert log.date == NOW
        assert log.notes == "80W-90"

    def test_generates_log_id(self, state):
        result = record_service(state, "gear-oil", NOW)
        assert result.history[0].id

    def test_resets_item_markers(self, state):
        result = record_service(state, "spark-plug", NOW)
        item = get_item(result, "spark-plug")
        assert item.last_service_odo == 12500
        assert item.last_service_date == NOW

    def test_other_items_untouched(self, state):
        result = record_service(state, "spark-plug", NOW)
        before = {i.id: i for i in state.maintenance_items if i.id != "spark-plug"}
        after = {i.id: i for i in result.maintenance_items if i.id != "spark-plug"}
        assert before == after

    def test_input_state_unchanged(self, state):
        record_service(state, ENGINE_OIL_ID, NOW)
        assert state.history == ()
        assert get_item(state, ENGINE_OIL_ID).last_service_date == CREATED

    def test_engine_oil_count_increments(self, state):
        result = record_service(state, ENGINE_OIL_ID, NOW)
        result = record_service(result, ENGINE_OIL_ID, NOW)
        assert get_item(result, ENGINE_OIL_ID).service_count == 2

    def test_count_starts_from_none(self, state):
        """A missing counter counts as 0."""
        oil = replace(get_item(state, ENGINE_OIL_ID), service_count=None)
        items = tuple(oil if i.id == oil.id else i for i in state.maintenance_items)
        result = record_service(replace(state, maintenance_items=items), ENGINE_OIL_ID, NOW)
        assert get_item(result, ENGINE_OIL_ID).service_count == 1

    def test_other_services_leave_counts_alone(self, state):
        result = record_service(state, "coolant", NOW)
        counts = lambda s: [i.service_count for i in s.maintenance_items]
        assert counts(result) == counts(state)

    def test_counting_follows_flag_not_id(self, state):
        """Any item flagged to track its count is counted."""
        coolant = replace(get_item(state, "coolant"), tracks_service_count=True)
        items = tuple(coolant if i.id == "coolant" else i for i in state.maintenance_items)
        result = record_service(replace(state, maintenance_items=items), "coolant", NOW)
        assert get_item(result, "coolant").service_count == 1

    def test_unknown_item_raises(self, state):
        with pytest.raises(NotFoundError):
            record_service(state, "turbo", NOW)

    def test_engine_oil_scenario(self):
        """Warning at 12,500 becomes full health after the oil change."""
        state = update_odometer(new_state(CREATED), 10000)
        state = record_service(state, ENGINE_OIL_ID, CREATED)
        state = update_odometer(state, 12500)
        before = evaluate(get_item(state, ENGINE_OIL_ID), state.current_odo, NOW)
        assert before.status == Status.WARNING
        assert before.remaining == 500

        count = get_item(state, ENGINE_OIL_ID).service_count
        state = record_service(state, ENGINE_OIL_ID, NOW)
        oil = get_item(state, ENGINE_OIL_ID)
        assert oil.last_service_odo == 12500
        assert oil.service_count == count + 1

        after = evaluate(oil, state.current_odo, NOW)
        assert after.percentage == 100
        assert after.status == Status.GOOD


class TestUpdateOdometer:
    """Tests for update_odometer."""

    def test_accepts_higher_reading(self, state):
        result = update_odometer(state, 13000)
        assert result.current_odo == 13000
        assert result.maintenance_items == state.maintenance_items
        assert result.history == state.history

    def test_accepts_equal_reading(self, state):
        assert update_odometer(state, 12500).current_odo == 12500

    @pytest.mark.parametrize("value", [0, 12499, 12499.9])
    def test_regression_returns_same_state(self, state, value):
        assert update_odometer(state, value) is state

    @pytest.mark.parametrize("value", ["13000", None, True, float("nan"), float("inf")])
    def test_non_numeric_rejected(self, state, value):
        with pytest.raises(InvalidInputError):
            update_odometer(state, value)


class TestParseOdometer:
    """Tests for parse_odometer."""

    def test_plain_number(self):
        assert parse_odometer("12500") == 12500

    def test_thousands_separator_and_spaces(self):
        assert parse_odometer(" 12,500 ") == 12500

    def test_decimal_truncated(self):
        assert parse_odometer("12500.7") == 12500

    @pytest.mark.parametrize("text", ["", "abc", "12km", "nan"])
    def test_non_numeric_rejected(self, text):
        with pytest.raises(InvalidInputError):
            parse_odometer(text)

    def test_negative_rejected(self):
        with pytest.raises(InvalidInputError):
            parse_odometer("-5")

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_odometer("abc")
