"""Tests for the request validator — presence, ordering and past-date rules."""

from __future__ import annotations

from datetime import date

import pytest

from vacation_tracker.common.exceptions import (
    InvalidRangeException,
    MissingFieldException,
    PastDateException,
)
from vacation_tracker.vacation.schemas import VacationRequestCreate
from vacation_tracker.vacation.validator import validate

TODAY = date(2024, 8, 1)


class TestValidate:

    def test_valid_candidate_resolves_day_count(self):
        result = validate(
            VacationRequestCreate(
                start_date=date(2024, 8, 15),
                end_date=date(2024, 8, 19),
                reason="x",
            ),
            today=TODAY,
        )
        assert result.days_requested == 5
        assert result.reason == "x"

    def test_accepts_plain_mapping(self):
        result = validate(
            {"start_date": "2024-08-15", "end_date": "2024-08-15", "reason": "Dentist"},
            today=TODAY,
        )
        assert result.start_date == date(2024, 8, 15)
        assert result.days_requested == 1

    def test_reason_is_trimmed(self):
        result = validate(
            {"start_date": TODAY, "end_date": TODAY, "reason": "  Beach  "},
            today=TODAY,
        )
        assert result.reason == "Beach"

    def test_whitespace_reason_is_missing(self):
        with pytest.raises(MissingFieldException) as exc_info:
            validate(
                {"start_date": date(2024, 8, 15), "end_date": date(2024, 8, 19), "reason": "   "},
                today=TODAY,
            )
        assert exc_info.value.fields == ["reason"]

    def test_all_missing_fields_reported(self):
        with pytest.raises(MissingFieldException) as exc_info:
            validate({}, today=TODAY)
        assert exc_info.value.fields == ["start_date", "end_date", "reason"]
        assert set(exc_info.value.errors) == {"start_date", "end_date", "reason"}

    def test_start_after_end_is_invalid_range(self):
        with pytest.raises(InvalidRangeException):
            validate(
                {"start_date": date(2024, 8, 19), "end_date": date(2024, 8, 15), "reason": "x"},
                today=TODAY,
            )

    def test_missing_fields_checked_before_range(self):
        with pytest.raises(MissingFieldException):
            validate(
                {"start_date": date(2024, 8, 19), "end_date": date(2024, 8, 15), "reason": ""},
                today=TODAY,
            )

    def test_range_checked_before_past_date(self):
        with pytest.raises(InvalidRangeException):
            validate(
                {"start_date": date(2024, 7, 20), "end_date": date(2024, 7, 10), "reason": "x"},
                today=TODAY,
            )

    def test_start_before_today_is_past_date(self):
        with pytest.raises(PastDateException) as exc_info:
            validate(
                {"start_date": date(2024, 7, 31), "end_date": date(2024, 8, 2), "reason": "x"},
                today=TODAY,
            )
        assert "start_date" in exc_info.value.errors

    def test_start_today_is_allowed(self):
        result = validate(
            {"start_date": TODAY, "end_date": date(2024, 8, 2), "reason": "x"},
            today=TODAY,
        )
        assert result.days_requested == 2

    def test_unreadable_date_reported_as_missing(self):
        with pytest.raises(MissingFieldException) as exc_info:
            validate(
                {"start_date": "2024-13-01", "end_date": "2024-08-19", "reason": "x"},
                today=TODAY,
            )
        assert exc_info.value.fields == ["start_date"]
        assert exc_info.value.status_code == 422
        assert exc_info.value.errors["start_date"] != ["This field is required."]

    def test_non_date_values_name_every_bad_field(self):
        with pytest.raises(MissingFieldException) as exc_info:
            validate({"start_date": "someday", "end_date": "soon", "reason": "x"}, today=TODAY)
        assert exc_info.value.fields == ["start_date", "end_date"]
