# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the capacity engine service layer.
"""

import pytest
from datetime import date
from unittest.mock import patch

from fcc_capacity.exceptions import InvalidInputError, RosterValidationError
from fcc_capacity.models.enums import AgeGroup, OpeningReason
from fcc_capacity.services.capacity_engine import (
    CapacityEngineService,
    EngineConfig,
    create_capacity_engine,
)

TODAY = date(2026, 6, 15)


@pytest.fixture
def service():
    """Service pinned to a fixed clock."""
    return CapacityEngineService(today=lambda: TODAY)


@pytest.fixture
def roster_payload():
    """Raw roster: two infants, two preschoolers and one kindergartner-to-be."""
    return [
        {"id": "a", "first_name": "Ava", "last_name": "Ng", "date_of_birth": "2025-11-02", "enrollment_date": "2026-02-01"},
        {"id": "b", "date_of_birth": "2024-10-20", "enrollment_date": "2025-03-01"},
        {"id": "c", "date_of_birth": "2023-01-05", "enrollment_date": "2024-01-08"},
        {"id": "d", "date_of_birth": "2022-12-12", "enrollment_date": "2024-01-08",
         "expected_departure_date": "2026-08-28", "departure_reason": "moving"},
        {"id": "e", "date_of_birth": "2021-04-04", "enrollment_date": "2023-09-05"},
    ]


@pytest.fixture
def config_payload():
    return {"program_type": "small_family", "total_capacity": 8}


class TestPayloadLoading:
    """Test raw payload validation."""

    def test_load_roster(self, service, roster_payload):
        children = service.load_roster(roster_payload)

        assert [c.id for c in children] == ["a", "b", "c", "d", "e"]
        assert children[0].date_of_birth == date(2025, 11, 2)

    def test_load_roster_reports_every_bad_record(self, service, roster_payload):
        roster_payload[1]["date_of_birth"] = "10/20/2024"
        roster_payload[3]["departure_reason"] = "unknown"

        with pytest.raises(RosterValidationError) as exc_info:
            service.load_roster(roster_payload)

        fields = [e["field"] for e in exc_info.value.errors]
        assert fields == ["children.1.date_of_birth", "children.3.departure_reason"]

    def test_invalid_roster_is_logged(self, service, roster_payload):
        roster_payload[0]["enrollment_date"] = "not-a-date"

        with patch("fcc_capacity.services.capacity_engine.logger") as mock_logger:
            with pytest.raises(RosterValidationError):
                service.load_roster(roster_payload)

        mock_logger.error.assert_called_once()

    def test_load_capacity_config_rejects_bad_capacity(self, service):
        with pytest.raises(RosterValidationError) as exc_info:
            service.load_capacity_config({"program_type": "large_family", "total_capacity": -2})

        assert exc_info.value.errors[0]["field"] == "config.total_capacity"

    def test_roster_validation_error_is_value_error(self, service):
        with pytest.raises(ValueError):
            service.load_capacity_config({"program_type": "small_family"})


class TestServiceOperations:
    """Test operations run against the injected clock."""

    def test_evaluate(self, service, roster_payload, config_payload):
        status = service.evaluate(roster_payload, config_payload)

        assert status.as_of == TODAY
        assert status.total_children == 5
        assert status.infant_count == 2
        assert status.max_infants_allowed == 3
        assert status.is_compliant is True

    def test_non_compliant_roster_logs_warning(self, service, config_payload):
        roster = [
            {"id": str(i), "date_of_birth": "2026-01-01", "enrollment_date": "2026-03-01"}
            for i in range(5)
        ]

        with patch("fcc_capacity.services.capacity_engine.logger") as mock_logger:
            status = service.evaluate(roster, config_payload)

        assert status.is_compliant is False
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["extra"]["errors"] == ["infant_ratio_violation"]

    def test_project_uses_default_horizon(self, service, roster_payload):
        openings = service.project(roster_payload)

        assert [(o.child_id, o.reason) for o in openings] == [
            ("d", OpeningReason.SCHEDULED_DEPARTURE),
            ("e", OpeningReason.KINDERGARTEN),
            ("b", OpeningReason.AGING_INTO_NEXT_GROUP),
        ]

    def test_project_with_short_horizon(self, service, roster_payload):
        openings = service.project(roster_payload, horizon_months=3)

        assert [o.child_id for o in openings] == ["d", "e"]

    def test_next_opening(self, service, roster_payload):
        opening = service.next_opening(roster_payload, "infant")

        assert opening.child_id == "b"
        assert opening.age_group == AgeGroup.INFANT

    def test_propose_vacancies(self, service, roster_payload, config_payload):
        split = service.propose_vacancies(roster_payload, config_payload)

        # 3 open seats; infant ceiling at 8 is 2 and two infants are enrolled
        assert (split.infant_spots, split.toddler_spots, split.preschool_spots, split.school_age_spots) == (0, 1, 1, 1)
        assert split.available_date == TODAY

    def test_check_report(self, service, roster_payload, config_payload):
        result = service.check_report(
            {"infant_spots": 2, "toddler_spots": 1},
            roster_payload,
            config_payload
        )

        assert result.is_valid is True
        assert result.warnings[0].code.value == "vacancy_exceeds_infant_limit"

    def test_vacancies_and_breakdown(self, service, roster_payload, config_payload):
        infant, non_infant = service.vacancies(roster_payload, config_payload)
        breakdown = service.breakdown(roster_payload)

        assert (infant.available, non_infant.available) == (1, 3)
        assert (breakdown.infant, breakdown.toddler, breakdown.preschool, breakdown.school_age) == (2, 0, 3, 0)

    def test_portfolio(self, service, roster_payload, config_payload):
        summary = service.portfolio([
            {"id": "p1", "name": "Maple Home", "config": config_payload, "children": roster_payload},
            {"id": "p2", "name": "Oak Home", "config": {"program_type": "large_family", "total_capacity": 12},
             "children": []},
        ])

        assert summary.total_programs == 2
        assert summary.total_children == 5
        assert summary.total_capacity == 20
        assert summary.total_infants == 2
        assert summary.programs_with_issues == 0
        assert summary.programs[0].next_change.child_id == "d"
        assert summary.programs[1].next_change is None

    def test_to_payload(self, service, roster_payload):
        payload = service.to_payload(service.project(roster_payload))

        assert payload[0] == {
            "date": "2026-08-28",
            "age_group": "non_infant",
            "reason": "scheduled_departure",
            "child_id": "d",
            "child_name": "d",
        }


class TestEngineFactory:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("FCC_DEFAULT_HORIZON_MONTHS", "FCC_AUTOFILL_HORIZON_MONTHS",
                     "FCC_KINDERGARTEN_CUTOFF_MONTH", "FCC_KINDERGARTEN_CUTOFF_DAY", "FCC_AGING_OUT_MONTHS"):
            monkeypatch.delenv(name, raising=False)

        engine = create_capacity_engine()

        assert engine.config.default_horizon_months == 12
        assert engine.config.autofill_horizon_months == 6
        assert engine.config.policy.kindergarten_cutoff_month == 9
        assert engine.config.policy.aging_out_months == 240

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("FCC_DEFAULT_HORIZON_MONTHS", "3")
        monkeypatch.setenv("FCC_KINDERGARTEN_CUTOFF_MONTH", "12")
        monkeypatch.setenv("FCC_KINDERGARTEN_CUTOFF_DAY", "2")

        engine = create_capacity_engine(today=lambda: TODAY)

        assert engine.config.default_horizon_months == 3
        assert engine.config.policy.kindergarten_cutoff_day == 2
        assert engine.today() == TODAY

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("FCC_DEFAULT_HORIZON_MONTHS", "twelve")

        with pytest.raises(InvalidInputError) as exc_info:
            create_capacity_engine()

        assert "FCC_DEFAULT_HORIZON_MONTHS" in str(exc_info.value)

    def test_negative_horizon_config(self):
        with pytest.raises(InvalidInputError):
            EngineConfig(default_horizon_months=-1)

    def test_leap_day_kindergarten_cutoff_rejected(self, monkeypatch):
        monkeypatch.setenv("FCC_KINDERGARTEN_CUTOFF_MONTH", "2")
        monkeypatch.setenv("FCC_KINDERGARTEN_CUTOFF_DAY", "29")

        with pytest.raises(InvalidInputError) as exc_info:
            create_capacity_engine()

        assert "kindergarten cutoff" in str(exc_info.value)

    def test_aging_out_months_drives_counts_and_projections(self, monkeypatch, config_payload):
        monkeypatch.setenv("FCC_AGING_OUT_MONTHS", "72")
        engine = create_capacity_engine(today=lambda: TODAY)
        roster = [
            {"id": "turns-six", "date_of_birth": "2020-08-15", "enrollment_date": "2022-01-03"},
            {"id": "over-six", "date_of_birth": "2020-04-15", "enrollment_date": "2022-01-03"},
        ]

        status = engine.evaluate(roster, config_payload)
        breakdown = engine.breakdown(roster)
        openings = engine.project(roster)

        assert (status.total_children, status.non_infant_count) == (1, 1)
        assert (breakdown.preschool, breakdown.aged_out) == (1, 1)
        assert [(o.child_id, o.reason, o.date) for o in openings] == [
            ("turns-six", OpeningReason.AGING_OUT, date(2026, 8, 15))
        ]
