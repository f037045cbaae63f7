# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for Pydantic models.
"""

import pytest
from datetime import date, datetime
from pydantic import ValidationError

from fcc_capacity.models.entities import CapacityConfig, Child, EnrollmentSnapshot, ProgramRoster
from fcc_capacity.models.enums import DepartureReason, FindingCode, FindingSeverity, ProgramType
from fcc_capacity.models.results import ComplianceFinding, VacancySplit


class TestChildModel:
    """Test Child model validation."""

    def test_valid_child(self, sample_child_payload):
        """Test valid child creation from ISO strings."""
        child = Child(**sample_child_payload)

        assert child.id == "c-100"
        assert child.date_of_birth == date(2025, 3, 10)
        assert child.enrollment_date == date(2025, 9, 2)
        assert child.expected_departure_date is None
        assert child.display_name == "Ana Lima"

    def test_invalid_date_format(self, sample_child_payload):
        """Test non-ISO dates are rejected."""
        sample_child_payload["date_of_birth"] = "03/10/2025"

        with pytest.raises(ValidationError) as exc_info:
            Child(**sample_child_payload)

        assert "ISO date" in str(exc_info.value)

    def test_impossible_date(self, sample_child_payload):
        """Test calendar-invalid dates are rejected."""
        sample_child_payload["enrollment_date"] = "2025-02-30"

        with pytest.raises(ValidationError) as exc_info:
            Child(**sample_child_payload)

        assert "not a valid calendar date" in str(exc_info.value)

    def test_timestamp_rejected(self, sample_child_payload):
        """Test datetimes are not silently truncated."""
        sample_child_payload["date_of_birth"] = datetime(2025, 3, 10, 8, 30)

        with pytest.raises(ValidationError):
            Child(**sample_child_payload)

    def test_blank_departure_is_unset(self, sample_child_payload):
        sample_child_payload["expected_departure_date"] = "  "

        assert Child(**sample_child_payload).expected_departure_date is None

    def test_departure_before_birth_rejected(self, sample_child_payload):
        sample_child_payload["expected_departure_date"] = "2024-12-31"

        with pytest.raises(ValidationError) as exc_info:
            Child(**sample_child_payload)

        assert "cannot precede date_of_birth" in str(exc_info.value)

    def test_departure_reason_enum(self, sample_child_payload):
        sample_child_payload.update(expected_departure_date="2026-08-15", departure_reason="moving")

        child = Child(**sample_child_payload)

        assert child.departure_reason == DepartureReason.MOVING

    def test_unknown_departure_reason(self, sample_child_payload):
        sample_child_payload["departure_reason"] = "graduated"

        with pytest.raises(ValidationError):
            Child(**sample_child_payload)

    def test_empty_id_rejected(self, sample_child_payload):
        sample_child_payload["id"] = ""

        with pytest.raises(ValidationError):
            Child(**sample_child_payload)

    def test_child_is_immutable(self, sample_child_payload):
        child = Child(**sample_child_payload)

        with pytest.raises(ValidationError):
            child.date_of_birth = date(2020, 1, 1)


class TestCapacityConfigModel:
    """Test CapacityConfig validation."""

    def test_valid_config(self):
        config = CapacityConfig(program_type="large_family", total_capacity=12)

        assert config.program_type == ProgramType.LARGE_FAMILY
        assert config.total_capacity == 12

    @pytest.mark.parametrize("capacity", [0, -3])
    def test_capacity_must_be_positive(self, capacity):
        with pytest.raises(ValidationError):
            CapacityConfig(program_type=ProgramType.SMALL_FAMILY, total_capacity=capacity)

    def test_capacity_above_licensed_maximum(self):
        with pytest.raises(ValidationError) as exc_info:
            CapacityConfig(program_type=ProgramType.SMALL_FAMILY, total_capacity=9)

        assert "exceeds the maximum of 8" in str(exc_info.value)

    def test_unknown_program_type(self):
        with pytest.raises(ValidationError):
            CapacityConfig(program_type="center", total_capacity=8)

    def test_default_for_program_type(self):
        assert CapacityConfig.default_for(ProgramType.SMALL_FAMILY).total_capacity == 8
        assert CapacityConfig.default_for("large_family").total_capacity == 14


class TestEnrollmentSnapshotModel:
    """Test EnrollmentSnapshot validation."""

    def test_infants_cannot_exceed_total(self):
        with pytest.raises(ValidationError) as exc_info:
            EnrollmentSnapshot(total_enrolled=2, infant_count=3)

        assert "infant_count cannot exceed total_enrolled" in str(exc_info.value)

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            EnrollmentSnapshot(total_enrolled=-1, infant_count=0)


class TestResultModels:
    """Test derived result models."""

    def test_finding_str_is_message(self):
        finding = ComplianceFinding(
            code=FindingCode.AT_FULL_CAPACITY,
            severity=FindingSeverity.WARNING,
            message="At full capacity"
        )
        assert str(finding) == "At full capacity"

    def test_vacancy_split_payload(self):
        split = VacancySplit(infant_spots=1, toddler_spots=2, available_date=date(2026, 9, 1))

        payload = split.to_payload()

        assert payload["total_spots"] == 3
        assert payload["available_date"] == "2026-09-01"

    def test_program_roster(self, sample_child_payload):
        program = ProgramRoster(
            id="p-1",
            name="Sunflower Home",
            config={"program_type": "small_family", "total_capacity": 8},
            children=[sample_child_payload]
        )

        assert isinstance(program.children, tuple)
        assert program.children[0].id == "c-100"
