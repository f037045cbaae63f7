# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Input entities for the FCC capacity engine.

These are snapshots supplied by the roster store; the engine only reads them.
"""

from datetime import date
from typing import Dict, Optional, Tuple

from pydantic import Field, field_validator, model_validator

from .base import EngineModel
from .enums import DepartureReason, ProgramType
from ..utils.dates import parse_iso_date

# Licensed headcount ceilings per program tier
LICENSED_MAX_CAPACITY: Dict[ProgramType, int] = {
    ProgramType.SMALL_FAMILY: 8,
    ProgramType.LARGE_FAMILY: 14,
}


class Child(EngineModel):
    """A roster entry."""

    id: str = Field(..., min_length=1, description="Opaque child identifier")
    date_of_birth: date = Field(..., description="Date of birth")
    enrollment_date: date = Field(..., description="Date the child enrolled")
    expected_departure_date: Optional[date] = Field(None, description="Known upcoming departure date")
    departure_reason: Optional[DepartureReason] = Field(None, description="Reason for the known departure")
    notes: Optional[str] = Field(None, max_length=2000, description="Free-text notes")
    first_name: Optional[str] = Field(None, max_length=100, description="Display first name")
    last_name: Optional[str] = Field(None, max_length=100, description="Display last name")

    @field_validator('date_of_birth', 'enrollment_date', mode='before')
    @classmethod
    def validate_required_date(cls, v, info):
        """Accept only calendar dates or ISO date strings."""
        return parse_iso_date(v, info.field_name)

    @field_validator('expected_departure_date', mode='before')
    @classmethod
    def validate_departure_date(cls, v, info):
        """Treat blank departure dates as unset."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return parse_iso_date(v, info.field_name)

    @model_validator(mode='after')
    def validate_departure_after_birth(self):
        """A child cannot depart before being born."""
        if self.expected_departure_date and self.expected_departure_date < self.date_of_birth:
            raise ValueError('expected_departure_date cannot precede date_of_birth')
        return self

    @property
    def display_name(self) -> str:
        """Name shown in projections; falls back to the id."""
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else self.id


class CapacityConfig(EngineModel):
    """Licensed capacity configuration for one program."""

    program_type: ProgramType = Field(..., description="Licensed program tier")
    total_capacity: int = Field(..., ge=1, description="Licensed maximum headcount")

    @model_validator(mode='after')
    def validate_capacity_for_program(self):
        """Capacity cannot exceed the tier's licensed maximum."""
        ceiling = LICENSED_MAX_CAPACITY[self.program_type]
        if self.total_capacity > ceiling:
            raise ValueError(
                f'total_capacity {self.total_capacity} exceeds the maximum of {ceiling} '
                f'for {self.program_type.value}'
            )
        return self

    @classmethod
    def default_for(cls, program_type: ProgramType) -> "CapacityConfig":
        """Build a config at the tier's licensed maximum."""
        program_type = ProgramType(program_type)
        return cls(program_type=program_type, total_capacity=LICENSED_MAX_CAPACITY[program_type])


class EnrollmentSnapshot(EngineModel):
    """Headcount figures used by the vacancy allocator."""

    total_enrolled: int = Field(..., ge=0, description="Children currently counted")
    infant_count: int = Field(..., ge=0, description="Infants currently counted")

    @model_validator(mode='after')
    def validate_infants_within_total(self):
        """Infants are a subset of the enrolled headcount."""
        if self.infant_count > self.total_enrolled:
            raise ValueError('infant_count cannot exceed total_enrolled')
        return self


class ProgramRoster(EngineModel):
    """One program's configuration and roster, as supplied by the store."""

    id: str = Field(..., min_length=1, description="Program identifier")
    name: str = Field(..., min_length=1, max_length=200, description="Program name")
    config: CapacityConfig = Field(..., description="Capacity configuration")
    children: Tuple[Child, ...] = Field(default_factory=tuple, description="Roster snapshot")
