# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Derived result models.

Results are recomputed on every call and never persisted.
"""

import datetime
from typing import List, Optional

from pydantic import Field, computed_field

from .base import EngineResult
from .entities import CapacityConfig
from .enums import AgeGroup, FindingCode, FindingSeverity, OpeningReason


class ComplianceFinding(EngineResult):
    """A regulatory error or warning found on a roster."""

    code: FindingCode = Field(..., description="Finding code")
    severity: FindingSeverity = Field(..., description="Error or warning")
    message: str = Field(..., description="Human-readable message")
    actual: Optional[int] = Field(None, description="Observed figure")
    limit: Optional[int] = Field(None, description="Applicable limit")

    def __str__(self) -> str:
        return self.message


class ComplianceStatus(EngineResult):
    """Point-in-time compliance snapshot for one program."""

    as_of: datetime.date
    total_children: int
    infant_count: int
    non_infant_count: int
    max_infants_allowed: int
    max_total_allowed: int
    infant_spots_available: int
    total_spots_available: int
    warnings: List[ComplianceFinding] = Field(default_factory=list)
    errors: List[ComplianceFinding] = Field(default_factory=list)

    @computed_field
    @property
    def is_compliant(self) -> bool:
        return not self.errors

    @property
    def warning_messages(self) -> List[str]:
        return [w.message for w in self.warnings]

    @property
    def error_messages(self) -> List[str]:
        return [e.message for e in self.errors]


class ProjectedOpening(EngineResult):
    """A future date on which a seat becomes available."""

    date: datetime.date
    age_group: AgeGroup
    reason: OpeningReason
    child_id: str
    child_name: str


class VacancySplit(EngineResult):
    """Proposed open seats per public-facing age bucket."""

    infant_spots: int = Field(0, ge=0)
    toddler_spots: int = Field(0, ge=0)
    preschool_spots: int = Field(0, ge=0)
    school_age_spots: int = Field(0, ge=0)
    available_date: Optional[datetime.date] = Field(None, description="When the reported seats open")

    @computed_field
    @property
    def total_spots(self) -> int:
        return self.infant_spots + self.toddler_spots + self.preschool_spots + self.school_age_spots


class RegulatoryVacancy(EngineResult):
    """Current openings for one regulatory age group."""

    age_group: AgeGroup
    current_count: int
    capacity: int
    available: int


class RosterBreakdown(EngineResult):
    """Roster headcount per public-facing age bucket."""

    infant: int = 0
    toddler: int = 0
    preschool: int = 0
    school_age: int = 0
    aged_out: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return self.infant + self.toddler + self.preschool + self.school_age


class VacancyReportCheck(EngineResult):
    """Findings for a provider-edited vacancy report."""

    errors: List[ComplianceFinding] = Field(default_factory=list)
    warnings: List[ComplianceFinding] = Field(default_factory=list)

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.errors


class ProgramSummary(EngineResult):
    """Compliance and next change for one program in a portfolio."""

    program_id: str
    name: str
    config: CapacityConfig
    status: ComplianceStatus
    next_change: Optional[ProjectedOpening] = None


class PortfolioSummary(EngineResult):
    """Totals across every program a provider operates."""

    total_programs: int
    total_children: int
    total_capacity: int
    total_infants: int
    programs_with_issues: int
    programs: List[ProgramSummary] = Field(default_factory=list)
