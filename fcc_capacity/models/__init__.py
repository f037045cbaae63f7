# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Models package - Pydantic schemas for the FCC capacity engine.
"""

# Base models
from .base import EngineModel, EngineResult

# Enumerations
from .enums import (
    ProgramType,
    AgeGroup,
    AgeBracket,
    DepartureReason,
    OpeningReason,
    FindingSeverity,
    FindingCode
)

# Input entities
from .entities import (
    LICENSED_MAX_CAPACITY,
    Child,
    CapacityConfig,
    EnrollmentSnapshot,
    ProgramRoster
)

# Derived results
from .results import (
    ComplianceFinding,
    ComplianceStatus,
    ProjectedOpening,
    VacancySplit,
    RegulatoryVacancy,
    RosterBreakdown,
    VacancyReportCheck,
    ProgramSummary,
    PortfolioSummary
)

__all__ = [
    # Base models
    "EngineModel",
    "EngineResult",

    # Enumerations
    "ProgramType",
    "AgeGroup",
    "AgeBracket",
    "DepartureReason",
    "OpeningReason",
    "FindingSeverity",
    "FindingCode",

    # Input entities
    "LICENSED_MAX_CAPACITY",
    "Child",
    "CapacityConfig",
    "EnrollmentSnapshot",
    "ProgramRoster",

    # Derived results
    "ComplianceFinding",
    "ComplianceStatus",
    "ProjectedOpening",
    "VacancySplit",
    "RegulatoryVacancy",
    "RosterBreakdown",
    "VacancyReportCheck",
    "ProgramSummary",
    "PortfolioSummary"
]
