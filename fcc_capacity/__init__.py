# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Capacity compliance and vacancy projection engine for licensed family
child care programs.
"""

from .domain.ages import age_bracket, age_in_months, classify, format_age
from .domain.capacity_rules import (
    CALIFORNIA_FCC_RULES,
    InfantRatioTier,
    available_infant_spots,
    capacity_rule_description,
    licensed_max_capacity,
    max_infants_allowed,
)
from .domain.compliance import evaluate_compliance
from .domain.portfolio import summarize_portfolio
from .domain.projections import (
    DEFAULT_POLICY,
    ProjectionPolicy,
    kindergarten_start_date,
    next_opening_by_age_group,
    project_openings,
)
from .domain.vacancies import (
    check_vacancy_report,
    current_vacancies,
    propose_from_roster,
    propose_vacancy_split,
    roster_breakdown,
    snapshot_from_status,
)
from .exceptions import InvalidInputError, RosterValidationError
from .models import (
    AgeBracket,
    AgeGroup,
    CapacityConfig,
    Child,
    ComplianceStatus,
    EnrollmentSnapshot,
    OpeningReason,
    ProgramRoster,
    ProgramType,
    ProjectedOpening,
    VacancySplit,
)
from .services import CapacityEngineService, EngineConfig, create_capacity_engine

__version__ = "1.0.0"

__all__ = [
    "age_bracket",
    "age_in_months",
    "classify",
    "format_age",
    "CALIFORNIA_FCC_RULES",
    "InfantRatioTier",
    "available_infant_spots",
    "capacity_rule_description",
    "licensed_max_capacity",
    "max_infants_allowed",
    "evaluate_compliance",
    "summarize_portfolio",
    "DEFAULT_POLICY",
    "ProjectionPolicy",
    "kindergarten_start_date",
    "next_opening_by_age_group",
    "project_openings",
    "check_vacancy_report",
    "current_vacancies",
    "propose_from_roster",
    "propose_vacancy_split",
    "roster_breakdown",
    "snapshot_from_status",
    "InvalidInputError",
    "RosterValidationError",
    "CapacityEngineService",
    "EngineConfig",
    "create_capacity_engine",
    "AgeBracket",
    "AgeGroup",
    "CapacityConfig",
    "Child",
    "ComplianceStatus",
    "EnrollmentSnapshot",
    "OpeningReason",
    "ProgramRoster",
    "ProgramType",
    "ProjectedOpening",
    "VacancySplit",
]
