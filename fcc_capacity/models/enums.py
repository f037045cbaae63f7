# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Enumeration types for the FCC capacity engine.
"""

from enum import Enum


class ProgramType(str, Enum):
    """Licensed family child care program tier."""
    SMALL_FAMILY = "small_family"
    LARGE_FAMILY = "large_family"


class AgeGroup(str, Enum):
    """Regulatory age group used for capacity limits."""
    INFANT = "infant"
    NON_INFANT = "non_infant"


class AgeBracket(str, Enum):
    """Public-facing age buckets used in vacancy reports."""
    INFANT = "infant"
    TODDLER = "toddler"
    PRESCHOOL = "preschool"
    SCHOOL_AGE = "school_age"


class DepartureReason(str, Enum):
    """Reason recorded for a known upcoming departure."""
    AGING_OUT = "aging_out"
    KINDERGARTEN = "kindergarten"
    MOVING = "moving"
    OTHER = "other"


class OpeningReason(str, Enum):
    """Why a projected seat becomes available."""
    AGING_INTO_NEXT_GROUP = "aging_into_next_group"
    AGING_OUT = "aging_out"
    KINDERGARTEN = "kindergarten"
    SCHEDULED_DEPARTURE = "scheduled_departure"


class FindingSeverity(str, Enum):
    """Severity of a compliance finding."""
    ERROR = "error"
    WARNING = "warning"


class FindingCode(str, Enum):
    """Machine-readable compliance finding codes."""
    OVER_CAPACITY = "over_capacity"
    INFANT_RATIO_VIOLATION = "infant_ratio_violation"
    AT_FULL_CAPACITY = "at_full_capacity"
    NEAR_FULL_CAPACITY = "near_full_capacity"
    AT_MAX_INFANT_CAPACITY = "at_max_infant_capacity"
    SCHOOL_AGE_MIX_REQUIRED = "school_age_mix_required"
    VACANCY_EXCEEDS_AVAILABLE = "vacancy_exceeds_available"
    VACANCY_EXCEEDS_INFANT_LIMIT = "vacancy_exceeds_infant_limit"
