# SPDX-License-Identifier: Apache-2.0

"""
Compliance evaluation domain logic.

This module combines a roster snapshot and a capacity configuration into a
ComplianceStatus. Hard violations are reported as errors and approaching
limits as warnings; neither is raised.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from .ages import AGING_OUT_MONTHS, classify
from .capacity_rules import (
    RuleTable,
    available_infant_spots,
    max_infants_allowed,
    rule_tier,
)
from ..models.entities import CapacityConfig, Child
from ..models.enums import AgeGroup, FindingCode, FindingSeverity
from ..models.results import ComplianceFinding, ComplianceStatus
from ..utils.dates import parse_iso_date


@dataclass(frozen=True)
class AgeGroupCounts:
    """Headcount per regulatory age group at one date."""
    infants: int = 0
    non_infants: int = 0
    aged_out: int = 0

    @property
    def total(self) -> int:
        return self.infants + self.non_infants


def count_age_groups(children: Iterable[Child], as_of: date,
                     aging_out_months: int = AGING_OUT_MONTHS) -> AgeGroupCounts:
    """Classify every child; aged-out children are tallied separately."""
    infants = non_infants = aged_out = 0

    for child in children:
        group = classify(child.date_of_birth, as_of, aging_out_months)
        if group == AgeGroup.INFANT:
            infants += 1
        elif group == AgeGroup.NON_INFANT:
            non_infants += 1
        else:
            aged_out += 1

    return AgeGroupCounts(infants=infants, non_infants=non_infants, aged_out=aged_out)


def _error(code: FindingCode, message: str, actual: int, limit: int) -> ComplianceFinding:
    return ComplianceFinding(
        code=code, severity=FindingSeverity.ERROR, message=message, actual=actual, limit=limit
    )


def _warning(code: FindingCode, message: str, actual: Optional[int] = None,
             limit: Optional[int] = None) -> ComplianceFinding:
    return ComplianceFinding(
        code=code, severity=FindingSeverity.WARNING, message=message, actual=actual, limit=limit
    )


def evaluate_compliance(
    children: Iterable[Child],
    config: CapacityConfig,
    as_of: Optional[date] = None,
    rules: Optional[RuleTable] = None,
    aging_out_months: int = AGING_OUT_MONTHS
) -> ComplianceStatus:
    """
    Evaluate a roster against its licensed capacity.

    Args:
        children: Roster snapshot
        config: Capacity configuration
        as_of: Evaluation date (defaults to today)
        rules: Alternate rule table (defaults to California FCC)
        aging_out_months: Age at which a child stops counting toward capacity

    Returns:
        ComplianceStatus with counts, limits, errors and warnings
    """
    as_of = parse_iso_date(as_of, "as_of") if as_of else date.today()
    counts = count_age_groups(children, as_of, aging_out_months)

    total_children = counts.total
    max_infants = max_infants_allowed(config.program_type, total_children, rules)
    max_total = config.total_capacity

    errors: List[ComplianceFinding] = []
    warnings: List[ComplianceFinding] = []

    if total_children > max_total:
        errors.append(_error(
            FindingCode.OVER_CAPACITY,
            f"Over capacity: {total_children} children exceeds licensed capacity of {max_total}",
            total_children, max_total
        ))

    if counts.infants > max_infants:
        errors.append(_error(
            FindingCode.INFANT_RATIO_VIOLATION,
            f"Infant ratio violation: {counts.infants} infants exceeds maximum of "
            f"{max_infants} allowed for {total_children} total children",
            counts.infants, max_infants
        ))

    if total_children == max_total:
        warnings.append(_warning(FindingCode.AT_FULL_CAPACITY, "At full capacity", total_children, max_total))
    elif total_children == max_total - 1:
        warnings.append(_warning(FindingCode.NEAR_FULL_CAPACITY, "Near full capacity", total_children, max_total))

    if counts.infants == max_infants and counts.infants > 0:
        warnings.append(_warning(
            FindingCode.AT_MAX_INFANT_CAPACITY, "At maximum infant capacity", counts.infants, max_infants
        ))

    # Reminder only: K-12 enrollment is not known to the engine
    if total_children > 0:
        tier = rule_tier(config.program_type, total_children, rules)
        if tier.requires_school_age_mix:
            warnings.append(_warning(
                FindingCode.SCHOOL_AGE_MIX_REQUIRED,
                f"{tier.range_label} children requires: 1 child in K-12 + 1 child age 6+",
                total_children
            ))

    return ComplianceStatus(
        as_of=as_of,
        total_children=total_children,
        infant_count=counts.infants,
        non_infant_count=counts.non_infants,
        max_infants_allowed=max_infants,
        max_total_allowed=max_total,
        infant_spots_available=available_infant_spots(
            config.program_type, max_total, counts.infants, counts.non_infants, rules
        ),
        total_spots_available=max(0, max_total - total_children),
        warnings=warnings,
        errors=errors,
    )
