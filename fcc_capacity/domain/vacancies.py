# SPDX-License-Identifier: Apache-2.0

"""
Vacancy reporting domain logic.

This module proposes how open seats are split across the public-facing age
buckets, lists current openings per regulatory group, and checks a
provider-edited vacancy report against the roster.
"""

from datetime import date
from typing import Iterable, List, Optional

from .ages import AGING_OUT_MONTHS, age_bracket
from .capacity_rules import RuleTable, max_infants_allowed
from .compliance import count_age_groups, evaluate_compliance
from .projections import DEFAULT_POLICY, ProjectionPolicy, project_openings
from ..models.entities import CapacityConfig, Child, EnrollmentSnapshot
from ..models.enums import AgeBracket, AgeGroup, FindingCode, FindingSeverity
from ..models.results import (
    ComplianceFinding,
    ComplianceStatus,
    RegulatoryVacancy,
    RosterBreakdown,
    VacancyReportCheck,
    VacancySplit,
)
from ..utils.dates import parse_iso_date


def snapshot_from_status(status: ComplianceStatus) -> EnrollmentSnapshot:
    """Headcount figures the allocator needs, taken from a compliance status."""
    return EnrollmentSnapshot(total_enrolled=status.total_children, infant_count=status.infant_count)


def propose_vacancy_split(
    snapshot: EnrollmentSnapshot,
    config: CapacityConfig,
    rules: Optional[RuleTable] = None
) -> VacancySplit:
    """
    Propose a vacancy report split across the four age buckets.

    Infant spots are bounded by the infant ceiling at full capacity, since
    that is how many infants the program can hold once every seat is filled.
    The remaining seats are split evenly; leftovers go to toddlers first,
    then preschool.

    Args:
        snapshot: Current enrollment figures
        config: Capacity configuration
        rules: Alternate rule table (defaults to California FCC)

    Returns:
        Proposed VacancySplit; the provider may edit it before submitting
    """
    total_available = max(0, config.total_capacity - snapshot.total_enrolled)
    ceiling_at_capacity = max_infants_allowed(config.program_type, config.total_capacity, rules)

    infant_spots = max(0, min(ceiling_at_capacity - snapshot.infant_count, total_available))

    remaining = max(0, total_available - infant_spots)
    base, extra = divmod(remaining, 3)

    return VacancySplit(
        infant_spots=infant_spots,
        toddler_spots=base + (1 if extra >= 1 else 0),
        preschool_spots=base + (1 if extra >= 2 else 0),
        school_age_spots=base,
    )


def propose_from_roster(
    children: Iterable[Child],
    config: CapacityConfig,
    as_of: Optional[date] = None,
    horizon_months: int = 6,
    policy: ProjectionPolicy = DEFAULT_POLICY,
    rules: Optional[RuleTable] = None
) -> VacancySplit:
    """
    Evaluate, project and allocate in one pass.

    The proposal's ``available_date`` is ``as_of`` when seats are open now,
    otherwise the earliest projected opening in the horizon, otherwise None.
    """
    as_of = parse_iso_date(as_of, "as_of") if as_of else date.today()
    roster = tuple(children)

    status = evaluate_compliance(roster, config, as_of, rules, policy.aging_out_months)
    split = propose_vacancy_split(snapshot_from_status(status), config, rules)

    if split.total_spots > 0:
        available_date = as_of
    else:
        openings = project_openings(roster, horizon_months, as_of, policy)
        available_date = openings[0].date if openings else None

    return split.model_copy(update={"available_date": available_date})


def current_vacancies(
    children: Iterable[Child],
    config: CapacityConfig,
    as_of: Optional[date] = None,
    rules: Optional[RuleTable] = None,
    aging_out_months: int = AGING_OUT_MONTHS
) -> List[RegulatoryVacancy]:
    """Openings right now for each regulatory age group."""
    as_of = parse_iso_date(as_of, "as_of") if as_of else date.today()
    counts = count_age_groups(children, as_of, aging_out_months)
    max_infants = max_infants_allowed(config.program_type, counts.total, rules)

    return [
        RegulatoryVacancy(
            age_group=AgeGroup.INFANT,
            current_count=counts.infants,
            capacity=max_infants,
            available=max(0, max_infants - counts.infants),
        ),
        RegulatoryVacancy(
            age_group=AgeGroup.NON_INFANT,
            current_count=counts.non_infants,
            capacity=max(0, config.total_capacity - counts.infants),
            available=max(0, config.total_capacity - counts.total),
        ),
    ]


def roster_breakdown(children: Iterable[Child], as_of: Optional[date] = None,
                     aging_out_months: int = AGING_OUT_MONTHS) -> RosterBreakdown:
    """Count the roster per public-facing age bucket."""
    as_of = parse_iso_date(as_of, "as_of") if as_of else date.today()
    tally = {bracket: 0 for bracket in AgeBracket}
    aged_out = 0

    for child in children:
        bracket = age_bracket(child.date_of_birth, as_of, aging_out_months)
        if bracket is None:
            aged_out += 1
        else:
            tally[bracket] += 1

    return RosterBreakdown(
        infant=tally[AgeBracket.INFANT],
        toddler=tally[AgeBracket.TODDLER],
        preschool=tally[AgeBracket.PRESCHOOL],
        school_age=tally[AgeBracket.SCHOOL_AGE],
        aged_out=aged_out,
    )


def check_vacancy_report(
    split: VacancySplit,
    snapshot: EnrollmentSnapshot,
    config: CapacityConfig,
    rules: Optional[RuleTable] = None
) -> VacancyReportCheck:
    """
    Check a provider-edited vacancy report against current enrollment.

    Reporting more seats than are open is an error. Reporting more infant
    seats than the infant ratio allows at current enrollment is a warning.
    """
    errors: List[ComplianceFinding] = []
    warnings: List[ComplianceFinding] = []

    open_seats = config.total_capacity - snapshot.total_enrolled
    if split.total_spots > open_seats:
        errors.append(ComplianceFinding(
            code=FindingCode.VACANCY_EXCEEDS_AVAILABLE,
            severity=FindingSeverity.ERROR,
            message=(
                f"You have {snapshot.total_enrolled} enrolled with {config.total_capacity} capacity. "
                f"Only {max(0, open_seats)} spots available, but reporting {split.total_spots}."
            ),
            actual=split.total_spots,
            limit=max(0, open_seats),
        ))

    infant_room = max(0, max_infants_allowed(config.program_type, snapshot.total_enrolled, rules)
                      - snapshot.infant_count)
    if split.infant_spots > infant_room:
        warnings.append(ComplianceFinding(
            code=FindingCode.VACANCY_EXCEEDS_INFANT_LIMIT,
            severity=FindingSeverity.WARNING,
            message=(
                f"Infant limit: With {snapshot.total_enrolled} children ({snapshot.infant_count} infants), "
                f"you can accept {infant_room} more infants. You're reporting {split.infant_spots}."
            ),
            actual=split.infant_spots,
            limit=infant_room,
        ))

    return VacancyReportCheck(errors=errors, warnings=warnings)
