# SPDX-License-Identifier: Apache-2.0

"""
Seat projection domain logic.

This module forecasts when enrolled children will free up a seat: a known
departure, the start of kindergarten, aging out of the program, or an infant
turning two. Each child yields at most one event per projection.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from .ages import AGING_OUT_MONTHS, INFANT_UPPER_MONTHS, DateInput, classify
from ..exceptions import InvalidInputError
from ..models.entities import Child
from ..models.enums import AgeGroup, OpeningReason
from ..models.results import ProjectedOpening
from ..utils.dates import add_months, parse_iso_date


@dataclass(frozen=True)
class ProjectionPolicy:
    """Policy constants that drive automatic transitions."""
    kindergarten_age_years: int = 5
    kindergarten_cutoff_month: int = 9
    kindergarten_cutoff_day: int = 1
    aging_out_months: int = AGING_OUT_MONTHS
    infant_upper_months: int = INFANT_UPPER_MONTHS

    def __post_init__(self):
        # Validated against a common year so the cutoff exists every year
        try:
            date(2001, self.kindergarten_cutoff_month, self.kindergarten_cutoff_day)
        except ValueError as e:
            raise InvalidInputError(f"Invalid kindergarten cutoff: {e}") from e
        if self.aging_out_months <= self.infant_upper_months:
            raise InvalidInputError("aging_out_months must exceed infant_upper_months")


DEFAULT_POLICY = ProjectionPolicy()


def age_transition_date(date_of_birth: DateInput, target_age_months: int) -> date:
    """Date a child reaches ``target_age_months``."""
    return add_months(parse_iso_date(date_of_birth, "date_of_birth"), target_age_months)


def kindergarten_start_date(date_of_birth: DateInput, policy: ProjectionPolicy = DEFAULT_POLICY) -> date:
    """
    First day of kindergarten for a child.

    Children start on the cutoff date of the year they turn five; a child born
    on or after the cutoff joins the following year's cohort.
    """
    date_of_birth = parse_iso_date(date_of_birth, "date_of_birth")
    cutoff = date(date_of_birth.year, policy.kindergarten_cutoff_month, policy.kindergarten_cutoff_day)
    start_year = date_of_birth.year + policy.kindergarten_age_years
    if date_of_birth >= cutoff:
        start_year += 1
    return date(start_year, policy.kindergarten_cutoff_month, policy.kindergarten_cutoff_day)


def _project_child(
    child: Child,
    window_start: date,
    window_end: date,
    policy: ProjectionPolicy
) -> Optional[ProjectedOpening]:
    """First applicable seat-freeing event for one child, if any."""

    def in_window(day: date) -> bool:
        return window_start <= day <= window_end

    def opening(day: date, group: AgeGroup, reason: OpeningReason) -> ProjectedOpening:
        return ProjectedOpening(
            date=day,
            age_group=group,
            reason=reason,
            child_id=child.id,
            child_name=child.display_name,
        )

    departure = child.expected_departure_date
    if departure and in_window(departure):
        group = classify(child.date_of_birth, departure, policy.aging_out_months)
        # A child aged out by the departure date holds no counted seat
        if group is not None:
            return opening(departure, group, OpeningReason.SCHEDULED_DEPARTURE)

    kindergarten = kindergarten_start_date(child.date_of_birth, policy)
    if in_window(kindergarten):
        return opening(kindergarten, AgeGroup.NON_INFANT, OpeningReason.KINDERGARTEN)

    aging_out = age_transition_date(child.date_of_birth, policy.aging_out_months)
    if in_window(aging_out):
        return opening(aging_out, AgeGroup.NON_INFANT, OpeningReason.AGING_OUT)

    turns_two = age_transition_date(child.date_of_birth, policy.infant_upper_months)
    is_infant = classify(child.date_of_birth, window_start, policy.aging_out_months) == AgeGroup.INFANT
    if in_window(turns_two) and is_infant:
        return opening(turns_two, AgeGroup.INFANT, OpeningReason.AGING_INTO_NEXT_GROUP)

    return None


def project_openings(
    children: Iterable[Child],
    horizon_months: int = 12,
    as_of: Optional[date] = None,
    policy: ProjectionPolicy = DEFAULT_POLICY
) -> List[ProjectedOpening]:
    """
    Forecast seat openings within ``horizon_months`` of ``as_of``.

    Per child the first applicable event wins, in this order: scheduled
    departure, kindergarten start, aging out, infant turning two.

    Args:
        children: Roster snapshot
        horizon_months: Projection window length in months
        as_of: Window start (defaults to today)
        policy: Kindergarten and age-boundary constants

    Returns:
        Openings sorted by date, at most one per child

    Raises:
        InvalidInputError: If the horizon is negative
    """
    if horizon_months < 0:
        raise InvalidInputError(f"horizon_months cannot be negative, got {horizon_months}")

    window_start = parse_iso_date(as_of, "as_of") if as_of else date.today()
    window_end = add_months(window_start, horizon_months)

    openings = []
    for child in children:
        event = _project_child(child, window_start, window_end, policy)
        if event is not None:
            openings.append(event)

    # sorted() is stable, so same-day events keep roster order
    return sorted(openings, key=lambda o: o.date)


def next_opening_by_age_group(
    openings: Iterable[ProjectedOpening],
    age_group: AgeGroup
) -> Optional[ProjectedOpening]:
    """Earliest opening for an age group, assuming ``openings`` is date-sorted."""
    return next((o for o in openings if o.age_group == age_group), None)
