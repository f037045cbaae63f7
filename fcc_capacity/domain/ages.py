# SPDX-License-Identifier: Apache-2.0

"""
Age classification domain logic.

This module contains pure functions that turn a date of birth into an age in
whole months, a regulatory age group, and a public-facing age bracket.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple, Union

from ..exceptions import InvalidInputError
from ..models.enums import AgeBracket, AgeGroup
from ..utils.dates import parse_iso_date

# Default aging-out cutoff. This is a liberal sentinel (20 years), not a
# regulation: no child a program could enroll is ever treated as aged out.
AGING_OUT_MONTHS = 240
INFANT_UPPER_MONTHS = 24

DateInput = Union[date, str]


@dataclass(frozen=True)
class AgeBand:
    """Half-open age range ``[min_months, max_months)`` mapped to a label."""
    label: object
    min_months: int
    max_months: Optional[int] = None

    def contains(self, age_months: int) -> bool:
        if age_months < self.min_months:
            return False
        return self.max_months is None or age_months < self.max_months


# Per CA Regulation 102416.5 only infants (under 2) carry a separate limit.
# The open upper bands end at the aging-out cutoff passed to the classifiers.
AGE_GROUP_BANDS: Tuple[AgeBand, ...] = (
    AgeBand(AgeGroup.INFANT, 0, INFANT_UPPER_MONTHS),
    AgeBand(AgeGroup.NON_INFANT, INFANT_UPPER_MONTHS),
)

AGE_BRACKET_BANDS: Tuple[AgeBand, ...] = (
    AgeBand(AgeBracket.INFANT, 0, 24),
    AgeBand(AgeBracket.TODDLER, 24, 36),
    AgeBand(AgeBracket.PRESCHOOL, 36, 72),
    AgeBand(AgeBracket.SCHOOL_AGE, 72),
)


def age_in_months(date_of_birth: DateInput, as_of: DateInput) -> int:
    """
    Whole months elapsed between birth and ``as_of``.

    A day-of-month shortfall rounds down: born Jan 15, as of Feb 10 is
    0 months old.

    Args:
        date_of_birth: Child's date of birth (``date`` or ``YYYY-MM-DD``)
        as_of: Date the age is measured at (``date`` or ``YYYY-MM-DD``)

    Returns:
        Age in whole months

    Raises:
        InvalidInputError: If either date is malformed or ``as_of`` is before
            the date of birth
    """
    date_of_birth = parse_iso_date(date_of_birth, "date_of_birth")
    as_of = parse_iso_date(as_of, "as_of")

    if as_of < date_of_birth:
        raise InvalidInputError(
            f"as_of {as_of.isoformat()} is before date of birth {date_of_birth.isoformat()}"
        )

    months = (as_of.year - date_of_birth.year) * 12 + (as_of.month - date_of_birth.month)
    if as_of.day < date_of_birth.day:
        months -= 1
    return months


def _match_band(bands: Tuple[AgeBand, ...], age_months: int, aging_out_months: int):
    if age_months >= aging_out_months:
        return None
    for band in bands:
        if band.contains(age_months):
            return band.label
    return None


def classify(date_of_birth: DateInput, as_of: DateInput,
             aging_out_months: int = AGING_OUT_MONTHS) -> Optional[AgeGroup]:
    """
    Regulatory age group at ``as_of``.

    Returns:
        ``AgeGroup.INFANT`` for [0, 24) months, ``AgeGroup.NON_INFANT`` from
        24 months up to ``aging_out_months``, or None when the child has aged out
    """
    return _match_band(AGE_GROUP_BANDS, age_in_months(date_of_birth, as_of), aging_out_months)


def age_bracket(date_of_birth: DateInput, as_of: DateInput,
                aging_out_months: int = AGING_OUT_MONTHS) -> Optional[AgeBracket]:
    """Public-facing age bracket at ``as_of``, or None when aged out."""
    return _match_band(AGE_BRACKET_BANDS, age_in_months(date_of_birth, as_of), aging_out_months)


def format_age(date_of_birth: DateInput, as_of: DateInput) -> str:
    """Short display age such as ``7mo``, ``2y`` or ``3y 4mo``."""
    months = age_in_months(date_of_birth, as_of)
    years, remaining = divmod(months, 12)

    if years == 0:
        return f"{months}mo"
    if remaining == 0:
        return f"{years}y"
    return f"{years}y {remaining}mo"
