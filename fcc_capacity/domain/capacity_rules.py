# SPDX-License-Identifier: Apache-2.0

"""
Capacity rule domain logic.

CA Regulation 102416.5 limits how many infants a family child care home may
enroll as a function of total enrollment:

Small Family Child Care Home:
- 1-4 children: up to four infants
- 5-6 children: no more than three infants
- 7-8 children (with school-age criteria): no more than two infants

Large Family Child Care Home:
- 1-12 children: no more than four infants
- 13-14 children (with school-age criteria): no more than three infants

The limits are kept as ordered tables of inclusive headcount ranges so an
alternate jurisdiction can be supplied as another table.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..exceptions import InvalidInputError
from ..models.entities import LICENSED_MAX_CAPACITY
from ..models.enums import ProgramType


@dataclass(frozen=True)
class InfantRatioTier:
    """Infant ceiling for an inclusive range of total enrollment."""
    min_children: int
    max_children: int
    max_infants: int
    requires_school_age_mix: bool = False

    def covers(self, total_children: int) -> bool:
        return self.min_children <= total_children <= self.max_children

    @property
    def range_label(self) -> str:
        return f"{self.min_children}-{self.max_children}"


RuleTable = Dict[ProgramType, Tuple[InfantRatioTier, ...]]

CALIFORNIA_FCC_RULES: RuleTable = {
    ProgramType.SMALL_FAMILY: (
        InfantRatioTier(1, 4, 4),
        InfantRatioTier(5, 6, 3),
        InfantRatioTier(7, 8, 2, requires_school_age_mix=True),
    ),
    ProgramType.LARGE_FAMILY: (
        InfantRatioTier(1, 12, 4),
        InfantRatioTier(13, 14, 3, requires_school_age_mix=True),
    ),
}


def licensed_max_capacity(program_type: ProgramType) -> int:
    """Largest licensed headcount for a program tier (8 small, 14 large)."""
    return LICENSED_MAX_CAPACITY[ProgramType(program_type)]


def rule_tier(
    program_type: ProgramType,
    total_children: int,
    rules: Optional[RuleTable] = None
) -> InfantRatioTier:
    """
    Find the tier that governs a given headcount.

    An empty roster uses the first tier; headcounts beyond the table (an
    over-capacity roster) use the last, tightest tier.

    Args:
        program_type: Licensed program tier
        total_children: Children counted toward capacity
        rules: Alternate rule table (defaults to California FCC)

    Returns:
        Matching InfantRatioTier

    Raises:
        InvalidInputError: If the headcount is negative or the program type has no table
    """
    if total_children < 0:
        raise InvalidInputError(f"total_children cannot be negative, got {total_children}")

    table = (rules or CALIFORNIA_FCC_RULES).get(ProgramType(program_type))
    if not table:
        raise InvalidInputError(f"No capacity rules defined for program type {program_type}")

    for tier in table:
        if tier.covers(total_children):
            return tier

    if total_children < table[0].min_children:
        return table[0]
    return table[-1]


def max_infants_allowed(
    program_type: ProgramType,
    total_children: int,
    rules: Optional[RuleTable] = None
) -> int:
    """Maximum simultaneous infants for a program tier at a given total enrollment."""
    return rule_tier(program_type, total_children, rules).max_infants


def requires_school_age_mix(
    program_type: ProgramType,
    total_children: int,
    rules: Optional[RuleTable] = None
) -> bool:
    """Whether the headcount falls in a tier that needs school-age children enrolled."""
    if total_children == 0:
        return False
    return rule_tier(program_type, total_children, rules).requires_school_age_mix


def available_infant_spots(
    program_type: ProgramType,
    total_capacity: int,
    current_infants: int,
    current_non_infants: int,
    rules: Optional[RuleTable] = None
) -> int:
    """
    How many more infants could be enrolled right now.

    The infant ceiling can drop as headcount crosses a tier boundary, so this
    simulates adding one infant at a time and stops at the first addition that
    would break the rule.

    Args:
        program_type: Licensed program tier
        total_capacity: Licensed maximum headcount
        current_infants: Infants currently enrolled
        current_non_infants: Non-infants currently enrolled
        rules: Alternate rule table (defaults to California FCC)

    Returns:
        Largest number of additional infants that keeps the program compliant
    """
    if min(total_capacity, current_infants, current_non_infants) < 0:
        raise InvalidInputError("Capacity and headcounts cannot be negative")

    total_children = current_infants + current_non_infants
    spots_left = total_capacity - total_children
    if spots_left <= 0:
        return 0

    max_new_infants = 0
    for new_infants in range(1, spots_left + 1):
        allowed = max_infants_allowed(program_type, total_children + new_infants, rules)
        if current_infants + new_infants > allowed:
            break
        max_new_infants = new_infants

    return max_new_infants


def capacity_rule_description(program_type: ProgramType, total_children: int) -> str:
    """Human-readable explanation of the tier that applies at a headcount."""
    tier = rule_tier(program_type, total_children)

    if tier.max_infants >= tier.max_children:
        return f"With {tier.range_label} children, all can be infants (max {tier.max_infants} infants)"

    description = f"With {tier.range_label} children, max {tier.max_infants} can be infants"
    if tier.requires_school_age_mix:
        description += " (requires school-age criteria)"
    return description
