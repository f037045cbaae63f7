# SPDX-License-Identifier: Apache-2.0

"""
Multi-program summary domain logic.
"""

from datetime import date
from typing import Iterable, Optional

from .compliance import evaluate_compliance
from .projections import DEFAULT_POLICY, ProjectionPolicy, project_openings
from ..models.entities import ProgramRoster
from ..models.results import PortfolioSummary, ProgramSummary


def summarize_program(
    program: ProgramRoster,
    as_of: date,
    horizon_months: int = 3,
    policy: ProjectionPolicy = DEFAULT_POLICY
) -> ProgramSummary:
    """Compliance status and next projected change for one program."""
    status = evaluate_compliance(
        program.children, program.config, as_of, aging_out_months=policy.aging_out_months
    )
    openings = project_openings(program.children, horizon_months, as_of, policy)

    return ProgramSummary(
        program_id=program.id,
        name=program.name,
        config=program.config,
        status=status,
        next_change=openings[0] if openings else None,
    )


def summarize_portfolio(
    programs: Iterable[ProgramRoster],
    as_of: Optional[date] = None,
    horizon_months: int = 3,
    policy: ProjectionPolicy = DEFAULT_POLICY
) -> PortfolioSummary:
    """
    Aggregate compliance across every program a provider operates.

    Args:
        programs: Program rosters
        as_of: Evaluation date (defaults to today)
        horizon_months: Window used to find each program's next change
        policy: Kindergarten and age-boundary constants

    Returns:
        PortfolioSummary with totals and one ProgramSummary per program
    """
    as_of = as_of or date.today()
    summaries = [summarize_program(p, as_of, horizon_months, policy) for p in programs]

    return PortfolioSummary(
        total_programs=len(summaries),
        total_children=sum(s.status.total_children for s in summaries),
        total_capacity=sum(s.config.total_capacity for s in summaries),
        total_infants=sum(s.status.infant_count for s in summaries),
        programs_with_issues=sum(1 for s in summaries if not s.status.is_compliant),
        programs=summaries,
    )
