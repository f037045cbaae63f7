# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Capacity engine service.

Entry point used by the dashboard and vacancy-report collaborators. Validates
raw roster payloads, runs the pure domain functions against an injectable
clock, and records spans and structured logs for each evaluation.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional

from opentelemetry import trace

from ..domain.compliance import evaluate_compliance
from ..domain.portfolio import summarize_portfolio
from ..domain.projections import ProjectionPolicy, next_opening_by_age_group, project_openings
from ..domain.vacancies import (
    check_vacancy_report,
    current_vacancies,
    propose_from_roster,
    roster_breakdown,
)
from ..exceptions import InvalidInputError, RosterValidationError
from ..models.entities import CapacityConfig, Child, EnrollmentSnapshot, ProgramRoster
from ..models.enums import AgeGroup
from ..models.results import (
    ComplianceStatus,
    PortfolioSummary,
    ProjectedOpening,
    RegulatoryVacancy,
    RosterBreakdown,
    VacancyReportCheck,
    VacancySplit,
)
from ..utils.validation import validate_many, validate_payload

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class EngineConfig:
    """Capacity engine configuration settings."""
    environment: str = "development"
    default_horizon_months: int = 12
    autofill_horizon_months: int = 6
    policy: ProjectionPolicy = field(default_factory=ProjectionPolicy)

    def __post_init__(self):
        if self.default_horizon_months < 0 or self.autofill_horizon_months < 0:
            raise InvalidInputError("Projection horizons cannot be negative")


class CapacityEngineService:
    """Runs compliance, projection and vacancy operations for roster snapshots."""

    def __init__(self, config: Optional[EngineConfig] = None, today: Callable[[], date] = date.today):
        """
        Initialize capacity engine service.

        Args:
            config: Engine configuration (defaults apply when omitted)
            today: Clock returning the implicit "as of" date
        """
        self.config = config or EngineConfig()
        self.today = today

    def load_roster(self, payloads: Iterable[Any]) -> List[Child]:
        """Validate raw roster records into Child snapshots."""
        with tracer.start_as_current_span("capacity.load_roster") as span:
            try:
                children = validate_many(Child, payloads, "children")
                span.set_attribute("roster.size", len(children))
                return children
            except RosterValidationError as e:
                span.record_exception(e)
                span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
                logger.error(
                    "Roster payload failed validation",
                    extra={"error_count": len(e.errors), "errors": e.errors}
                )
                raise

    def load_capacity_config(self, payload: Any) -> CapacityConfig:
        """Validate a raw capacity configuration record."""
        with tracer.start_as_current_span("capacity.load_capacity_config") as span:
            try:
                config = validate_payload(CapacityConfig, payload, "config")
                span.set_attributes({
                    "capacity.program_type": config.program_type.value,
                    "capacity.total": config.total_capacity
                })
                return config
            except RosterValidationError as e:
                span.record_exception(e)
                span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
                logger.error(
                    "Capacity configuration failed validation",
                    extra={"errors": e.errors}
                )
                raise

    def evaluate(self, children: Iterable[Any], config: Any) -> ComplianceStatus:
        """
        Evaluate compliance as of today.

        Args:
            children: Child snapshots or raw roster records
            config: CapacityConfig or raw configuration record

        Returns:
            ComplianceStatus for the roster
        """
        roster = self.load_roster(children)
        capacity = self.load_capacity_config(config)

        with tracer.start_as_current_span("capacity.evaluate_compliance") as span:
            status = evaluate_compliance(
                roster, capacity, self.today(), aging_out_months=self.config.policy.aging_out_months
            )

            span.set_attributes({
                "capacity.program_type": capacity.program_type.value,
                "capacity.total": capacity.total_capacity,
                "roster.total_children": status.total_children,
                "roster.infant_count": status.infant_count,
                "compliance.is_compliant": status.is_compliant,
                "compliance.error_count": len(status.errors),
                "compliance.warning_count": len(status.warnings)
            })

            log_extra = {
                "program_type": capacity.program_type.value,
                "total_children": status.total_children,
                "infant_count": status.infant_count,
                "max_infants_allowed": status.max_infants_allowed,
                "as_of": status.as_of.isoformat()
            }
            if status.is_compliant:
                logger.info("Compliance evaluated", extra=log_extra)
            else:
                logger.warning(
                    "Roster is not compliant",
                    extra={**log_extra, "errors": [e.code.value for e in status.errors]}
                )

            return status

    def project(self, children: Iterable[Any], horizon_months: Optional[int] = None) -> List[ProjectedOpening]:
        """Forecast seat openings from today over the given or default horizon."""
        roster = self.load_roster(children)
        horizon = self.config.default_horizon_months if horizon_months is None else horizon_months

        with tracer.start_as_current_span("capacity.project_openings") as span:
            openings = project_openings(roster, horizon, self.today(), self.config.policy)

            span.set_attributes({
                "projection.horizon_months": horizon,
                "projection.opening_count": len(openings)
            })
            logger.debug(
                f"Projected {len(openings)} openings over {horizon} months",
                extra={"roster_size": len(roster), "horizon_months": horizon}
            )
            return openings

    def next_opening(self, children: Iterable[Any], age_group: AgeGroup,
                     horizon_months: Optional[int] = None) -> Optional[ProjectedOpening]:
        """Earliest projected opening for one regulatory age group."""
        return next_opening_by_age_group(self.project(children, horizon_months), AgeGroup(age_group))

    def propose_vacancies(self, children: Iterable[Any], config: Any) -> VacancySplit:
        """Auto-fill a vacancy report from the current roster."""
        roster = self.load_roster(children)
        capacity = self.load_capacity_config(config)

        with tracer.start_as_current_span("capacity.propose_vacancies") as span:
            split = propose_from_roster(
                roster,
                capacity,
                self.today(),
                self.config.autofill_horizon_months,
                self.config.policy
            )

            span.set_attributes({
                "vacancy.total_spots": split.total_spots,
                "vacancy.infant_spots": split.infant_spots
            })
            logger.info(
                "Vacancy split proposed",
                extra={
                    "program_type": capacity.program_type.value,
                    "total_spots": split.total_spots,
                    "infant_spots": split.infant_spots,
                    "available_date": split.available_date.isoformat() if split.available_date else None
                }
            )
            return split

    def check_report(self, split: Any, children: Iterable[Any], config: Any) -> VacancyReportCheck:
        """Check a provider-edited vacancy report against the current roster."""
        report = validate_payload(VacancySplit, split, "report")
        capacity = self.load_capacity_config(config)
        status = self.evaluate(children, capacity)

        with tracer.start_as_current_span("capacity.check_vacancy_report") as span:
            snapshot = EnrollmentSnapshot(
                total_enrolled=status.total_children,
                infant_count=status.infant_count
            )
            result = check_vacancy_report(report, snapshot, capacity)

            span.set_attribute("vacancy.report_valid", result.is_valid)
            if not result.is_valid:
                logger.warning(
                    "Vacancy report exceeds open seats",
                    extra={"reported": report.total_spots, "open_seats": status.total_spots_available}
                )
            return result

    def vacancies(self, children: Iterable[Any], config: Any) -> List[RegulatoryVacancy]:
        """Current openings per regulatory age group."""
        return current_vacancies(
            self.load_roster(children),
            self.load_capacity_config(config),
            self.today(),
            aging_out_months=self.config.policy.aging_out_months
        )

    def breakdown(self, children: Iterable[Any]) -> RosterBreakdown:
        """Roster headcount per public-facing age bucket."""
        return roster_breakdown(
            self.load_roster(children), self.today(), self.config.policy.aging_out_months
        )

    def portfolio(self, programs: Iterable[Any], horizon_months: int = 3) -> PortfolioSummary:
        """Summarize compliance across a provider's programs."""
        rosters = validate_many(ProgramRoster, programs, "programs")

        with tracer.start_as_current_span("capacity.summarize_portfolio") as span:
            summary = summarize_portfolio(rosters, self.today(), horizon_months, self.config.policy)

            span.set_attributes({
                "portfolio.program_count": summary.total_programs,
                "portfolio.programs_with_issues": summary.programs_with_issues
            })
            logger.info(
                "Portfolio summarized",
                extra={
                    "program_count": summary.total_programs,
                    "total_children": summary.total_children,
                    "programs_with_issues": summary.programs_with_issues
                }
            )
            return summary

    @staticmethod
    def to_payload(result: Any) -> Any:
        """Render a result, or a list of results, as JSON-ready data."""
        if isinstance(result, list):
            return [item.to_payload() for item in result]
        return result.to_payload()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidInputError(f"{name} must be an integer, got {raw!r}") from e


def create_capacity_engine(today: Callable[[], date] = date.today) -> CapacityEngineService:
    """
    Factory function to create the capacity engine with configuration from environment.

    Returns:
        CapacityEngineService: Configured engine service instance
    """
    policy = ProjectionPolicy(
        kindergarten_cutoff_month=_env_int('FCC_KINDERGARTEN_CUTOFF_MONTH', 9),
        kindergarten_cutoff_day=_env_int('FCC_KINDERGARTEN_CUTOFF_DAY', 1),
        aging_out_months=_env_int('FCC_AGING_OUT_MONTHS', 240)
    )

    config = EngineConfig(
        environment=os.getenv('ENVIRONMENT', 'development'),
        default_horizon_months=_env_int('FCC_DEFAULT_HORIZON_MONTHS', 12),
        autofill_horizon_months=_env_int('FCC_AUTOFILL_HORIZON_MONTHS', 6),
        policy=policy
    )

    logger.info(
        "Capacity engine configured",
        extra={
            "environment": config.environment,
            "default_horizon_months": config.default_horizon_months,
            "autofill_horizon_months": config.autofill_horizon_months
        }
    )
    return CapacityEngineService(config, today)
