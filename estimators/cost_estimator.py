"""DIY cost estimator.

Expands one backend-hours figure into the full cost of building the
project in-house: every delivery stage, any specialist stages the tier
calls for, the team it takes, and the hidden overheads of hiring it.

The backend stage share is the anchor: with Backend = 32% and X backend
hours, total project hours = X / 32 * 100.
"""

import math
from typing import List, Optional

import structlog

from contracts import (
    ComplexityTier,
    CostBreakdown,
    CostConfig,
    CostInput,
    HiddenCosts,
    NormalizedProfile,
    StageCost,
    TeamRequirement,
)
from estimators.rounding import round_half_up, round_to_unit

logger = structlog.get_logger()


class CostEstimator:
    """Computes a CostBreakdown from backend hours and profile flags."""

    def __init__(self, config: Optional[CostConfig] = None):
        """Initialize the estimator.

        Args:
            config: Stage shares, rates and overhead ratios; defaults to CostConfig()

        Raises:
            ConfigurationError: If a share, rate or week denominator is unusable
        """
        self.config = config or CostConfig()
        self.config.check()

    def estimate(self, cost_input: CostInput) -> CostBreakdown:
        """Estimate the DIY cost for one project.

        Per-call stage percentage and hourly rate overrides in cost_input
        are applied on top of this estimator's config.
        """
        config = self.config.with_overrides(
            stage_percentages=cost_input.stage_percentages,
            hourly_rates=cost_input.hourly_rates,
        )
        if config is not self.config:
            config.check()

        total_hours = self.total_project_hours(cost_input.backend_hours, config)
        stages = self._base_stages(total_hours, config)
        stages.extend(self._specialist_stages(cost_input, total_hours, config))

        team = [self._team_requirement(s, config) for s in stages]
        total_salary = sum(s.cost for s in stages)

        team_size = self._team_size(total_hours, cost_input.is_multi_phase, config)
        compliance_multiplier = self.compliance_multiplier(cost_input.compliance_requirements, config)
        hidden = self._hidden_costs(
            total_salary,
            team_size,
            compliance_multiplier,
            cost_input.complexity,
            bool(cost_input.compliance_requirements),
            config,
        )
        timeline_weeks = self._timeline_weeks(total_hours, team_size, cost_input.is_multi_phase, config)

        timeline = f"{timeline_weeks} weeks with {team_size} team members"
        if cost_input.is_multi_phase:
            timeline += " (multi-phase delivery)"

        breakdown = CostBreakdown(
            total_project_hours=total_hours,
            stage_breakdown=stages,
            team_requirements=team,
            hidden_costs=hidden,
            compliance_multiplier=compliance_multiplier,
            team_size=team_size,
            timeline_weeks=timeline_weeks,
            total_salary_cost=total_salary,
            total_diy_cost=total_salary + hidden.total,
            timeline=timeline,
            currency=cost_input.currency,
        )
        logger.debug(
            "diy_cost_estimated",
            total_hours=total_hours,
            stages=len(stages),
            total_diy_cost=breakdown.total_diy_cost,
        )
        return breakdown

    def estimate_profile(self, profile: NormalizedProfile, currency: str = "$") -> CostBreakdown:
        """Estimate straight from a NormalizedProfile."""
        return self.estimate(cost_input_from_profile(profile, currency=currency))

    @staticmethod
    def total_project_hours(backend_hours: float, config: CostConfig) -> int:
        """Backend hours scaled up by the backend share, rounded to the hours unit."""
        backend_share = getattr(config.stage_percentages, config.backend_stage_key)
        return round_to_unit(backend_hours / backend_share * 100, config.hours_rounding_unit)

    @staticmethod
    def compliance_multiplier(compliance_requirements: List[str], config: CostConfig) -> float:
        """1.0 plus the overhead of every recognised compliance standard."""
        multiplier = 1.0
        for standard, overhead in config.compliance_overhead.items():
            if standard in compliance_requirements:
                multiplier += overhead
        return round(multiplier, 4)

    def _base_stages(self, total_hours: int, config: CostConfig) -> List[StageCost]:
        stages = []
        for base in config.base_stages:
            percentage = getattr(config.stage_percentages, base.key)
            rate = getattr(config.hourly_rates, base.key)
            stages.append(self._stage(base.stage, percentage, rate, total_hours))
        return stages

    def _specialist_stages(self, cost_input: CostInput, total_hours: int, config: CostConfig) -> List[StageCost]:
        if not cost_input.complexity.is_enterprise:
            return []

        stages = []
        for specialist in config.specialist_stages:
            if specialist.requires_compliance:
                enabled = bool(cost_input.compliance_requirements)
            else:
                enabled = cost_input.complexity in specialist.always_for or any(
                    kw in feature.lower()
                    for feature in cost_input.enterprise_features
                    for kw in specialist.feature_keywords
                )
            if enabled:
                rate = getattr(config.hourly_rates, specialist.rate_key)
                stages.append(self._stage(specialist.stage, specialist.percentage, rate, total_hours))
        return stages

    @staticmethod
    def _stage(name: str, percentage: float, rate: float, total_hours: int) -> StageCost:
        hours = round_half_up(percentage / 100 * total_hours)
        return StageCost(
            stage=name,
            percentage=percentage,
            hours=hours,
            hourly_rate=rate,
            cost=hours * rate,
        )

    @staticmethod
    def _team_requirement(stage: StageCost, config: CostConfig) -> TeamRequirement:
        hours_per_week = min(stage.hours, config.hours_per_week)
        return TeamRequirement(
            role=stage.stage.replace(" Development", " Dev"),
            hours_per_week=hours_per_week,
            weeks=math.ceil(stage.hours / config.hours_per_week),
            weekly_cost=hours_per_week * stage.hourly_rate,
            total_cost=stage.cost,
        )

    @staticmethod
    def _team_size(total_hours: int, is_multi_phase: bool, config: CostConfig) -> int:
        weeks_per_member = config.multi_phase_weeks_per_member if is_multi_phase else config.weeks_per_member
        return math.ceil(total_hours / (config.hours_per_week * weeks_per_member))

    @staticmethod
    def _timeline_weeks(total_hours: int, team_size: int, is_multi_phase: bool, config: CostConfig) -> int:
        if team_size == 0:
            return 0
        base_weeks = math.ceil(total_hours / (team_size * config.hours_per_week))
        if is_multi_phase:
            return round_half_up(base_weeks * config.multi_phase_timeline_factor)
        return base_weeks

    @staticmethod
    def _hidden_costs(
        total_salary: float,
        team_size: int,
        compliance_multiplier: float,
        complexity: ComplexityTier,
        has_compliance: bool,
        config: CostConfig,
    ) -> HiddenCosts:
        equipment_rate = (
            config.enterprise_equipment_per_member
            if complexity.is_enterprise
            else config.equipment_per_member
        )
        return HiddenCosts(
            recruitment_fees=round_half_up(total_salary * config.recruitment_rate * compliance_multiplier),
            benefits_overhead=round_half_up(total_salary * config.benefits_rate * compliance_multiplier),
            equipment_costs=team_size * equipment_rate,
            onboarding_costs=round_half_up(total_salary * config.onboarding_rate * compliance_multiplier),
            compliance_audit_costs=(
                round_half_up(total_salary * config.compliance_audit_rate) if has_compliance else 0
            ),
        )


def cost_input_from_profile(profile: NormalizedProfile, currency: str = "$", **overrides) -> CostInput:
    """Map a NormalizedProfile onto the cost estimator's input record."""
    return CostInput(
        backend_hours=profile.estimated_backend_hours,
        complexity=profile.backend_complexity,
        features=profile.normalized_features,
        compliance_requirements=profile.compliance_requirements,
        enterprise_features=profile.enterprise_features,
        is_multi_phase=profile.is_multi_phase,
        currency=currency,
        **overrides,
    )


def estimate_diy_cost(cost_input: CostInput, config: Optional[CostConfig] = None) -> CostBreakdown:
    """Convenience function for a one-off DIY cost estimate."""
    return CostEstimator(config).estimate(cost_input)
