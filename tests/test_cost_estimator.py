"""Tests for the DIY cost estimator."""

import pytest

from contracts import ComplexityTier, CostConfig, CostInput, StagePercentages
from errors import ConfigurationError, InvalidInput
from estimators import CostEstimator, cost_input_from_profile, estimate_diy_cost
from normalizer import normalize_roadmap


BASE_STAGE_NAMES = [
    "Planning",
    "Design",
    "HTML/Markup",
    "Frontend Development",
    "Backend Development",
    "QA/Testing",
    "Project Management",
]


def _medium(**kwargs) -> CostInput:
    return CostInput(backend_hours=160, complexity=ComplexityTier.MEDIUM, **kwargs)


def _platform(**kwargs) -> CostInput:
    defaults = dict(
        backend_hours=800,
        complexity=ComplexityTier.PLATFORM,
        compliance_requirements=["SOC2"],
        enterprise_features=["ai-powered", "microservices"],
    )
    defaults.update(kwargs)
    return CostInput(**defaults)


class TestStageBreakdown:
    """Backend hours / 32% = total hours, then per-stage shares."""

    def test_total_hours_from_backend_share(self):
        assert estimate_diy_cost(_medium()).total_project_hours == 500

    def test_base_stages_in_order(self):
        breakdown = estimate_diy_cost(_medium())
        assert [s.stage for s in breakdown.stage_breakdown] == BASE_STAGE_NAMES

    def test_stage_hours_and_costs(self):
        breakdown = estimate_diy_cost(_medium())
        by_name = {s.stage: s for s in breakdown.stage_breakdown}
        assert by_name["Backend Development"].hours == 160
        assert by_name["Backend Development"].cost == 10400
        assert by_name["HTML/Markup"].hours == 55
        assert by_name["QA/Testing"].hours == 25
        assert breakdown.total_salary_cost == 25800

    def test_half_up_stage_hours(self):
        """11% and 5% of 250 hours land on .5 and round up."""
        breakdown = estimate_diy_cost(CostInput(backend_hours=80, complexity=ComplexityTier.SIMPLE))
        by_name = {s.stage: s for s in breakdown.stage_breakdown}
        assert breakdown.total_project_hours == 250
        assert by_name["HTML/Markup"].hours == 28
        assert by_name["QA/Testing"].hours == 13

    def test_team_requirement_per_stage(self):
        breakdown = estimate_diy_cost(_medium())
        backend = next(t for t in breakdown.team_requirements if t.role == "Backend Dev")
        assert backend.hours_per_week == 40
        assert backend.weeks == 4
        assert backend.weekly_cost == 2600
        assert len(breakdown.team_requirements) == len(breakdown.stage_breakdown)


class TestTotals:
    """Stage costs plus hidden costs make up the DIY total."""

    def test_medium_totals(self):
        breakdown = estimate_diy_cost(_medium())
        hidden = breakdown.hidden_costs
        assert hidden.recruitment_fees == 5160
        assert hidden.benefits_overhead == 9030
        assert hidden.equipment_costs == 4500
        assert hidden.onboarding_costs == 6450
        assert hidden.compliance_audit_costs == 0
        assert breakdown.total_diy_cost == 50940

    @pytest.mark.parametrize("cost_input", [
        _medium(),
        _medium(compliance_requirements=["HIPAA", "GDPR"], is_multi_phase=True),
        _platform(),
        CostInput(backend_hours=80, complexity=ComplexityTier.SIMPLE),
    ])
    def test_stage_plus_hidden_equals_total(self, cost_input):
        breakdown = estimate_diy_cost(cost_input)
        stage_total = sum(s.cost for s in breakdown.stage_breakdown)
        assert breakdown.stage_cost_total == stage_total
        assert stage_total + breakdown.hidden_costs.total == breakdown.total_diy_cost

    def test_timeline(self):
        breakdown = estimate_diy_cost(_medium())
        assert breakdown.team_size == 1
        assert breakdown.timeline_weeks == 13
        assert breakdown.timeline == "13 weeks with 1 team members"

    def test_multi_phase_timeline(self):
        """13 weeks * 1.3 = 16.9 -> 17."""
        breakdown = estimate_diy_cost(_medium(is_multi_phase=True))
        assert breakdown.timeline_weeks == 17
        assert breakdown.timeline.endswith("(multi-phase delivery)")

    def test_zero_backend_hours(self):
        breakdown = estimate_diy_cost(CostInput(backend_hours=0, complexity=ComplexityTier.MEDIUM))
        assert breakdown.total_project_hours == 0
        assert breakdown.team_size == 0
        assert breakdown.timeline_weeks == 0
        assert breakdown.total_diy_cost == 0


class TestCompliance:
    """Compliance standards compound the hidden-cost multiplier."""

    def test_single_standard_adds_its_overhead(self):
        plain = estimate_diy_cost(_medium())
        soc2 = estimate_diy_cost(_medium(compliance_requirements=["SOC2"]))
        assert plain.compliance_multiplier == 1.0
        assert soc2.compliance_multiplier == pytest.approx(1.15)
        assert soc2.hidden_costs.recruitment_fees == 5934
        assert soc2.hidden_costs.compliance_audit_costs == 2064

    def test_standards_accumulate(self):
        breakdown = estimate_diy_cost(_medium(compliance_requirements=["GDPR", "HIPAA"]))
        assert breakdown.compliance_multiplier == pytest.approx(1.30)

    def test_unpriced_standard_only_triggers_audit(self):
        breakdown = estimate_diy_cost(_medium(compliance_requirements=["CCPA"]))
        assert breakdown.compliance_multiplier == 1.0
        assert breakdown.hidden_costs.compliance_audit_costs > 0


class TestSpecialistStages:
    """Specialist stages only for enterprise and platform tiers."""

    def test_platform_specialists(self):
        breakdown = estimate_diy_cost(_platform())
        names = [s.stage for s in breakdown.stage_breakdown]
        assert names == BASE_STAGE_NAMES + [
            "AI/ML Engineering",
            "Enterprise Architecture",
            "Compliance Expert",
        ]
        ai = breakdown.stage_breakdown[7]
        assert ai.percentage == 15
        assert ai.hours == 375
        assert ai.cost == 30000

    def test_architecture_always_for_platform(self):
        breakdown = estimate_diy_cost(_platform(compliance_requirements=[], enterprise_features=[]))
        assert [s.stage for s in breakdown.stage_breakdown][7:] == ["Enterprise Architecture"]

    def test_enterprise_tier_needs_matching_features(self):
        breakdown = estimate_diy_cost(_platform(
            complexity=ComplexityTier.ENTERPRISE,
            compliance_requirements=[],
            enterprise_features=["encryption", "kubernetes"],
        ))
        assert [s.stage for s in breakdown.stage_breakdown][7:] == [
            "Security Specialist",
            "DevOps Engineering",
        ]

    def test_lower_tiers_get_no_specialists(self):
        breakdown = estimate_diy_cost(_platform(complexity=ComplexityTier.COMPLEX))
        assert [s.stage for s in breakdown.stage_breakdown] == BASE_STAGE_NAMES

    def test_enterprise_equipment_rate(self):
        breakdown = estimate_diy_cost(_platform())
        assert breakdown.team_size == 4
        assert breakdown.hidden_costs.equipment_costs == 24000


class TestOverrides:
    """Per-call overrides and configuration checks."""

    def test_hourly_rate_override(self):
        breakdown = estimate_diy_cost(_medium(hourly_rates={"backend": 100}))
        backend = next(s for s in breakdown.stage_breakdown if s.stage == "Backend Development")
        assert backend.cost == 16000

    def test_override_does_not_touch_estimator_config(self):
        estimator = CostEstimator()
        estimator.estimate(_medium(hourly_rates={"backend": 100}))
        assert estimator.config.hourly_rates.backend == 65

    def test_zero_backend_share_rejected(self):
        with pytest.raises(ConfigurationError) as exc:
            estimate_diy_cost(_medium(stage_percentages={"backend": 0}))
        assert exc.value.field == "stage_percentages.backend"

    def test_negative_stage_share_rejected_at_construction(self):
        config = CostConfig(stage_percentages=StagePercentages(qa=-5))
        with pytest.raises(ConfigurationError):
            CostEstimator(config)

    def test_unknown_rate_key_rejected(self):
        with pytest.raises(InvalidInput) as exc:
            estimate_diy_cost(_medium(hourly_rates={"htmlMarkup": 500}))
        assert exc.value.field == "hourly_rates.htmlMarkup"

    def test_unknown_stage_key_rejected(self):
        with pytest.raises(InvalidInput) as exc:
            estimate_diy_cost(_medium(stage_percentages={"testing": 10}))
        assert exc.value.field == "stage_percentages.testing"

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_rate_rejected(self, value):
        with pytest.raises(ConfigurationError) as exc:
            estimate_diy_cost(_medium(hourly_rates={"backend": value}))
        assert exc.value.field == "hourly_rates.backend"

    def test_non_finite_share_rejected(self):
        with pytest.raises(ConfigurationError) as exc:
            estimate_diy_cost(_medium(stage_percentages={"qa": float("inf")}))
        assert exc.value.field == "stage_percentages.qa"

    def test_estimate_from_profile(self):
        profile = normalize_roadmap("authentication and dashboard")
        estimator = CostEstimator()
        assert estimator.estimate_profile(profile) == estimator.estimate(cost_input_from_profile(profile))
        assert estimator.estimate_profile(profile).total_diy_cost == 50940
