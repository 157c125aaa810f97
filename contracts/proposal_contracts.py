"""Proposal contracts: one full pipeline run and its Markdown summary."""

from pydantic import BaseModel, Field
from typing import Dict, Optional
from datetime import datetime

from .roadmap_contracts import RoadmapInput, NormalizedProfile, ProjectType
from .cost_contracts import CostBreakdown
from .revenue_contracts import RevenueProjection
from .pricing_contracts import PriceQuote
from .validation_contracts import ConsistencyReport


class PricingOptions(BaseModel):
    """Caller choices that are not derived from the roadmap text."""
    expedited_delivery: bool = Field(False)
    extended_support: bool = Field(False)
    currency: Optional[str] = Field(None, description="Currency symbol; defaults to settings")
    geography_focus: Optional[str] = Field(None, description="Primary market; defaults to settings")
    market_parameters: Optional[Dict[str, float]] = Field(None, description="MarketParameters overrides")
    stage_percentages: Optional[Dict[str, float]] = Field(None, description="StagePercentages overrides")
    hourly_rates: Optional[Dict[str, float]] = Field(None, description="HourlyRates overrides")

    model_config = {"frozen": True}


class ProposalCalculation(BaseModel):
    """Every stage output of one pipeline run over a single roadmap."""
    roadmap: RoadmapInput
    profile: NormalizedProfile
    cost: CostBreakdown
    revenue: RevenueProjection
    pricing: PriceQuote
    consistency: ConsistencyReport

    model_config = {"frozen": True}

    def to_markdown(self, title: str = "Build vs. Partner Cost Comparison", date: Optional[datetime] = None) -> str:
        """Render the figures as a human-readable Markdown report."""
        cur = self.pricing.currency
        p = self.profile
        date = date or datetime.now()

        sections = [
            f"# {title}",
            f"\n**Date:** {date.strftime('%Y-%m-%d')}",
            f"**Complexity:** {p.backend_complexity.value}",
            f"**Business model:** {p.business_model.value}",
            f"**Market:** {p.market_category}",
            "\n---\n",
            "## Summary",
            f"\n- DIY cost: **{cur}{self.cost.total_diy_cost:,.0f}**",
            f"- Partner price: **{cur}{self.pricing.total_price:,.0f}**",
            f"- Savings: **{cur}{self.pricing.total_savings:,.0f} ({self.pricing.savings_percentage}%)**",
            f"- Timeline: {self.cost.timeline}",
        ]

        if p.normalized_features:
            sections.append("\n## Recognised Features\n")
            sections.append(", ".join(p.normalized_features))

        if p.compliance_requirements:
            sections.append(f"\n**Compliance:** {', '.join(p.compliance_requirements)}")

        sections.append("\n## DIY Cost Breakdown\n")
        sections.append("| Stage | % | Hours | Rate | Cost |")
        sections.append("|-------|---|-------|------|------|")
        for s in self.cost.stage_breakdown:
            sections.append(f"| {s.stage} | {s.percentage:g} | {s.hours} | {cur}{s.hourly_rate:g} | {cur}{s.cost:,.0f} |")

        h = self.cost.hidden_costs
        sections.extend([
            "\n### Hidden Costs\n",
            f"- Recruitment: {cur}{h.recruitment_fees:,.0f}",
            f"- Benefits overhead: {cur}{h.benefits_overhead:,.0f}",
            f"- Equipment: {cur}{h.equipment_costs:,.0f}",
            f"- Onboarding: {cur}{h.onboarding_costs:,.0f}",
        ])
        if h.compliance_audit_costs:
            sections.append(f"- Compliance audit: {cur}{h.compliance_audit_costs:,.0f}")

        r = self.revenue
        sections.extend([
            "\n## Revenue Opportunity\n",
            r.market_analysis_basis,
            f"\n- Monthly potential: {cur}{r.monthly_revenue_potential:,}",
            f"- Cost of a 2-week delay: {cur}{r.delay_costs.two_week:,.0f}",
            f"- Cost of a 1-month delay: {cur}{r.delay_costs.one_month:,}",
            f"- Cost of a 3-month delay: {cur}{r.delay_costs.three_month:,}",
            f"- First-mover advantage: {cur}{r.first_mover_advantage:,}",
            f"- Conservative monthly projection: {cur}{r.conservative_projection:,}",
        ])

        sections.append("\n## Pricing Options\n")
        sections.append(f"- Core implementation: {cur}{self.pricing.core_price:,.0f}")
        for opt in self.pricing.modular_options:
            marker = " (included)" if opt.included else ""
            sections.append(f"- {opt.name}: {cur}{opt.price:,.0f}{marker} - {opt.description}")

        if self.consistency.warnings:
            sections.append("\n## Review Notes\n")
            for w in self.consistency.warnings:
                sections.append(f"- {w}")

        return "\n".join(sections)


class DirectCalculationInput(BaseModel):
    """Roadmap plus pricing options for a single end-to-end calculation."""
    roadmap_text: str = Field(..., description="Free-form roadmap or PRD text")
    project_type: Optional[ProjectType] = Field(None, description="Optional project type hint")
    industry: Optional[str] = Field(None, description="Optional industry hint")
    options: PricingOptions = Field(default_factory=PricingOptions)

    model_config = {"frozen": True}
