"""Cost contracts for the DIY (build in-house) cost estimate."""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from .roadmap_contracts import ComplexityTier


class CostInput(BaseModel):
    """Signals the cost estimator needs from a normalized profile."""
    backend_hours: float = Field(..., ge=0, description="Estimated backend development hours (the base of the calculation)")
    complexity: ComplexityTier = Field(..., description="Project complexity tier")
    features: List[str] = Field(default_factory=list, description="Features recognised in the roadmap")
    compliance_requirements: List[str] = Field(default_factory=list)
    enterprise_features: List[str] = Field(default_factory=list)
    is_multi_phase: bool = Field(False)
    stage_percentages: Optional[Dict[str, float]] = Field(None, description="Per-stage share overrides")
    hourly_rates: Optional[Dict[str, float]] = Field(None, description="Per-role hourly rate overrides")
    currency: str = Field("$", description="Currency symbol")

    model_config = {"frozen": True}


class StageCost(BaseModel):
    """Hours and cost of one delivery stage."""
    stage: str
    percentage: float
    hours: int = Field(..., ge=0)
    hourly_rate: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)

    model_config = {"frozen": True}


class TeamRequirement(BaseModel):
    """Staffing need derived from one stage at 40-hour weeks."""
    role: str
    hours_per_week: int = Field(..., ge=0)
    weeks: int = Field(..., ge=0)
    weekly_cost: float = Field(..., ge=0)
    total_cost: float = Field(..., ge=0)

    model_config = {"frozen": True}


class HiddenCosts(BaseModel):
    """Overheads of hiring and running an in-house team."""
    recruitment_fees: float = Field(..., ge=0)
    benefits_overhead: float = Field(..., ge=0)
    equipment_costs: float = Field(..., ge=0)
    onboarding_costs: float = Field(..., ge=0)
    compliance_audit_costs: float = Field(..., ge=0, description="Compliance audit and certification costs")

    model_config = {"frozen": True}

    @property
    def total(self) -> float:
        return (
            self.recruitment_fees
            + self.benefits_overhead
            + self.equipment_costs
            + self.onboarding_costs
            + self.compliance_audit_costs
        )


class CostBreakdown(BaseModel):
    """Complete output from the cost estimator."""
    total_project_hours: int = Field(..., ge=0)
    stage_breakdown: List[StageCost] = Field(..., min_length=1)
    team_requirements: List[TeamRequirement] = Field(default_factory=list)
    hidden_costs: HiddenCosts
    compliance_multiplier: float = Field(1.0, ge=1.0)
    team_size: int = Field(..., ge=0)
    timeline_weeks: int = Field(..., ge=0)
    total_salary_cost: float = Field(..., ge=0)
    total_diy_cost: float = Field(..., ge=0)
    timeline: str
    currency: str = "$"

    model_config = {"frozen": True}

    @property
    def stage_cost_total(self) -> float:
        return sum(s.cost for s in self.stage_breakdown)
