"""Validation contracts: advisory consistency and response checks."""

from pydantic import BaseModel, Field
from typing import List

from .roadmap_contracts import ComplexityTier


class ConsistencyInput(BaseModel):
    """A tier and the DIY cost / vendor price pair to check against it."""
    complexity: ComplexityTier
    diy_cost: float = Field(..., description="DIY cost as quoted")
    price: float = Field(..., ge=0, description="Vendor price as quoted")

    model_config = {"frozen": True}


class FinalPricing(BaseModel):
    """The quoted figures, echoed back unchanged, with a derived savings percentage."""
    diy_cost: float
    price: float
    savings_percent: int

    model_config = {"frozen": True}


class ConsistencyReport(BaseModel):
    """Advisory result of re-deriving the expected pricing multiplier."""
    is_consistent: bool
    consistency_score: int = Field(..., ge=0, le=100)
    expected_multiplier: float
    actual_multiplier: float
    deviation: float = Field(..., ge=0)
    warnings: List[str] = Field(default_factory=list)
    final_pricing: FinalPricing

    model_config = {"frozen": True}


class ResponseCheckInput(BaseModel):
    """A drafted sales response to screen before delivery."""
    proposed_response: str = Field(..., description="The sales response to validate")

    model_config = {"frozen": True}


class ResponseCheck(BaseModel):
    """Outcome of screening a sales response for guarantees and pressure tactics."""
    is_valid: bool
    issues: List[str] = Field(default_factory=list)
    recommendation: str

    model_config = {"frozen": True}
