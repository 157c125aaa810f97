"""Pricing contracts for the vendor quote and its optional add-ons."""

from pydantic import BaseModel, Field
from typing import List, Optional

from .roadmap_contracts import ComplexityTier


class PricingInput(BaseModel):
    """DIY cost and tier to price, plus the add-ons the prospect asked for."""
    diy_cost: float = Field(..., description="Total DIY implementation cost")
    complexity: ComplexityTier = Field(..., description="Project complexity tier")
    compliance_requirements: List[str] = Field(default_factory=list)
    expedited_delivery: bool = Field(False, description="Whether expedited delivery is requested")
    extended_support: bool = Field(False, description="Whether extended support is requested")
    currency: str = Field("$")

    model_config = {"frozen": True}


class ModularOption(BaseModel):
    """An add-on line priced as a share of the core price."""
    name: str
    description: str
    percentage: float = Field(..., ge=0, description="Share of the core price")
    price: float = Field(..., ge=0)
    included: bool = Field(False, description="Whether the price is part of total_price")

    model_config = {"frozen": True}


class PriceQuote(BaseModel):
    """Complete output from the price calculator."""
    diy_cost: float = Field(..., gt=0)
    complexity: ComplexityTier
    pricing_multiplier: float = Field(..., gt=0)
    core_price: float = Field(..., ge=0)
    modular_options: List[ModularOption] = Field(default_factory=list)
    total_price: float = Field(..., ge=0, description="Core price plus flagged add-ons")
    total_savings: float
    savings_percentage: int
    currency: str = "$"

    model_config = {"frozen": True}

    def option(self, name: str) -> Optional[ModularOption]:
        """Look up a modular option by name."""
        for opt in self.modular_options:
            if opt.name == name:
                return opt
        return None
