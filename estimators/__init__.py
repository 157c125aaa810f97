"""Estimators for DIY cost, revenue opportunity and vendor pricing."""

from .rounding import round_half_up, round_to_unit
from .cost_estimator import CostEstimator, cost_input_from_profile, estimate_diy_cost
from .revenue_projector import RevenueProjector, REVENUE_FORMULAS, project_revenue
from .price_calculator import PriceCalculator, calculate_price

__all__ = [
    "round_half_up",
    "round_to_unit",
    "CostEstimator",
    "cost_input_from_profile",
    "estimate_diy_cost",
    "RevenueProjector",
    "REVENUE_FORMULAS",
    "project_revenue",
    "PriceCalculator",
    "calculate_price",
]
