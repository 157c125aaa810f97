"""Revenue contracts for opportunity and delay-cost projections."""

from pydantic import BaseModel, Field
from typing import Dict, Optional

from .roadmap_contracts import BusinessModel


class RevenueInput(BaseModel):
    """Business model plus optional market overrides."""
    business_model: BusinessModel = Field(..., description="Type of business model")
    product_description: str = Field("", description="Description of the product or service")
    target_market: str = Field("", description="Target market description")
    geography_focus: str = Field("United States", description="Primary geographic market")
    currency: str = Field("$", description="Currency symbol for revenue figures")
    market_parameters: Optional[Dict[str, float]] = Field(
        None, description="Individual MarketParameters overrides, e.g. {'saas_arpu': 200}"
    )

    model_config = {"frozen": True}


class BusinessModelMetrics(BaseModel):
    """The market assumptions that drove the projection."""
    acquisition_rate: Optional[float] = None
    average_revenue_per_user: Optional[float] = None
    churn_rate: Optional[float] = None
    transaction_volume: Optional[float] = None
    average_order_value: Optional[float] = None
    active_users: Optional[float] = None
    deal_size: Optional[float] = None
    win_rate: Optional[float] = None

    model_config = {"frozen": True}


class DelayCosts(BaseModel):
    """Revenue lost by shipping late. Simple multiples of the monthly figure."""
    two_week: float = Field(..., ge=0)
    one_month: int = Field(..., ge=0)
    three_month: int = Field(..., ge=0)

    model_config = {"frozen": True}


class RevenueProjection(BaseModel):
    """Complete output from the revenue projector."""
    monthly_revenue_potential: int = Field(..., ge=0)
    market_analysis_basis: str
    business_model_metrics: BusinessModelMetrics
    delay_costs: DelayCosts
    first_mover_advantage: int = Field(..., ge=0, description="30% premium over 6 months")
    conservative_projection: int = Field(..., ge=0, description="65% of the monthly potential")
    currency: str = "$"

    model_config = {"frozen": True}
