"""Revenue projector: business model -> monthly opportunity and delay costs."""

from typing import Callable, Dict, Optional, Tuple

import structlog

from contracts import (
    BusinessModel,
    BusinessModelMetrics,
    DelayCosts,
    MarketParameters,
    RevenueConfig,
    RevenueInput,
    RevenueProjection,
)
from estimators.rounding import round_half_up

logger = structlog.get_logger()


def _subscription(p: MarketParameters, geo: str, cur: str) -> Tuple[float, str, BusinessModelMetrics]:
    revenue = p.saas_acquisition_rate * p.saas_arpu * (1 - p.saas_churn_rate)
    basis = (
        f"SaaS model in {geo}: {p.saas_acquisition_rate:g} new customers/month at "
        f"{cur}{p.saas_arpu:g} ARPU with {p.saas_churn_rate * 100:g}% churn"
    )
    metrics = BusinessModelMetrics(
        acquisition_rate=p.saas_acquisition_rate,
        average_revenue_per_user=p.saas_arpu,
        churn_rate=p.saas_churn_rate,
    )
    return revenue, basis, metrics


def _transactional(p: MarketParameters, geo: str, cur: str) -> Tuple[float, str, BusinessModelMetrics]:
    revenue = p.ecommerce_transaction_volume * p.ecommerce_aov * p.ecommerce_margin
    basis = (
        f"E-commerce in {geo}: {p.ecommerce_transaction_volume:g} transactions/month at "
        f"{cur}{p.ecommerce_aov:g} AOV with {p.ecommerce_margin * 100:g}% margin"
    )
    metrics = BusinessModelMetrics(
        transaction_volume=p.ecommerce_transaction_volume,
        average_order_value=p.ecommerce_aov,
    )
    return revenue, basis, metrics


def _b2b_deals(p: MarketParameters, geo: str, cur: str) -> Tuple[float, str, BusinessModelMetrics]:
    revenue = p.b2b_deal_size * p.b2b_deals_per_month * p.b2b_win_rate
    basis = (
        f"B2B model in {geo}: {p.b2b_deals_per_month:g} deals/month at "
        f"{cur}{p.b2b_deal_size:g} average with {p.b2b_win_rate * 100:g}% win rate"
    )
    metrics = BusinessModelMetrics(deal_size=p.b2b_deal_size, win_rate=p.b2b_win_rate)
    return revenue, basis, metrics


def _enterprise_deals(p: MarketParameters, geo: str, cur: str) -> Tuple[float, str, BusinessModelMetrics]:
    # Quarterly pipeline normalized to a month
    revenue = p.enterprise_deal_size * p.enterprise_deals_per_quarter * p.enterprise_win_rate / 3
    basis = (
        f"Enterprise software in {geo}: {p.enterprise_deals_per_quarter:g} deals/quarter at "
        f"{cur}{p.enterprise_deal_size:g} average with {p.enterprise_win_rate * 100:g}% win rate"
    )
    metrics = BusinessModelMetrics(deal_size=p.enterprise_deal_size, win_rate=p.enterprise_win_rate)
    return revenue, basis, metrics


def _usage(p: MarketParameters, geo: str, cur: str) -> Tuple[float, str, BusinessModelMetrics]:
    revenue = p.mobile_mau * p.mobile_revenue_per_user
    basis = (
        f"Mobile app in {geo}: {p.mobile_mau:g} MAU at "
        f"{cur}{p.mobile_revenue_per_user:g}/user/month"
    )
    metrics = BusinessModelMetrics(
        active_users=p.mobile_mau,
        average_revenue_per_user=p.mobile_revenue_per_user,
    )
    return revenue, basis, metrics


REVENUE_FORMULAS: Dict[BusinessModel, Callable[[MarketParameters, str, str], Tuple[float, str, BusinessModelMetrics]]] = {
    BusinessModel.SAAS: _subscription,
    BusinessModel.ECOMMERCE: _transactional,
    BusinessModel.B2B: _b2b_deals,
    BusinessModel.ENTERPRISE: _enterprise_deals,
    BusinessModel.MOBILE: _usage,
}


class RevenueProjector:
    """Projects monthly revenue potential and the cost of shipping late."""

    def __init__(self, config: Optional[RevenueConfig] = None):
        """Initialize the projector.

        Args:
            config: Market parameters and scenario factors; defaults to RevenueConfig()

        Raises:
            ConfigurationError: If a ratio is out of range
        """
        self.config = config or RevenueConfig()
        self.config.check()

    def project(self, revenue_input: RevenueInput) -> RevenueProjection:
        """Run the business model's formula and derive the scenarios from it."""
        config = self.config.with_overrides(revenue_input.market_parameters)
        if config is not self.config:
            config.check()
        params = config.market_parameters

        formula = REVENUE_FORMULAS[revenue_input.business_model]
        raw_revenue, basis, metrics = formula(params, revenue_input.geography_focus, revenue_input.currency)

        monthly = round_half_up(raw_revenue * params.market_penetration_factor)

        projection = RevenueProjection(
            monthly_revenue_potential=monthly,
            market_analysis_basis=basis,
            business_model_metrics=metrics,
            delay_costs=DelayCosts(
                two_week=monthly * config.two_week_delay_factor,
                one_month=monthly,
                three_month=monthly * config.three_month_delay_factor,
            ),
            first_mover_advantage=round_half_up(monthly * config.first_mover_months * config.first_mover_premium),
            conservative_projection=round_half_up(monthly * config.conservative_factor),
            currency=revenue_input.currency,
        )
        logger.debug(
            "revenue_projected",
            business_model=revenue_input.business_model.value,
            monthly_revenue_potential=monthly,
        )
        return projection


def project_revenue(revenue_input: RevenueInput, config: Optional[RevenueConfig] = None) -> RevenueProjection:
    """Convenience function for a one-off revenue projection."""
    return RevenueProjector(config).project(revenue_input)
