"""Tests for the revenue projector."""

import pytest

from contracts import BusinessModel, MarketParameters, RevenueConfig, RevenueInput
from errors import ConfigurationError, InvalidInput
from estimators import REVENUE_FORMULAS, RevenueProjector, project_revenue


def _project(model: BusinessModel, **kwargs):
    return project_revenue(RevenueInput(business_model=model, **kwargs))


class TestMonthlyRevenue:
    """One formula per business model, discounted by market penetration."""

    def test_saas(self):
        """25 * 150 * 0.9 * 0.7 = 2362.5 -> 2363."""
        projection = _project(BusinessModel.SAAS)
        assert projection.monthly_revenue_potential == 2363
        assert projection.business_model_metrics.churn_rate == 0.10

    def test_ecommerce(self):
        assert _project(BusinessModel.ECOMMERCE).monthly_revenue_potential == 15750

    def test_b2b(self):
        assert _project(BusinessModel.B2B).monthly_revenue_potential == 6300

    def test_enterprise_is_quarterly_over_three(self):
        """75000 * 2 * 0.15 / 3 * 0.7 = 5250."""
        assert _project(BusinessModel.ENTERPRISE).monthly_revenue_potential == 5250

    def test_mobile(self):
        projection = _project(BusinessModel.MOBILE)
        assert projection.monthly_revenue_potential == 36750
        assert projection.business_model_metrics.active_users == 15000

    def test_every_model_has_a_formula(self):
        assert set(REVENUE_FORMULAS) == set(BusinessModel)

    def test_basis_mentions_geography_and_currency(self):
        projection = _project(BusinessModel.SAAS, geography_focus="Israel", currency="₪")
        assert "Israel" in projection.market_analysis_basis
        assert "₪150" in projection.market_analysis_basis
        assert projection.currency == "₪"


class TestScenarios:
    """Delay costs and the first-mover / conservative figures."""

    def test_saas_scenarios(self):
        projection = _project(BusinessModel.SAAS)
        assert projection.delay_costs.two_week == 1181.5
        assert projection.delay_costs.one_month == 2363
        assert projection.delay_costs.three_month == 7089
        assert projection.first_mover_advantage == 4253
        assert projection.conservative_projection == 1536

    @pytest.mark.parametrize("model", list(BusinessModel))
    def test_delay_costs_are_multiples_of_monthly(self, model):
        projection = _project(model)
        delay = projection.delay_costs
        assert delay.one_month == projection.monthly_revenue_potential
        assert delay.three_month == 3 * delay.one_month
        assert delay.three_month == 6 * delay.two_week


class TestMarketOverrides:
    """Each market parameter can be overridden per call."""

    def test_arpu_override(self):
        """25 * 200 * 0.9 * 0.7 = 3150."""
        projection = _project(BusinessModel.SAAS, market_parameters={"saas_arpu": 200})
        assert projection.monthly_revenue_potential == 3150

    def test_penetration_override(self):
        projection = _project(BusinessModel.B2B, market_parameters={"market_penetration_factor": 1.0})
        assert projection.monthly_revenue_potential == 9000

    def test_override_leaves_projector_config_alone(self):
        projector = RevenueProjector()
        projector.project(RevenueInput(business_model=BusinessModel.SAAS, market_parameters={"saas_arpu": 1}))
        assert projector.config.market_parameters.saas_arpu == 150

    def test_penetration_out_of_range_rejected(self):
        with pytest.raises(ConfigurationError):
            _project(BusinessModel.SAAS, market_parameters={"market_penetration_factor": 1.5})

    def test_negative_parameter_rejected(self):
        config = RevenueConfig(market_parameters=MarketParameters(mobile_mau=-1))
        with pytest.raises(ConfigurationError):
            RevenueProjector(config)

    def test_unknown_parameter_rejected(self):
        with pytest.raises(InvalidInput) as exc:
            _project(BusinessModel.SAAS, market_parameters={"saasArpu": 1000})
        assert exc.value.field == "market_parameters.saasArpu"

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_parameter_rejected(self, value):
        with pytest.raises(ConfigurationError) as exc:
            _project(BusinessModel.SAAS, market_parameters={"saas_arpu": value})
        assert exc.value.field == "market_parameters.saas_arpu"
