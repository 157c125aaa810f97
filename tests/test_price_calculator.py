"""Tests for the vendor price calculator and rounding helpers."""

import pytest

from contracts import ComplexityTier, PricingConfig, PricingInput
from errors import ConfigurationError, InvalidInput
from estimators import PriceCalculator, calculate_price, round_half_up, round_to_unit
from estimators.price_calculator import (
    ADDITIONAL_FEATURES,
    COMPLIANCE_CERTIFICATION,
    EXPEDITED_DELIVERY,
    EXTENDED_SUPPORT,
)


def _quote(diy_cost=252000, complexity=ComplexityTier.MEDIUM, **kwargs):
    return calculate_price(PricingInput(diy_cost=diy_cost, complexity=complexity, **kwargs))


class TestRounding:
    """Half-up rounding, never banker's rounding."""

    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(2362.5) == 2363

    def test_float_noise_absorbed(self):
        """0.35 * 30000 is 10499.999... in binary floating point."""
        assert round_to_unit(0.35 * 30000, 1000) == 11000

    def test_round_to_unit(self):
        assert round_to_unit(93240, 1000) == 93000
        assert round_to_unit(104, 10) == 100
        assert round_to_unit(105, 10) == 110


class TestCorePrice:
    """Core price = DIY cost x tier multiplier, rounded to 1,000."""

    def test_medium_tier(self):
        quote = _quote()
        assert quote.pricing_multiplier == 0.37
        assert quote.core_price == 93000
        assert quote.total_price == 93000
        assert quote.total_savings == 159000
        assert quote.savings_percentage == 63

    def test_compliance_premium(self):
        quote = _quote(compliance_requirements=["SOC2"])
        assert quote.pricing_multiplier == 0.39
        assert quote.core_price == 98000

    @pytest.mark.parametrize("tier,multiplier", [
        (ComplexityTier.SIMPLE, 0.35),
        (ComplexityTier.MEDIUM, 0.37),
        (ComplexityTier.COMPLEX, 0.40),
        (ComplexityTier.ENTERPRISE, 0.42),
        (ComplexityTier.PLATFORM, 0.45),
    ])
    def test_core_price_within_rounding(self, tier, multiplier):
        quote = _quote(diy_cost=487321, complexity=tier)
        assert quote.pricing_multiplier == multiplier
        assert quote.core_price % 1000 == 0
        assert abs(quote.core_price - 487321 * multiplier) <= 500

    def test_half_unit_rounds_up(self):
        quote = _quote(diy_cost=30000, complexity=ComplexityTier.SIMPLE)
        assert quote.core_price == 11000

    @pytest.mark.parametrize("diy_cost", [0, -1000])
    def test_non_positive_diy_cost_rejected(self, diy_cost):
        with pytest.raises(InvalidInput) as exc:
            _quote(diy_cost=diy_cost)
        assert exc.value.field == "diy_cost"


class TestModularOptions:
    """Add-ons are shares of the core price; only flagged ones are in the total."""

    def test_standard_options(self):
        quote = _quote()
        assert [o.name for o in quote.modular_options] == [
            EXTENDED_SUPPORT,
            EXPEDITED_DELIVERY,
            ADDITIONAL_FEATURES,
        ]
        assert quote.option(EXTENDED_SUPPORT).price == 23000
        assert quote.option(EXPEDITED_DELIVERY).price == 19000
        assert quote.option(ADDITIONAL_FEATURES).price == 28000
        assert quote.option(EXTENDED_SUPPORT).percentage == 25
        assert not any(o.included for o in quote.modular_options)

    def test_flagged_options_added_to_total(self):
        quote = _quote(extended_support=True, expedited_delivery=True)
        assert quote.option(EXTENDED_SUPPORT).included
        assert quote.option(EXPEDITED_DELIVERY).included
        assert not quote.option(ADDITIONAL_FEATURES).included
        assert quote.total_price == 135000
        assert quote.total_savings == 117000
        assert quote.savings_percentage == 46

    def test_enterprise_options(self):
        quote = _quote(diy_cost=1000000, complexity=ComplexityTier.PLATFORM)
        assert quote.core_price == 450000
        assert quote.option(EXTENDED_SUPPORT).price == 158000
        assert quote.option(EXPEDITED_DELIVERY).price == 113000
        assert quote.option(COMPLIANCE_CERTIFICATION).price == 68000
        assert "12 weeks instead of 16" in quote.option(EXPEDITED_DELIVERY).description

    def test_compliance_certification_only_for_enterprise_tiers(self):
        assert _quote().option(COMPLIANCE_CERTIFICATION) is None

    def test_unknown_option_lookup(self):
        assert _quote().option("Gold Plating") is None


class TestPricingConfig:
    """Configuration checks."""

    def test_missing_tier_rejected(self):
        config = PricingConfig(multipliers={ComplexityTier.MEDIUM: 0.37})
        with pytest.raises(ConfigurationError):
            PriceCalculator(config)

    def test_zero_rounding_unit_rejected(self):
        with pytest.raises(ConfigurationError):
            PriceCalculator(PricingConfig(money_rounding_unit=0))

    def test_custom_rounding_unit(self):
        calculator = PriceCalculator(PricingConfig(money_rounding_unit=100))
        quote = calculator.quote(PricingInput(diy_cost=252000, complexity=ComplexityTier.MEDIUM))
        assert quote.core_price == 93200
