"""Vendor price calculator.

The quote is a tier-dependent share of what the prospect would spend
building in-house, rounded to the money unit, with optional add-ons.
"""

from typing import List, Optional

import structlog

from contracts import (
    ComplexityTier,
    ModularOption,
    PriceQuote,
    PricingConfig,
    PricingInput,
)
from errors import InvalidInput
from estimators.rounding import round_half_up, round_to_unit

logger = structlog.get_logger()

EXTENDED_SUPPORT = "Extended Support"
EXPEDITED_DELIVERY = "Expedited Delivery"
ADDITIONAL_FEATURES = "Additional Features"
COMPLIANCE_CERTIFICATION = "Compliance Certification"

# Tier -> (standard weeks, expedited weeks)
DELIVERY_WEEKS = {
    ComplexityTier.PLATFORM: (16, 12),
    ComplexityTier.ENTERPRISE: (14, 10),
}
DEFAULT_DELIVERY_WEEKS = (12, 8)


class PriceCalculator:
    """Turns a DIY cost into a PriceQuote."""

    def __init__(self, config: Optional[PricingConfig] = None):
        """Initialize the calculator.

        Args:
            config: Multipliers, rounding unit and add-on shares; defaults to PricingConfig()

        Raises:
            ConfigurationError: If a tier multiplier or the rounding unit is unusable
        """
        self.config = config or PricingConfig()
        self.config.check()

    def pricing_multiplier(self, complexity: ComplexityTier, compliance_requirements: List[str]) -> float:
        """Tier multiplier, plus the compliance premium when any standard applies."""
        multiplier = self.config.multipliers[complexity]
        if compliance_requirements:
            multiplier += self.config.compliance_premium
        return round(multiplier, 4)

    def quote(self, pricing_input: PricingInput) -> PriceQuote:
        """Price one project.

        Raises:
            InvalidInput: If diy_cost is not positive
        """
        diy_cost = pricing_input.diy_cost
        if diy_cost <= 0:
            raise InvalidInput(f"diy_cost must be positive, got {diy_cost}", field="diy_cost")

        complexity = pricing_input.complexity
        multiplier = self.pricing_multiplier(complexity, pricing_input.compliance_requirements)
        core_price = round_to_unit(diy_cost * multiplier, self.config.money_rounding_unit)

        options = self._modular_options(core_price, complexity, pricing_input)

        total_price = core_price + sum(opt.price for opt in options if opt.included)
        total_savings = diy_cost - total_price

        quote = PriceQuote(
            diy_cost=diy_cost,
            complexity=complexity,
            pricing_multiplier=multiplier,
            core_price=core_price,
            modular_options=options,
            total_price=total_price,
            total_savings=total_savings,
            savings_percentage=round_half_up(total_savings / diy_cost * 100),
            currency=pricing_input.currency,
        )
        logger.debug(
            "price_quoted",
            complexity=complexity.value,
            multiplier=multiplier,
            core_price=core_price,
            total_price=total_price,
        )
        return quote

    def _modular_options(
        self,
        core_price: int,
        complexity: ComplexityTier,
        pricing_input: PricingInput,
    ) -> List[ModularOption]:
        cfg = self.config
        enterprise = complexity.is_enterprise
        standard_weeks, rush_weeks = DELIVERY_WEEKS.get(complexity, DEFAULT_DELIVERY_WEEKS)

        support_rate = cfg.enterprise_extended_support_rate if enterprise else cfg.extended_support_rate
        expedited_rate = cfg.enterprise_expedited_delivery_rate if enterprise else cfg.expedited_delivery_rate

        options = [
            self._option(
                EXTENDED_SUPPORT,
                "12 months enterprise support and maintenance" if enterprise
                else "6 months additional support and maintenance",
                support_rate,
                core_price,
                included=pricing_input.extended_support,
            ),
            self._option(
                EXPEDITED_DELIVERY,
                f"Rush implementation in {rush_weeks} weeks instead of {standard_weeks}",
                expedited_rate,
                core_price,
                included=pricing_input.expedited_delivery,
            ),
            self._option(
                ADDITIONAL_FEATURES,
                "Extra features beyond core roadmap",
                cfg.additional_features_rate,
                core_price,
            ),
        ]
        if enterprise:
            options.append(self._option(
                COMPLIANCE_CERTIFICATION,
                "SOC2, GDPR, or other compliance certification assistance",
                cfg.compliance_certification_rate,
                core_price,
            ))
        return options

    def _option(self, name: str, description: str, rate: float, core_price: int, included: bool = False) -> ModularOption:
        return ModularOption(
            name=name,
            description=description,
            percentage=round(rate * 100, 2),
            price=round_to_unit(core_price * rate, self.config.money_rounding_unit),
            included=included,
        )


def calculate_price(pricing_input: PricingInput, config: Optional[PricingConfig] = None) -> PriceQuote:
    """Convenience function for a one-off quote."""
    return PriceCalculator(config).quote(pricing_input)
