"""Advisory consistency check for a quoted DIY cost / price pair.

The check re-derives the tier's expected pricing multiplier and compares
it with the quote. It never rewrites a quoted figure: once a price has
been shown to a prospect, changing it is a business decision. The report
echoes the inputs unchanged and only derives the savings percentage.
"""

from typing import Optional

import structlog

from contracts import (
    ConsistencyConfig,
    ConsistencyInput,
    ConsistencyReport,
    FinalPricing,
    PriceQuote,
)
from errors import InvalidInput
from estimators.rounding import round_half_up

logger = structlog.get_logger()


class ConsistencyChecker:
    """Compares a quote's multiplier against the tier's expected multiplier."""

    def __init__(self, config: Optional[ConsistencyConfig] = None):
        self.config = config or ConsistencyConfig()
        self.config.check()

    def check(self, consistency_input: ConsistencyInput) -> ConsistencyReport:
        """Validate one quote. Deviations are reported, never corrected.

        Raises:
            InvalidInput: If diy_cost is not positive
        """
        diy_cost = consistency_input.diy_cost
        price = consistency_input.price
        if diy_cost <= 0:
            raise InvalidInput(f"diy_cost must be positive, got {diy_cost}", field="diy_cost")

        tier = consistency_input.complexity
        expected = self.config.multipliers[tier]
        actual = price / diy_cost
        deviation = abs(actual - expected)
        is_consistent = deviation < self.config.tolerance

        warnings = []
        if not is_consistent:
            warnings.append(
                f"Price is {actual:.1%} of DIY cost; {tier.value} projects are expected "
                f"at {expected:.0%} (tolerance {self.config.tolerance:.0%})."
            )
            logger.warning(
                "pricing_multiplier_deviation",
                complexity=tier.value,
                expected_multiplier=expected,
                actual_multiplier=round(actual, 4),
                deviation=round(deviation, 4),
            )

        return ConsistencyReport(
            is_consistent=is_consistent,
            consistency_score=self.config.consistent_score if is_consistent else self.config.inconsistent_score,
            expected_multiplier=expected,
            actual_multiplier=round(actual, 4),
            deviation=round(deviation, 4),
            warnings=warnings,
            final_pricing=FinalPricing(
                diy_cost=diy_cost,
                price=price,
                savings_percent=round_half_up((diy_cost - price) / diy_cost * 100),
            ),
        )

    def check_quote(self, quote: PriceQuote) -> ConsistencyReport:
        """Validate a PriceQuote's core price against its tier."""
        return self.check(ConsistencyInput(
            complexity=quote.complexity,
            diy_cost=quote.diy_cost,
            price=quote.core_price,
        ))


def validate_consistency(consistency_input: ConsistencyInput, config: Optional[ConsistencyConfig] = None) -> ConsistencyReport:
    """Convenience function for a one-off consistency check."""
    return ConsistencyChecker(config).check(consistency_input)
