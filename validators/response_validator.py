"""Screens drafted sales responses for promises and pressure tactics."""

from typing import List, Optional, Sequence

import structlog

from contracts import ResponseCheck, ResponseCheckInput

logger = structlog.get_logger()


GUARANTEE_WORDS = ["guarantee", "guaranteed"]

PRESSURE_PHRASES = [
    "must act now",
    "limited time today",
]

CURRENCY_SYMBOLS = ["$", "€", "£", "₪"]


class ResponseValidator:
    """Flags guaranteed monetary outcomes and high-pressure phrasing."""

    def __init__(
        self,
        pressure_phrases: Optional[Sequence[str]] = None,
        currency_symbols: Optional[Sequence[str]] = None,
    ):
        self.pressure_phrases = list(pressure_phrases or PRESSURE_PHRASES)
        self.currency_symbols = list(currency_symbols or CURRENCY_SYMBOLS)

    def validate(self, check_input: ResponseCheckInput) -> ResponseCheck:
        text = check_input.proposed_response
        text_lower = text.lower()
        issues: List[str] = []

        promises = any(w in text_lower for w in GUARANTEE_WORDS)
        mentions_money = any(sym in text for sym in self.currency_symbols)
        if promises and mentions_money:
            issues.append("Guarantees a monetary outcome")

        for phrase in self.pressure_phrases:
            if phrase in text_lower:
                issues.append(f"High-pressure phrasing: '{phrase}'")

        if issues:
            logger.info("response_flagged", issues=issues)

        return ResponseCheck(
            is_valid=not issues,
            issues=issues,
            recommendation=(
                "Response approved for delivery"
                if not issues
                else "Minor adjustments needed for ethical compliance"
            ),
        )


def validate_response(proposed_response: str) -> ResponseCheck:
    """Convenience function for screening one response."""
    return ResponseValidator().validate(ResponseCheckInput(proposed_response=proposed_response))
