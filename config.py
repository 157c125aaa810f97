"""Configuration settings for the Roadmap Quoter."""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import Dict, Literal
from pathlib import Path


class Settings(BaseSettings):
    """Global settings for the Roadmap Quoter.

    Settings can be overridden via environment variables with ROADMAP_QUOTER_ prefix.
    Example: ROADMAP_QUOTER_MONEY_ROUNDING_UNIT=5000
    """

    # Rounding units
    hours_rounding_unit: int = Field(
        default=10,
        gt=0,
        description="Backend and total project hours are rounded to this unit"
    )
    money_rounding_unit: int = Field(
        default=1000,
        gt=0,
        description="Quoted prices are rounded to this unit"
    )

    # Currency
    default_currency: str = Field(
        default="$",
        description="Currency symbol carried through every monetary record"
    )
    default_geography: str = Field(
        default="United States",
        description="Primary geographic market used in revenue narratives"
    )

    # Consistency check
    consistency_tolerance: float = Field(
        default=0.05,
        gt=0.0,
        le=1.0,
        description="Maximum |actual - expected| pricing multiplier deviation"
    )

    # Revenue
    market_penetration_factor: float = Field(
        default=0.7,
        gt=0.0,
        le=1.0,
        description="Conservative market penetration applied to monthly revenue"
    )

    # Paths
    output_dir: str = Field(
        default="./outputs",
        description="Directory for saved calculations"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of the console format"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    model_config = {
        "env_prefix": "ROADMAP_QUOTER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get_output_path(self) -> Path:
        """Get output path as Path object."""
        return Path(self.output_dir)


# Complexity tier -> base backend hours
BASE_BACKEND_HOURS: Dict[str, int] = {
    "simple": 80,
    "medium": 160,
    "complex": 320,
    "enterprise": 500,
    "platform": 800,
}

# Complexity tier -> vendor share of the DIY cost
PRICING_MULTIPLIERS: Dict[str, float] = {
    "simple": 0.35,
    "medium": 0.37,
    "complex": 0.40,
    "enterprise": 0.42,
    "platform": 0.45,
}

# Compliance standard -> hidden-cost multiplier increment
COMPLIANCE_OVERHEAD: Dict[str, float] = {
    "SOC2": 0.15,
    "GDPR": 0.10,
    "HIPAA": 0.20,
    "PCI": 0.12,
    "FedRAMP": 0.25,
}

# Create singleton instance
settings = Settings()
