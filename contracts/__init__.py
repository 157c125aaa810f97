"""Pydantic contracts for the Roadmap Quoter.

All stage-to-stage handoffs are typed through these contracts.
"""

from .roadmap_contracts import (
    ComplexityTier,
    BusinessModel,
    ProjectType,
    RoadmapInput,
    NormalizedProfile,
)

from .config_contracts import (
    KeywordRule,
    NormalizerConfig,
    StagePercentages,
    HourlyRates,
    BaseStage,
    SpecialistStage,
    CostConfig,
    MarketParameters,
    RevenueConfig,
    PricingConfig,
    ConsistencyConfig,
    PipelineConfig,
)

from .cost_contracts import (
    CostInput,
    StageCost,
    TeamRequirement,
    HiddenCosts,
    CostBreakdown,
)

from .revenue_contracts import (
    RevenueInput,
    BusinessModelMetrics,
    DelayCosts,
    RevenueProjection,
)

from .pricing_contracts import (
    PricingInput,
    ModularOption,
    PriceQuote,
)

from .validation_contracts import (
    ConsistencyInput,
    FinalPricing,
    ConsistencyReport,
    ResponseCheckInput,
    ResponseCheck,
)

from .proposal_contracts import (
    PricingOptions,
    ProposalCalculation,
    DirectCalculationInput,
)

__all__ = [
    # Roadmap
    "ComplexityTier",
    "BusinessModel",
    "ProjectType",
    "RoadmapInput",
    "NormalizedProfile",
    # Configuration
    "KeywordRule",
    "NormalizerConfig",
    "StagePercentages",
    "HourlyRates",
    "BaseStage",
    "SpecialistStage",
    "CostConfig",
    "MarketParameters",
    "RevenueConfig",
    "PricingConfig",
    "ConsistencyConfig",
    "PipelineConfig",
    # Cost
    "CostInput",
    "StageCost",
    "TeamRequirement",
    "HiddenCosts",
    "CostBreakdown",
    # Revenue
    "RevenueInput",
    "BusinessModelMetrics",
    "DelayCosts",
    "RevenueProjection",
    # Pricing
    "PricingInput",
    "ModularOption",
    "PriceQuote",
    # Validation
    "ConsistencyInput",
    "FinalPricing",
    "ConsistencyReport",
    "ResponseCheckInput",
    "ResponseCheck",
    # Proposal
    "PricingOptions",
    "ProposalCalculation",
    "DirectCalculationInput",
]
