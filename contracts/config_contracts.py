"""Immutable per-stage configuration tables.

Each pipeline stage receives one of these models. They are built once
(usually via PipelineConfig.from_settings) and never mutated; overrides
produce new instances through model_copy(update=...).
"""

import math
from pydantic import BaseModel, Field
from typing import Dict, Optional, Tuple

from config import (
    BASE_BACKEND_HOURS,
    COMPLIANCE_OVERHEAD,
    PRICING_MULTIPLIERS,
    Settings,
    settings as default_settings,
)
from errors import ConfigurationError, InvalidInput
from .roadmap_contracts import BusinessModel, ComplexityTier


def _tier_table(table: Dict[str, float]) -> Dict[ComplexityTier, float]:
    return {ComplexityTier(tier): value for tier, value in table.items()}


def _merge_overrides(table: BaseModel, overrides: Dict[str, float], prefix: str) -> BaseModel:
    """Copy a table with some entries replaced.

    Raises:
        InvalidInput: For a key the table does not have
    """
    for key in overrides:
        if key not in type(table).model_fields:
            raise InvalidInput(
                f"unknown {prefix} key '{key}'; expected one of {sorted(type(table).model_fields)}",
                field=f"{prefix}.{key}",
            )
    return table.model_copy(update=overrides)


def _check_finite(table: BaseModel, prefix: str) -> None:
    for name, value in table.model_dump().items():
        if not math.isfinite(value):
            raise ConfigurationError(f"{name} must be a finite number, got {value}", field=f"{prefix}.{name}")


class KeywordRule(BaseModel):
    """One (keywords -> result) row of an ordered classification table."""
    result: str
    keywords: Tuple[str, ...]

    model_config = {"frozen": True}


# --- Normalizer ---------------------------------------------------------------

FEATURE_KEYWORDS: Tuple[str, ...] = (
    # Standard features
    "authentication", "user management", "dashboard", "reporting", "payments",
    "notifications", "api", "database", "search", "analytics", "integration",
    "mobile app", "web app", "admin panel", "messaging", "file upload",
    "real-time", "automation", "machine learning", "ai", "blockchain",
    # Enterprise features
    "simulation", "scenario engine", "benchmarking", "war room", "crisis management",
    "incident response", "certification system", "audit logging", "compliance",
    "multi-tenant", "sso", "single sign-on", "role-based access", "rbac",
    "microservices", "containerized", "orchestration", "load balancing",
    "disaster recovery", "backup", "replication", "monitoring", "alerting",
    "encryption", "security", "penetration testing", "vulnerability assessment",
)

# Most complex first; the first matching tier wins.
COMPLEXITY_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(result="platform", keywords=(
        "platform", "ecosystem", "multi-phase", "phased", "architecture",
        "infrastructure", "framework", "sdk", "api gateway",
    )),
    KeywordRule(result="enterprise", keywords=(
        "enterprise-grade", "mission-critical", "large-scale", "global",
        "multi-region", "compliance", "soc2", "gdpr", "hipaa",
    )),
    KeywordRule(result="complex", keywords=(
        "enterprise", "advanced", "sophisticated", "complex", "ai", "machine learning",
    )),
    KeywordRule(result="simple", keywords=(
        "basic", "simple", "mvp", "prototype", "minimal",
    )),
)

BUSINESS_MODEL_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(result="saas", keywords=("subscription", "saas", "monthly", "recurring", "tenant")),
    KeywordRule(result="ecommerce", keywords=("store", "shop", "cart", "payment", "product", "marketplace")),
    KeywordRule(result="b2b", keywords=("enterprise", "business", "b2b", "corporate", "client")),
    KeywordRule(result="mobile", keywords=("mobile", "app", "ios", "android", "smartphone")),
    KeywordRule(result="enterprise", keywords=(
        "enterprise software", "enterprise platform", "enterprise solution",
        "large organization", "multi-location",
    )),
)

COMPLIANCE_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(result="SOC2", keywords=("soc2", "soc 2", "service organization control")),
    KeywordRule(result="GDPR", keywords=("gdpr", "general data protection regulation", "european privacy")),
    KeywordRule(result="HIPAA", keywords=("hipaa", "health insurance portability", "healthcare privacy")),
    KeywordRule(result="PCI", keywords=("pci", "payment card industry", "credit card")),
    KeywordRule(result="ISO27001", keywords=("iso27001", "iso 27001", "information security management")),
    KeywordRule(result="FedRAMP", keywords=("fedramp", "federal risk", "government cloud")),
    KeywordRule(result="CCPA", keywords=("ccpa", "california consumer privacy act")),
)

ENTERPRISE_FEATURE_KEYWORDS: Tuple[str, ...] = (
    "ai-powered", "machine learning", "artificial intelligence", "scenario engine",
    "real-time analytics", "multi-tenant", "role-based access", "audit logging",
    "disaster recovery", "high availability", "load balancing", "auto-scaling",
    "microservices", "containerized", "kubernetes", "docker", "orchestration",
    "api gateway", "service mesh", "monitoring", "observability", "logging",
    "encryption", "security scanning", "vulnerability assessment", "penetration testing",
)

DIFFERENTIATOR_KEYWORDS: Tuple[str, ...] = (
    "ai-powered", "real-time", "automated", "secure", "scalable",
    "user-friendly", "mobile-first", "cloud-based", "cloud-native", "integration",
    "analytics", "personalized", "instant", "collaborative", "multi-tenant",
    "enterprise-grade", "mission-critical", "high-availability", "disaster-recovery",
)

MARKET_CATEGORY_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(result="Cybersecurity", keywords=("cyber", "security")),
    KeywordRule(result="Healthcare", keywords=("health", "medical")),
    KeywordRule(result="Financial Services", keywords=("finance", "bank")),
)

PHASE_INDICATORS: Tuple[str, ...] = (
    "phase", "phases", "stage", "stages", "milestone", "roadmap", "timeline",
)

# Words a numeral must directly precede to count as a phase number
PHASE_COUNT_WORDS: Tuple[str, ...] = ("phase", "stage", "milestone")


class NormalizerConfig(BaseModel):
    """Keyword tables and ladders used to turn roadmap text into a profile."""
    feature_keywords: Tuple[str, ...] = FEATURE_KEYWORDS
    complexity_rules: Tuple[KeywordRule, ...] = COMPLEXITY_RULES
    default_complexity: ComplexityTier = ComplexityTier.MEDIUM
    base_backend_hours: Dict[ComplexityTier, int] = Field(
        default_factory=lambda: {ComplexityTier(k): v for k, v in BASE_BACKEND_HOURS.items()}
    )
    feature_hours_factor: float = Field(0.1, description="Per-feature multiplier applied to base hours")
    business_model_rules: Tuple[KeywordRule, ...] = BUSINESS_MODEL_RULES
    compliance_rules: Tuple[KeywordRule, ...] = COMPLIANCE_RULES
    enterprise_feature_keywords: Tuple[str, ...] = ENTERPRISE_FEATURE_KEYWORDS
    differentiator_keywords: Tuple[str, ...] = DIFFERENTIATOR_KEYWORDS
    market_category_rules: Tuple[KeywordRule, ...] = MARKET_CATEGORY_RULES
    default_market_category: str = "Technology"
    phase_indicators: Tuple[str, ...] = PHASE_INDICATORS
    phase_count_words: Tuple[str, ...] = PHASE_COUNT_WORDS
    default_phase_counts: Dict[ComplexityTier, int] = Field(
        default_factory=lambda: {
            ComplexityTier.PLATFORM: 4,
            ComplexityTier.ENTERPRISE: 3,
        }
    )
    fallback_phase_count: int = 2
    hours_rounding_unit: int = 10

    model_config = {"frozen": True}

    @property
    def default_business_model(self) -> BusinessModel:
        """First entry of the business-model table."""
        return BusinessModel(self.business_model_rules[0].result)

    def check(self) -> None:
        """Raise ConfigurationError for tables that cannot produce a profile."""
        if self.hours_rounding_unit <= 0:
            raise ConfigurationError("hours_rounding_unit must be positive", field="hours_rounding_unit")
        if not self.business_model_rules:
            raise ConfigurationError("business_model_rules must not be empty", field="business_model_rules")
        for tier in ComplexityTier:
            hours = self.base_backend_hours.get(tier)
            if hours is None or hours < 0:
                raise ConfigurationError(
                    f"base_backend_hours missing or negative for tier '{tier.value}'",
                    field="base_backend_hours",
                )


# --- Cost estimator -----------------------------------------------------------

class StagePercentages(BaseModel):
    """Share of total project hours per base stage."""
    planning: float = Field(8, description="Planning stage percentage")
    design: float = Field(8, description="Design stage percentage")
    html_markup: float = Field(11, description="HTML/Markup stage percentage")
    frontend: float = Field(26, description="Frontend development percentage")
    backend: float = Field(32, description="Backend development percentage (base)")
    qa: float = Field(5, description="QA/Testing stage percentage")
    management: float = Field(10, description="Project management percentage")

    model_config = {"frozen": True}


class HourlyRates(BaseModel):
    """Hourly rate per role, in the quote currency."""
    planning: float = Field(85, description="Planning / business analysis")
    design: float = Field(36, description="UI/UX design")
    html_markup: float = Field(32, description="HTML/markup")
    frontend: float = Field(45, description="Frontend development")
    backend: float = Field(65, description="Backend development")
    qa: float = Field(42, description="QA/testing")
    management: float = Field(38, description="Project management")
    ai_ml_engineer: float = Field(80, description="AI/ML engineering specialist")
    security_specialist: float = Field(50, description="Security specialist")
    enterprise_architect: float = Field(85, description="Enterprise architect")
    compliance_expert: float = Field(95, description="Compliance expert")
    devops_engineer: float = Field(58, description="DevOps engineer")

    model_config = {"frozen": True}


class BaseStage(BaseModel):
    """A stage every project has; its share comes from StagePercentages."""
    stage: str
    key: str = Field(..., description="Field name in StagePercentages and HourlyRates")

    model_config = {"frozen": True}


class SpecialistStage(BaseModel):
    """An additive specialist stage for enterprise and platform projects."""
    stage: str
    percentage: float
    rate_key: str = Field(..., description="Field name in HourlyRates")
    feature_keywords: Tuple[str, ...] = Field(default=(), description="Any enterprise feature containing one of these enables the stage")
    always_for: Tuple[ComplexityTier, ...] = Field(default=(), description="Tiers that always get the stage")
    requires_compliance: bool = Field(False, description="Enabled by any compliance requirement")

    model_config = {"frozen": True}


BASE_STAGES: Tuple[BaseStage, ...] = (
    BaseStage(stage="Planning", key="planning"),
    BaseStage(stage="Design", key="design"),
    BaseStage(stage="HTML/Markup", key="html_markup"),
    BaseStage(stage="Frontend Development", key="frontend"),
    BaseStage(stage="Backend Development", key="backend"),
    BaseStage(stage="QA/Testing", key="qa"),
    BaseStage(stage="Project Management", key="management"),
)

SPECIALIST_STAGES: Tuple[SpecialistStage, ...] = (
    SpecialistStage(
        stage="AI/ML Engineering", percentage=15, rate_key="ai_ml_engineer",
        feature_keywords=("ai", "machine learning", "scenario"),
    ),
    SpecialistStage(
        stage="Security Specialist", percentage=12, rate_key="security_specialist",
        feature_keywords=("security", "encryption", "audit"),
    ),
    SpecialistStage(
        stage="Enterprise Architecture", percentage=8, rate_key="enterprise_architect",
        feature_keywords=("microservices", "architecture"),
        always_for=(ComplexityTier.PLATFORM,),
    ),
    SpecialistStage(
        stage="Compliance Expert", percentage=10, rate_key="compliance_expert",
        requires_compliance=True,
    ),
    SpecialistStage(
        stage="DevOps Engineering", percentage=10, rate_key="devops_engineer",
        feature_keywords=("cloud", "containerized", "kubernetes"),
    ),
)


class CostConfig(BaseModel):
    """Stage shares, rates and overhead ratios for the DIY cost estimate."""
    stage_percentages: StagePercentages = Field(default_factory=StagePercentages)
    hourly_rates: HourlyRates = Field(default_factory=HourlyRates)
    base_stages: Tuple[BaseStage, ...] = BASE_STAGES
    backend_stage_key: str = "backend"
    specialist_stages: Tuple[SpecialistStage, ...] = SPECIALIST_STAGES
    recruitment_rate: float = 0.20
    benefits_rate: float = 0.35
    onboarding_rate: float = 0.25
    compliance_audit_rate: float = 0.08
    compliance_overhead: Dict[str, float] = Field(default_factory=lambda: dict(COMPLIANCE_OVERHEAD))
    equipment_per_member: float = 4500
    enterprise_equipment_per_member: float = 6000
    hours_per_week: int = 40
    weeks_per_member: int = 16
    multi_phase_weeks_per_member: int = 20
    multi_phase_timeline_factor: float = 1.3
    hours_rounding_unit: int = 10

    model_config = {"frozen": True}

    def with_overrides(
        self,
        stage_percentages: Optional[Dict[str, float]] = None,
        hourly_rates: Optional[Dict[str, float]] = None,
    ) -> "CostConfig":
        """Return a copy with individual stage shares or rates replaced."""
        update = {}
        if stage_percentages:
            update["stage_percentages"] = _merge_overrides(self.stage_percentages, stage_percentages, "stage_percentages")
        if hourly_rates:
            update["hourly_rates"] = _merge_overrides(self.hourly_rates, hourly_rates, "hourly_rates")
        return self.model_copy(update=update) if update else self

    def check(self) -> None:
        """Raise ConfigurationError for values that make a division undefined."""
        _check_finite(self.stage_percentages, "stage_percentages")
        _check_finite(self.hourly_rates, "hourly_rates")
        for stage in self.base_stages:
            pct = getattr(self.stage_percentages, stage.key)
            if pct <= 0:
                raise ConfigurationError(
                    f"stage percentage '{stage.key}' must be positive, got {pct}",
                    field=f"stage_percentages.{stage.key}",
                )
            rate = getattr(self.hourly_rates, stage.key)
            if rate < 0:
                raise ConfigurationError(
                    f"hourly rate '{stage.key}' must not be negative, got {rate}",
                    field=f"hourly_rates.{stage.key}",
                )
        for specialist in self.specialist_stages:
            if specialist.percentage <= 0:
                raise ConfigurationError(
                    f"specialist stage '{specialist.stage}' percentage must be positive",
                    field="specialist_stages",
                )
            if getattr(self.hourly_rates, specialist.rate_key) < 0:
                raise ConfigurationError(
                    f"hourly rate '{specialist.rate_key}' must not be negative",
                    field=f"hourly_rates.{specialist.rate_key}",
                )
        for name in ("hours_per_week", "weeks_per_member", "multi_phase_weeks_per_member", "hours_rounding_unit"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive", field=name)


# --- Revenue projector --------------------------------------------------------

class MarketParameters(BaseModel):
    """Per-business-model market assumptions; each field is overridable."""
    # SaaS
    saas_arpu: float = Field(150, description="Average revenue per user (monthly)")
    saas_acquisition_rate: float = Field(25, description="New customers per month")
    saas_churn_rate: float = Field(0.10, description="Monthly churn rate")
    # E-commerce
    ecommerce_transaction_volume: float = Field(500, description="Monthly transactions")
    ecommerce_aov: float = Field(180, description="Average order value")
    ecommerce_margin: float = Field(0.25, description="Profit margin")
    # B2B
    b2b_deal_size: float = Field(12000, description="Average B2B deal size")
    b2b_deals_per_month: float = Field(3, description="B2B deals per month")
    b2b_win_rate: float = Field(0.25, description="B2B win rate")
    # Mobile
    mobile_mau: float = Field(15000, description="Monthly active users")
    mobile_revenue_per_user: float = Field(3.50, description="Revenue per user per month")
    # Enterprise
    enterprise_deal_size: float = Field(75000, description="Average enterprise deal size")
    enterprise_deals_per_quarter: float = Field(2, description="Enterprise deals per quarter")
    enterprise_win_rate: float = Field(0.15, description="Enterprise win rate")
    # Market penetration
    market_penetration_factor: float = Field(0.7, description="Conservative market penetration (0.1-1.0)")

    model_config = {"frozen": True}


class RevenueConfig(BaseModel):
    """Scenario multipliers applied to the monthly revenue potential."""
    market_parameters: MarketParameters = Field(default_factory=MarketParameters)
    two_week_delay_factor: float = 0.5
    three_month_delay_factor: int = 3
    first_mover_months: int = 6
    first_mover_premium: float = 0.30
    conservative_factor: float = 0.65

    model_config = {"frozen": True}

    def with_overrides(self, market_parameters: Optional[Dict[str, float]] = None) -> "RevenueConfig":
        """Return a copy with individual market parameters replaced."""
        if not market_parameters:
            return self
        return self.model_copy(
            update={"market_parameters": _merge_overrides(self.market_parameters, market_parameters, "market_parameters")}
        )

    def check(self) -> None:
        """Raise ConfigurationError for out-of-range ratios."""
        params = self.market_parameters
        _check_finite(params, "market_parameters")
        if not 0 < params.market_penetration_factor <= 1:
            raise ConfigurationError(
                "market_penetration_factor must be within (0, 1]",
                field="market_parameters.market_penetration_factor",
            )
        for name in ("saas_churn_rate", "ecommerce_margin", "b2b_win_rate", "enterprise_win_rate"):
            value = getattr(params, name)
            if not 0 <= value <= 1:
                raise ConfigurationError(f"{name} must be within [0, 1]", field=f"market_parameters.{name}")
        for name, value in params.model_dump().items():
            if value < 0:
                raise ConfigurationError(f"{name} must not be negative", field=f"market_parameters.{name}")


# --- Price calculator ---------------------------------------------------------

class PricingConfig(BaseModel):
    """Tier multipliers, rounding and add-on shares for vendor pricing."""
    multipliers: Dict[ComplexityTier, float] = Field(default_factory=lambda: _tier_table(PRICING_MULTIPLIERS))
    compliance_premium: float = 0.02
    money_rounding_unit: int = 1000
    extended_support_rate: float = 0.25
    enterprise_extended_support_rate: float = 0.35
    expedited_delivery_rate: float = 0.20
    enterprise_expedited_delivery_rate: float = 0.25
    additional_features_rate: float = 0.30
    compliance_certification_rate: float = 0.15

    model_config = {"frozen": True}

    def check(self) -> None:
        """Raise ConfigurationError for a missing tier or a non-positive unit."""
        if self.money_rounding_unit <= 0:
            raise ConfigurationError("money_rounding_unit must be positive", field="money_rounding_unit")
        for tier in ComplexityTier:
            multiplier = self.multipliers.get(tier)
            if multiplier is None or multiplier <= 0:
                raise ConfigurationError(
                    f"pricing multiplier missing or non-positive for tier '{tier.value}'",
                    field="multipliers",
                )


# --- Consistency checker ------------------------------------------------------

class ConsistencyConfig(BaseModel):
    """Expected multipliers and the tolerance a quote must fall within."""
    multipliers: Dict[ComplexityTier, float] = Field(default_factory=lambda: _tier_table(PRICING_MULTIPLIERS))
    tolerance: float = 0.05
    consistent_score: int = 95
    inconsistent_score: int = 85

    model_config = {"frozen": True}

    def check(self) -> None:
        """Raise ConfigurationError for a non-positive tolerance or a missing tier."""
        if self.tolerance <= 0:
            raise ConfigurationError("tolerance must be positive", field="tolerance")
        for tier in ComplexityTier:
            if tier not in self.multipliers:
                raise ConfigurationError(
                    f"expected multiplier missing for tier '{tier.value}'",
                    field="multipliers",
                )


# --- Whole pipeline -----------------------------------------------------------

class PipelineConfig(BaseModel):
    """One immutable bundle of every stage's configuration."""
    normalizer: NormalizerConfig = Field(default_factory=NormalizerConfig)
    cost: CostConfig = Field(default_factory=CostConfig)
    revenue: RevenueConfig = Field(default_factory=RevenueConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    consistency: ConsistencyConfig = Field(default_factory=ConsistencyConfig)
    currency: str = "$"
    geography: str = "United States"

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PipelineConfig":
        """Build the default tables with rounding units and ratios taken from settings."""
        s = settings or default_settings
        return cls(
            normalizer=NormalizerConfig(hours_rounding_unit=s.hours_rounding_unit),
            cost=CostConfig(hours_rounding_unit=s.hours_rounding_unit),
            revenue=RevenueConfig(
                market_parameters=MarketParameters(
                    market_penetration_factor=s.market_penetration_factor
                )
            ),
            pricing=PricingConfig(money_rounding_unit=s.money_rounding_unit),
            consistency=ConsistencyConfig(tolerance=s.consistency_tolerance),
            currency=s.default_currency,
            geography=s.default_geography,
        )
