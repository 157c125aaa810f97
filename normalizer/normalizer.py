"""Roadmap normalizer: free text -> NormalizedProfile.

Turns a roadmap or PRD into the handful of signals the cost, revenue and
pricing stages run on: recognised features, complexity tier, backend
hours, business model, compliance needs and phasing.
"""

import re
from typing import Optional

import structlog
from pydantic import ValidationError

from contracts import (
    BusinessModel,
    ComplexityTier,
    NormalizedProfile,
    NormalizerConfig,
    ProjectType,
    RoadmapInput,
)
from errors import invalid_input_from_validation
from estimators.rounding import round_to_unit
from normalizer.classifier import classify, classify_all, contains_any, match_keywords

logger = structlog.get_logger()


# Project types that name a business model outright
PROJECT_TYPE_BUSINESS_MODELS = {
    ProjectType.SAAS: BusinessModel.SAAS,
    ProjectType.MOBILE: BusinessModel.MOBILE,
    ProjectType.ENTERPRISE: BusinessModel.ENTERPRISE,
}


class RoadmapNormalizer:
    """Extracts a NormalizedProfile from roadmap text using keyword tables."""

    def __init__(self, config: Optional[NormalizerConfig] = None):
        """Initialize the normalizer.

        Args:
            config: Keyword tables and hour ladders; defaults to NormalizerConfig()

        Raises:
            ConfigurationError: If the tables cannot produce a profile
        """
        self.config = config or NormalizerConfig()
        self.config.check()
        words = "|".join(re.escape(w) for w in self.config.phase_count_words)
        self._phase_count_pattern = re.compile(rf"(\d+)\s*(?:{words})")

    def normalize(self, roadmap: RoadmapInput) -> NormalizedProfile:
        """Build the profile for one roadmap."""
        text = roadmap.roadmap_text

        features = self.extract_features(text)
        complexity = self.classify_complexity(text)
        backend_hours = self.estimate_backend_hours(complexity, len(features))
        business_model = self.identify_business_model(text, roadmap.project_type)
        is_multi_phase = contains_any(text, self.config.phase_indicators)
        phase_count = self.count_phases(text, complexity, is_multi_phase)

        profile = NormalizedProfile(
            normalized_features=features,
            backend_complexity=complexity,
            estimated_backend_hours=backend_hours,
            business_model=business_model,
            market_category=self.market_category(text, roadmap.industry),
            key_differentiators=match_keywords(text, self.config.differentiator_keywords),
            is_multi_phase=is_multi_phase,
            phase_count=phase_count,
            compliance_requirements=classify_all(text, self.config.compliance_rules),
            enterprise_features=match_keywords(text, self.config.enterprise_feature_keywords),
        )
        logger.debug(
            "roadmap_normalized",
            complexity=complexity.value,
            feature_count=len(features),
            backend_hours=backend_hours,
            business_model=business_model.value,
        )
        return profile

    def extract_features(self, text: str) -> list:
        """Feature vocabulary entries present in the text, in vocabulary order."""
        return match_keywords(text, self.config.feature_keywords)

    def classify_complexity(self, text: str) -> ComplexityTier:
        """First tier (most complex first) whose indicators appear, else the default."""
        result = classify(text, self.config.complexity_rules, default=self.config.default_complexity.value)
        return ComplexityTier(result)

    def estimate_backend_hours(self, complexity: ComplexityTier, feature_count: int) -> int:
        """base_hours[tier] * max(1, factor * feature_count), rounded to the hours unit."""
        feature_multiplier = max(1.0, feature_count * self.config.feature_hours_factor)
        raw_hours = self.config.base_backend_hours[complexity] * feature_multiplier
        return round_to_unit(raw_hours, self.config.hours_rounding_unit)

    def identify_business_model(self, text: str, project_type: Optional[ProjectType] = None) -> BusinessModel:
        """First matching business-model group; project type hint, then table head, as fallbacks."""
        result = classify(text, self.config.business_model_rules)
        if result is not None:
            return BusinessModel(result)
        if project_type in PROJECT_TYPE_BUSINESS_MODELS:
            return PROJECT_TYPE_BUSINESS_MODELS[project_type]
        return self.config.default_business_model

    def count_phases(self, text: str, complexity: ComplexityTier, is_multi_phase: bool) -> int:
        """Largest numeral written before a phase word, else a tier default."""
        numbers = [int(n) for n in self._phase_count_pattern.findall(text.lower())]
        if numbers:
            return max(1, max(numbers))
        if is_multi_phase:
            return self.config.default_phase_counts.get(complexity, self.config.fallback_phase_count)
        return 1

    def market_category(self, text: str, industry: Optional[str] = None) -> str:
        """Caller's industry if given, else a keyword-derived category."""
        if industry and industry.strip():
            return industry.strip()
        return classify(text, self.config.market_category_rules, default=self.config.default_market_category)


def normalize_roadmap(
    roadmap_text: str,
    project_type: Optional[str] = None,
    industry: Optional[str] = None,
    config: Optional[NormalizerConfig] = None,
) -> NormalizedProfile:
    """Convenience function for normalizing a roadmap.

    Args:
        roadmap_text: Raw roadmap or PRD text
        project_type: Optional project type (webapp, mobile, api, platform, saas, enterprise)
        industry: Optional industry name, used as the market category
        config: Optional keyword tables

    Returns:
        NormalizedProfile for the roadmap

    Raises:
        InvalidInput: If the text is blank or project_type is unknown
    """
    try:
        roadmap = RoadmapInput(
            roadmap_text=roadmap_text,
            project_type=project_type,
            industry=industry,
        )
    except ValidationError as e:
        raise invalid_input_from_validation(e, context="RoadmapInput") from e
    return RoadmapNormalizer(config).normalize(roadmap)
