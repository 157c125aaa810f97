"""Roadmap contracts: raw roadmap input and the normalized project profile."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from enum import Enum


class ComplexityTier(str, Enum):
    """Ordinal complexity classification of a roadmap."""
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"
    ENTERPRISE = "enterprise"
    PLATFORM = "platform"

    @property
    def rank(self) -> int:
        """Position in the simple < medium < complex < enterprise < platform order."""
        return list(ComplexityTier).index(self)

    @property
    def is_enterprise(self) -> bool:
        """True for the tiers that bring in specialist roles and enterprise pricing."""
        return self in (ComplexityTier.ENTERPRISE, ComplexityTier.PLATFORM)


class BusinessModel(str, Enum):
    """Revenue model the roadmap's product is sold under."""
    SAAS = "saas"
    ECOMMERCE = "ecommerce"
    B2B = "b2b"
    MOBILE = "mobile"
    ENTERPRISE = "enterprise"


class ProjectType(str, Enum):
    """Optional caller-supplied project classification."""
    WEBAPP = "webapp"
    MOBILE = "mobile"
    API = "api"
    PLATFORM = "platform"
    SAAS = "saas"
    ENTERPRISE = "enterprise"


class RoadmapInput(BaseModel):
    """Free-text roadmap or PRD plus optional hints."""
    roadmap_text: str = Field(..., description="Raw roadmap or PRD text")
    project_type: Optional[ProjectType] = Field(None, description="Project type classification")
    industry: Optional[str] = Field(None, description="Industry or domain (e.g., fintech, healthcare)")

    model_config = {"frozen": True}

    @field_validator("roadmap_text")
    @classmethod
    def roadmap_text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("roadmap_text must not be empty")
        return value


class NormalizedProfile(BaseModel):
    """Standardised signals extracted from a roadmap. Input for every later stage."""
    normalized_features: List[str] = Field(default_factory=list, description="Recognised features, in vocabulary order")
    backend_complexity: ComplexityTier = Field(..., description="Complexity tier")
    estimated_backend_hours: int = Field(..., ge=0, description="Backend hours, rounded to the hours unit")
    business_model: BusinessModel = Field(..., description="Identified business model")
    market_category: str = Field(..., description="Standardised market category")
    key_differentiators: List[str] = Field(default_factory=list)
    is_multi_phase: bool = Field(False, description="Whether delivery spans several phases")
    phase_count: int = Field(1, ge=1, description="Number of implementation phases")
    compliance_requirements: List[str] = Field(default_factory=list, description="SOC2, GDPR, HIPAA, ...")
    enterprise_features: List[str] = Field(default_factory=list, description="Features that need specialist roles")

    model_config = {"frozen": True}
