"""Normalizer module for turning roadmap text into a project profile."""

from .classifier import classify, classify_all, contains_any, contains_keyword, match_keywords
from .normalizer import RoadmapNormalizer, normalize_roadmap

__all__ = [
    "classify",
    "classify_all",
    "contains_any",
    "contains_keyword",
    "match_keywords",
    "RoadmapNormalizer",
    "normalize_roadmap",
]
