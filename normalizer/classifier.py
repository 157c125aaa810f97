"""Keyword-table classification over roadmap text.

Every table is an ordered sequence evaluated top to bottom. Matching is a
case-insensitive substring test; a keyword written with hyphens also
matches its spaced form ("multi-tenant" matches "multi tenant").
"""

from typing import Iterable, List, Optional, Sequence

from contracts import KeywordRule


def _variants(keyword: str) -> List[str]:
    kw = keyword.lower()
    if "-" in kw:
        return [kw, kw.replace("-", " ")]
    return [kw]


def contains_keyword(text: str, keyword: str) -> bool:
    """Check whether a single keyword appears in the text."""
    text_lower = text.lower()
    return any(v in text_lower for v in _variants(keyword))


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Check whether any keyword appears in the text."""
    text_lower = text.lower()
    return any(v in text_lower for kw in keywords for v in _variants(kw))


def match_keywords(text: str, vocabulary: Sequence[str]) -> List[str]:
    """Return the vocabulary entries found in the text, in vocabulary order."""
    text_lower = text.lower()
    return [kw for kw in vocabulary if any(v in text_lower for v in _variants(kw))]


def classify(text: str, table: Sequence[KeywordRule], default: Optional[str] = None) -> Optional[str]:
    """Return the result of the first rule with a keyword present in the text.

    Table order is the tie-break: a text hitting several rules gets the
    earliest one, regardless of how many keywords each rule matched.

    Args:
        text: Text to classify
        table: Ordered (keywords -> result) rules
        default: Returned when no rule matches

    Returns:
        The winning rule's result, or default
    """
    for rule in table:
        if contains_any(text, rule.keywords):
            return rule.result
    return default


def classify_all(text: str, table: Sequence[KeywordRule]) -> List[str]:
    """Return the result of every rule that matches, in table order."""
    return [rule.result for rule in table if contains_any(text, rule.keywords)]
