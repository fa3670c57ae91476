"""
Pattern Matching Module

Regex-based extraction of the structured fields that do not need a model:
- Dates (five formats, scoped by birth-context cues)
- Claim identifiers (cue-based and bare codes)
- Name cues used when no NER backend is available

Quick Start:
    from pattern_matching import get_pattern_set, collect

    patterns = get_pattern_set()
    claim_ids = collect(patterns.claim_ids, text, min_length=6)
"""

from .base import (
    PatternType,
    Pattern,
    PatternSet,
    add_unique,
    collect
)

from .patterns import (
    DATE_PATTERNS,
    CLAIM_ID_PATTERNS,
    NAME_CUE_PATTERNS,
    build_pattern_set,
    get_pattern_set
)

__all__ = [
    "PatternType",
    "Pattern",
    "PatternSet",
    "add_unique",
    "collect",
    "DATE_PATTERNS",
    "CLAIM_ID_PATTERNS",
    "NAME_CUE_PATTERNS",
    "build_pattern_set",
    "get_pattern_set",
]
