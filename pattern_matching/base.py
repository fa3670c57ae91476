"""
Base classes for pattern matching
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple
from enum import Enum
import re


class PatternType(Enum):
    """Types of patterns"""
    DATE = "date"
    CLAIM_ID = "claim_id"
    NAME_CUE = "name_cue"
    BIRTH_CONTEXT = "birth_context"


@dataclass(frozen=True)
class Pattern:
    """A named, precompiled regular expression.

    The extracted value of a match is capture group 1 when the regex defines
    a group, otherwise the whole match. Alternations that should not be
    captured are written as non-capturing groups.
    """
    pattern_type: PatternType
    name: str
    regex: str
    flags: int = re.IGNORECASE
    description: Optional[str] = None
    compiled_regex: "re.Pattern" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Compile regex pattern"""
        try:
            compiled = re.compile(self.regex, self.flags)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern '{self.regex}': {e}")
        object.__setattr__(self, 'compiled_regex', compiled)

    def finditer(self, text: str) -> Iterator[re.Match]:
        return self.compiled_regex.finditer(text)

    def value(self, match: re.Match) -> str:
        """Trimmed value of a match"""
        if self.compiled_regex.groups:
            return (match.group(1) or '').strip()
        return match.group(0).strip()

    def values(self, text: str) -> Iterator[str]:
        for match in self.finditer(text):
            yield self.value(match)


@dataclass(frozen=True)
class PatternSet:
    """Ordered, read-only pattern lists shared by all extractors"""
    dates: Tuple[Pattern, ...]
    claim_ids: Tuple[Pattern, ...]
    name_cues: Tuple[Pattern, ...]
    birth_contexts: Tuple[Pattern, ...]

    def get_patterns_by_type(self, pattern_type: PatternType) -> Tuple[Pattern, ...]:
        return {
            PatternType.DATE: self.dates,
            PatternType.CLAIM_ID: self.claim_ids,
            PatternType.NAME_CUE: self.name_cues,
            PatternType.BIRTH_CONTEXT: self.birth_contexts,
        }[pattern_type]


def add_unique(values: List[str], candidate: str, min_length: int = 1) -> bool:
    """Append candidate if it is long enough and not already present.

    Dedup is exact and case-sensitive. Returns True when appended.
    """
    if len(candidate) < min_length or candidate in values:
        return False
    values.append(candidate)
    return True


def collect(patterns: Tuple[Pattern, ...], text: str, min_length: int = 1,
            into: Optional[List[str]] = None) -> List[str]:
    """Run patterns in order over text, collecting unique values.

    Order is pattern order, then match order within a pattern.
    """
    values = into if into is not None else []
    for pattern in patterns:
        for value in pattern.values(text):
            add_unique(values, value, min_length)
    return values
