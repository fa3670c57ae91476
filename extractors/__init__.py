"""
Field extractors for medical report text
"""

from .result import ExtractionResult
from .names import NameExtractor
from .dates import DateOfBirthExtractor
from .claim_ids import ClaimIdExtractor

__all__ = [
    "ExtractionResult",
    "NameExtractor",
    "DateOfBirthExtractor",
    "ClaimIdExtractor",
]
