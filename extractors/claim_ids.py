"""
Claim identifier extraction
"""
from typing import List

from pattern_matching.base import PatternSet, collect
from metrics import track_stage


class ClaimIdExtractor:
    """Runs the claim-id pattern cascade over the whole document.

    The bare-code patterns at the end of the cascade also pick up phone
    numbers and record numbers; values shorter than ``min_length`` are
    dropped.
    """

    def __init__(self, patterns: PatternSet, min_length: int = 6):
        self.patterns = patterns
        self.min_length = min_length

    @track_stage("claim_ids")
    def extract(self, text: str) -> List[str]:
        if not text:
            return []
        return collect(self.patterns.claim_ids, text, self.min_length)
