"""
Date of birth extraction scoped by birth-context cues
"""
from typing import List

from pattern_matching.base import PatternSet, collect
from metrics import track_stage
from logger import get_logger

logger = get_logger(__name__)


class DateOfBirthExtractor:
    """Finds dates that follow a birth cue ("DOB", "born", "date of birth").

    Only when no cue window yields a date is the whole document searched.
    MM/DD and DD/MM readings are never reconciled: a numeric date is
    reported once per literal string.
    """

    def __init__(self, patterns: PatternSet):
        self.patterns = patterns

    @track_stage("dates")
    def extract(self, text: str) -> List[str]:
        if not text:
            return []

        dates: List[str] = []
        for cue in self.patterns.birth_contexts:
            for match in cue.finditer(text):
                collect(self.patterns.dates, match.group(1), into=dates)

        if dates:
            return dates

        logger.debug("No birth-context date found, searching whole document")
        return collect(self.patterns.dates, text)
