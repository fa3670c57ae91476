"""
Pattern library for patient information extraction

Dates of birth, claim identifiers, name cues for the regex-only name
fallback, and birth-context cues that scope the date search.
"""
from functools import lru_cache
from typing import Optional, Tuple

from pattern_matching.base import Pattern, PatternSet, PatternType
from config import settings

MONTHS = (r'(?:January|February|March|April|May|June|July|August|September'
          r'|October|November|December)')
DAY = r'(?:0[1-9]|[12][0-9]|3[01])'
MONTH_NUM = r'(?:0[1-9]|1[0-2])'
YEAR = r'(?:19|20)\d{2}'
# Spelled-out dates are often written without the leading zero
LOOSE_DAY = r'(?:0?[1-9]|[12][0-9]|3[01])'

DATE_PATTERNS: Tuple[Pattern, ...] = (
    Pattern(
        pattern_type=PatternType.DATE,
        name="mm_dd_yyyy",
        regex=rf'\b{MONTH_NUM}[/-]{DAY}[/-]{YEAR}\b',
        description="MM/DD/YYYY or MM-DD-YYYY"
    ),
    Pattern(
        pattern_type=PatternType.DATE,
        name="dd_mm_yyyy",
        regex=rf'\b{DAY}[/-]{MONTH_NUM}[/-]{YEAR}\b',
        description="DD/MM/YYYY or DD-MM-YYYY"
    ),
    Pattern(
        pattern_type=PatternType.DATE,
        name="yyyy_mm_dd",
        regex=rf'\b{YEAR}[/-]{MONTH_NUM}[/-]{DAY}\b',
        description="YYYY-MM-DD"
    ),
    Pattern(
        pattern_type=PatternType.DATE,
        name="month_dd_yyyy",
        regex=rf'\b{MONTHS}\s+{LOOSE_DAY},\s+{YEAR}\b',
        description="Month DD, YYYY (January 15, 1985)"
    ),
    Pattern(
        pattern_type=PatternType.DATE,
        name="dd_month_yyyy",
        regex=rf'\b{LOOSE_DAY}\s+{MONTHS}\s+{YEAR}\b',
        description="DD Month YYYY (15 January 1985)"
    ),
)

# Cue words that follow "Claim" are never read as codes
CODE = r'(?!(?:id|identifier|number|no)\b)([A-Z0-9]{6,15})\b'

CLAIM_ID_PATTERNS: Tuple[Pattern, ...] = (
    Pattern(
        pattern_type=PatternType.CLAIM_ID,
        name="claim_cue",
        regex=rf'\bclaim[\s#:-]*{CODE}',
        description="Claim: CODE"
    ),
    Pattern(
        pattern_type=PatternType.CLAIM_ID,
        name="claim_id_cue",
        regex=rf'\bclaim\s*id\b[\s#:-]*{CODE}',
        description="Claim ID: CODE"
    ),
    Pattern(
        pattern_type=PatternType.CLAIM_ID,
        name="claim_number_cue",
        regex=rf'\bclaim\s*number[\s#:-]*{CODE}',
        description="Claim Number: CODE"
    ),
    Pattern(
        pattern_type=PatternType.CLAIM_ID,
        name="claim_no_cue",
        regex=rf'\bclaim\s*no\.?[\s#:-]*{CODE}',
        description="Claim No: CODE"
    ),
    Pattern(
        pattern_type=PatternType.CLAIM_ID,
        name="id_cue",
        regex=rf'\bID\b[\s#:-]*{CODE}',
        description="Generic ID: CODE"
    ),
    Pattern(
        pattern_type=PatternType.CLAIM_ID,
        name="prefixed_code",
        regex=r'\b([A-Z]{2,4}[0-9]{6,12})\b',
        description="Bare 2-4 letter prefix followed by 6-12 digits"
    ),
    Pattern(
        pattern_type=PatternType.CLAIM_ID,
        name="numeric_code",
        regex=r'\b([0-9]{8,15})\b',
        description="Bare 8-15 digit number"
    ),
)

HONORIFICS = r'(?:Mr|Mrs|Ms|Dr)'
# Capitalized words on a single line
NAME = r'([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*)'

NAME_CUE_PATTERNS: Tuple[Pattern, ...] = (
    Pattern(
        pattern_type=PatternType.NAME_CUE,
        name="patient_cue",
        regex=rf'\bPatient(?:[ \t]+Name)?[ \t]*:[ \t]*(?!{HONORIFICS}\b){NAME}',
        flags=0,
        description="Patient: First Last / Patient Name: First Last"
    ),
    Pattern(
        pattern_type=PatternType.NAME_CUE,
        name="name_cue",
        regex=rf'\bName[ \t]*:[ \t]*(?!{HONORIFICS}\b){NAME}',
        flags=0,
        description="Name: First Last"
    ),
    Pattern(
        pattern_type=PatternType.NAME_CUE,
        name="honorific_cue",
        regex=rf'\b{HONORIFICS}\.?[ \t]+{NAME}',
        flags=0,
        description="Mr./Mrs./Ms./Dr. First Last, honorific not captured"
    ),
)

BIRTH_CUES = (
    ("birth_date", r'\bbirth\s*date[\s:]*'),
    ("date_of_birth", r'\bdate\s*of\s*birth[\s:]*'),
    ("born", r'\bborn\s*(?:on)?[\s:]*'),
    ("dob", r'\bDOB[\s:]*'),
)


def _birth_context_patterns(max_chars: Optional[int]) -> Tuple[Pattern, ...]:
    """One pattern per cue, or a single alternation when the window is capped.

    Per-cue patterns report dates in cue order; the capped alternation
    reports them in document order.
    """
    if max_chars is not None:
        any_cue = '(?:' + '|'.join(cue for _, cue in BIRTH_CUES) + ')'
        return (
            Pattern(
                pattern_type=PatternType.BIRTH_CONTEXT,
                name="any_birth_cue",
                regex=any_cue + rf'([^\n.;]{{1,{max_chars}}})',
                description=f"Up to {max_chars} characters after any birth cue, stopping at . or ;"
            ),
        )

    window = r'([^\n]*)'
    return tuple(
        Pattern(
            pattern_type=PatternType.BIRTH_CONTEXT,
            name=name,
            regex=cue + window,
            description=f"Context window after the '{name}' cue"
        )
        for name, cue in BIRTH_CUES
    )


@lru_cache(maxsize=None)
def build_pattern_set(birth_context_max_chars: Optional[int] = None) -> PatternSet:
    """Build (once per window size) the shared pattern set"""
    return PatternSet(
        dates=DATE_PATTERNS,
        claim_ids=CLAIM_ID_PATTERNS,
        name_cues=NAME_CUE_PATTERNS,
        birth_contexts=_birth_context_patterns(birth_context_max_chars),
    )


def get_pattern_set() -> PatternSet:
    """Pattern set for the configured birth-context window"""
    return build_pattern_set(settings.get('birth_context_max_chars'))
