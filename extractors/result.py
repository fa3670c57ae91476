"""
Extraction result record and its report rendering
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

BANNER = "=== EXTRACTED PATIENT INFORMATION ==="
FOOTER = "====================================="
NONE_FOUND = "None found"


@dataclass(frozen=True)
class ExtractionResult:
    """Names, dates of birth and claim IDs found in one document.

    Each sequence keeps first-occurrence order and holds no duplicates.
    """
    patient_names: Tuple[str, ...] = ()
    dates_of_birth: Tuple[str, ...] = ()
    claim_ids: Tuple[str, ...] = ()

    @classmethod
    def from_lists(cls, patient_names: Iterable[str], dates_of_birth: Iterable[str],
                   claim_ids: Iterable[str]) -> "ExtractionResult":
        return cls(tuple(patient_names), tuple(dates_of_birth), tuple(claim_ids))

    @property
    def is_empty(self) -> bool:
        return not (self.patient_names or self.dates_of_birth or self.claim_ids)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            'patient_names': list(self.patient_names),
            'dates_of_birth': list(self.dates_of_birth),
            'claim_ids': list(self.claim_ids)
        }

    def render(self) -> str:
        """Deterministic text report"""
        sections = [
            ("Patient Names", self.patient_names),
            ("Dates of Birth", self.dates_of_birth),
            ("Claim IDs", self.claim_ids),
        ]
        lines = [BANNER]
        for title, values in sections:
            lines.append("")
            if values:
                lines.append(f"{title}:")
                lines.extend(f"  - {value}" for value in values)
            else:
                lines.append(f"{title}: {NONE_FOUND}")
        lines.append("")
        lines.append(FOOTER)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()
