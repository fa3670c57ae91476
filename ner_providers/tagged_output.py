"""
Line-oriented tagged output: one token per line, label in the last field.

    Emily   B-PER
    Johnson I-PER
    visited O
"""
from typing import Iterable, List, Sequence, Tuple

from ner_providers.base import EntitySpan, PERSON, normalize_entity_type


def format_tagged_output(words: Sequence[str], labels: Sequence[str]) -> str:
    return "\n".join(f"{word}\t{label}" for word, label in zip(words, labels))


def parse_tagged_output(output: str) -> List[Tuple[str, str]]:
    """Parse tagged output into (word, normalized label) pairs.

    Lines with fewer than two whitespace-separated fields carry no tag and
    are skipped.
    """
    pairs = []
    for line in output.split("\n"):
        parts = line.split()
        if len(parts) < 2:
            continue
        pairs.append((parts[0], normalize_entity_type(parts[-1])))
    return pairs


def person_runs(labels: Iterable[str]) -> List[EntitySpan]:
    """Spans covering each run of consecutive PERSON labels.

    A run is closed by any non-PERSON label or by the end of input.
    """
    spans = []
    start = None
    index = -1
    for index, label in enumerate(labels):
        if label == PERSON:
            if start is None:
                start = index
        elif start is not None:
            spans.append(EntitySpan(start, index))
            start = None
    if start is not None:
        spans.append(EntitySpan(start, index + 1))
    return spans
