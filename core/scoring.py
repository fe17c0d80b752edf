"""Pronunciation grading: edit distance blended with recognizer confidence."""

from .config import (
    SIMILARITY_WEIGHT, CONFIDENCE_WEIGHT, OKAY_THRESHOLD,
    LABEL_THRESHOLDS, MISS_LABEL, NO_INPUT_LABEL
)
from .utils import normalize_spanish, round_half_up, clamp


def levenshtein_distance(a: str, b: str) -> int:
    """Classic Levenshtein distance with unit costs, keeping two rows of the shorter string."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost   # substitution
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]; 1.0 exactly when the strings are equal."""
    if a == b:
        return 1.0
    longest = max(len(a), len(b), 1)
    return clamp(1 - levenshtein_distance(a, b) / longest, 0.0, 1.0)


def label_for(weighted: float) -> str:
    """Map a weighted score to its label, checking thresholds highest first."""
    for threshold, label in LABEL_THRESHOLDS:
        if weighted >= threshold:
            return label
    return MISS_LABEL


class GradeResult:
    """Outcome of grading one utterance against a target word. Treated as a value."""

    def __init__(self, similarity: float, weighted: float, score100: int, label: str):
        self.similarity = similarity
        self.weighted = weighted
        self.score100 = score100
        self.label = label

    def __eq__(self, other) -> bool:
        if not isinstance(other, GradeResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (f"GradeResult(similarity={self.similarity!r}, weighted={self.weighted!r}, "
                f"score100={self.score100!r}, label={self.label!r})")

    @property
    def is_hit(self) -> bool:
        return self.weighted >= OKAY_THRESHOLD

    def to_dict(self) -> dict:
        return {
            'similarity': self.similarity,
            'weighted': self.weighted,
            'score100': self.score100,
            'label': self.label
        }


def grade_pronunciation(said_raw: str, target_raw: str, confidence: float) -> GradeResult:
    """Grade what the recognizer heard against the target word.

    Text similarity dominates the weighted score; recognizer confidence only
    contributes up to CONFIDENCE_WEIGHT of it. Empty input on either side
    yields the 'no-input' grade without computing any distance.
    """
    said = normalize_spanish(said_raw).strip()
    target = normalize_spanish(target_raw).strip()
    if not said or not target:
        return GradeResult(0.0, 0.0, 0, NO_INPUT_LABEL)

    sim = similarity(said, target)
    weighted = sim * SIMILARITY_WEIGHT + clamp(confidence, 0.0, 1.0) * CONFIDENCE_WEIGHT
    weighted = clamp(weighted, 0.0, 1.0)
    return GradeResult(sim, weighted, round_half_up(weighted * 100), label_for(weighted))
