"""
Pronunciation scoring for speech practice.

Compares the recognized transcript with the target phrase using
normalized Levenshtein similarity.
"""

from dataclasses import dataclass

from prolingo.domain.constants import PRONUNCIATION_PASS_THRESHOLD


@dataclass(frozen=True)
class PronunciationResult:
    success: bool
    accuracy: float  # Percent, 0-100
    similarity: float  # 0.0-1.0


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning `a` into `b`."""
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    current[j - 1] + 1,  # insertion
                    previous[j] + 1,  # deletion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def string_similarity(a: str, b: str) -> float:
    """
    Similarity in [0, 1]: 1 - distance / longest length.

    Two empty strings are identical.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - levenshtein_distance(a, b) / longest


def score_pronunciation(
    recognized: str,
    target: str,
    threshold: float = PRONUNCIATION_PASS_THRESHOLD,
) -> PronunciationResult:
    """
    Score a recognized transcript against the target phrase.

    Comparison ignores case. The attempt passes when similarity reaches
    `threshold`.
    """
    similarity = string_similarity(recognized.lower(), target.lower())
    return PronunciationResult(
        success=similarity >= threshold,
        accuracy=similarity * 100,
        similarity=similarity,
    )
