"""
Name matching between free-text guest names and address-book contacts.

Names are compared after normalize_name (lowercase, trimmed). Accents are
kept: "Joao" and "João" only meet through the edit-distance fallback.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from .normalize import normalize_name

SIMILARITY_THRESHOLD = 0.2
CONFIDENT_THRESHOLD = 0.5
CONFIDENT_LIMIT = 3
WEAK_LIMIT = 5

EXACT_CONFIDENCE = 1.0
SUBSTRING_CONFIDENCE = 0.9


@dataclass(frozen=True)
class Candidate:
    """An address-book entry available for matching."""

    name: str
    phones: Tuple[str, ...] = ()
    email: str = ""

    def __post_init__(self):
        object.__setattr__(self, "phones", tuple(self.phones))


@dataclass(frozen=True)
class Match:
    name: str
    phones: Tuple[str, ...] = ()
    confidence: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "phones", tuple(self.phones))


def levenshtein_similarity(a: str, b: str) -> float:
    """1 - edit_distance / longest length. Callers must not pass two empty strings."""
    distance = Levenshtein.distance(a, b)
    return 1 - distance / max(len(a), len(b))


def is_similar(query: str, candidate: str, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    if not query or not candidate:
        return False
    return (
        query in candidate
        or candidate in query
        or levenshtein_similarity(query, candidate) >= threshold
    )


def calculate_confidence(query: str, candidate: str) -> float:
    if query == candidate:
        return EXACT_CONFIDENCE
    if query in candidate or candidate in query:
        return SUBSTRING_CONFIDENCE
    return levenshtein_similarity(query, candidate)


class NameMatcher:
    """
    Scores a query name against a fixed list of candidates.

    Matching is stateless per call: find_matches never mutates the
    candidates and returns the same result for the same query.
    """

    def __init__(
        self,
        candidates: Sequence[Candidate],
        similarity_threshold: float = SIMILARITY_THRESHOLD,
        confident_threshold: float = CONFIDENT_THRESHOLD,
        confident_limit: int = CONFIDENT_LIMIT,
        weak_limit: int = WEAK_LIMIT,
    ):
        """
        Args:
            candidates: Address-book entries, in directory order
            similarity_threshold: Minimum edit-distance similarity to consider a candidate
            confident_threshold: Confidence at which the short result list applies
            confident_limit: Max results when any match is confident
            weak_limit: Max results when every match is weak
        """
        self.candidates: Tuple[Candidate, ...] = tuple(candidates)
        self.similarity_threshold = similarity_threshold
        self.confident_threshold = confident_threshold
        self.confident_limit = confident_limit
        self.weak_limit = weak_limit

    def find_matches(self, query: str) -> List[Match]:
        """
        Return matches for query, best first.

        Ties keep directory order. At most confident_limit matches are
        returned when any reaches confident_threshold, otherwise at most
        weak_limit.
        """
        q = normalize_name(query)
        matches = []
        for candidate in self.candidates:
            c = normalize_name(candidate.name)
            if not is_similar(q, c, self.similarity_threshold):
                continue
            matches.append(
                Match(
                    name=candidate.name,
                    phones=candidate.phones,
                    confidence=calculate_confidence(q, c),
                )
            )

        # sorted() is stable, so equal confidences keep directory order
        matches = sorted(matches, key=lambda m: m.confidence, reverse=True)

        if any(m.confidence >= self.confident_threshold for m in matches):
            return matches[:self.confident_limit]
        return matches[:self.weak_limit]
