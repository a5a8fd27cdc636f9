"""
Best-Match Selection.

Responsibilities:
- Score every candidate question against the user query.
- Apply the confidence threshold.
- Return the single best candidate, or None.

Non-Responsibilities:
- No knowledge base loading.
- No fallback replies.
- No caching between calls.

Invariant:
A returned match always scores strictly above the threshold, and among
equal top scores the earliest candidate wins.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

from .config import DEFAULT_THRESHOLD, MatchSettings
from .similarity import combined_similarity


@dataclass(frozen=True)
class Candidate:
    """A stored question/answer pair."""

    question: str
    answer: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Candidate":
        return cls(question=data.get("question") or "", answer=data.get("answer") or "")

    def to_dict(self) -> dict:
        return {"question": self.question, "answer": self.answer}


@dataclass(frozen=True)
class MatchResult:
    candidate: Candidate
    score: float


CandidateLike = Union[Candidate, Mapping[str, Any]]


def as_candidate(item: CandidateLike) -> Candidate:
    if isinstance(item, Candidate):
        return item
    return Candidate.from_mapping(item)


def find_best_match(
    user_query: str,
    candidates: Iterable[CandidateLike],
    threshold: Optional[float] = None,
    settings: Optional[MatchSettings] = None,
) -> Optional[MatchResult]:
    """
    Find the candidate whose question best matches the user query.

    Args:
        user_query: Free-form text typed by the user
        candidates: Candidates (or question/answer mappings) in priority order
        threshold: Scores must be strictly greater than this to qualify
            (default: settings.threshold, else 70)
        settings: Scoring knobs forwarded to combined_similarity

    Returns:
        MatchResult for the winner, or None when the list is empty or nothing
        clears the threshold.
    """
    if threshold is None:
        threshold = settings.threshold if settings is not None else DEFAULT_THRESHOLD
    best: Optional[MatchResult] = None

    for item in candidates:
        candidate = as_candidate(item)
        score = combined_similarity(user_query, candidate.question, settings)
        if score <= threshold:
            continue
        # Strict comparison keeps the earlier candidate on ties.
        if best is None or score > best.score:
            best = MatchResult(candidate=candidate, score=score)

    return best


def rank_candidates(
    user_query: str,
    candidates: Iterable[CandidateLike],
    limit: Optional[int] = None,
    settings: Optional[MatchSettings] = None,
) -> List[MatchResult]:
    """Score every candidate, highest first; input order breaks ties. No threshold."""
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    results = [
        MatchResult(candidate=c, score=combined_similarity(user_query, c.question, settings))
        for c in map(as_candidate, candidates)
    ]
    results.sort(key=lambda r: r.score, reverse=True)
    if limit is not None:
        results = results[:limit]
    return results
