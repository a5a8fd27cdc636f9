"""
Similarity Scoring for FAQ Matching.

Responsibilities:
- Compute character-level edit distance and similarity between two strings.
- Compute fuzzy keyword overlap between a query and a stored question.
- Blend both signals into a single combined score.

Non-Responsibilities:
- No candidate selection.
- No threshold decisions.
- No I/O or logging.

Invariant:
Given identical inputs, every function here returns the same score,
and every percentage lies in [0, 100].
"""

from typing import List, Optional

from .config import DEFAULT_SETTINGS, DEFAULT_TOKEN_THRESHOLD, MatchSettings
from .normalize import MIN_KEYWORD_LENGTH, extract_keywords, normalize_text


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions or substitutions
    turning ``a`` into ``b``.

    ``table[i][j]`` holds the distance between the first i characters of ``a``
    and the first j characters of ``b``.
    """
    rows, cols = len(a) + 1, len(b) + 1
    table = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            table[i][j] = min(
                table[i][j - 1] + 1,
                table[i - 1][j] + 1,
                table[i - 1][j - 1] + cost,
            )

    return table[-1][-1]


def string_similarity(a: str, b: str) -> float:
    """Edit-distance similarity as a percentage of the longer string."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100.0
    distance = levenshtein_distance(a, b)
    return (max_len - distance) / max_len * 100


def keyword_overlap(
    query_keywords: List[str],
    question_keywords: List[str],
    token_threshold: float = DEFAULT_TOKEN_THRESHOLD,
) -> float:
    """Share of query keywords with a fuzzy counterpart among the question keywords.

    The query side drives the scan; the denominator is the longer of the two
    keyword lists.
    """
    if not query_keywords and not question_keywords:
        return 100.0
    if not query_keywords or not question_keywords:
        return 0.0

    matched = sum(
        1
        for keyword in query_keywords
        if any(string_similarity(keyword, other) > token_threshold for other in question_keywords)
    )
    return matched / max(len(query_keywords), len(question_keywords)) * 100


def keyword_similarity(
    query_text: str,
    question_text: str,
    token_threshold: float = DEFAULT_TOKEN_THRESHOLD,
    min_keyword_length: int = MIN_KEYWORD_LENGTH,
) -> float:
    return keyword_overlap(
        extract_keywords(query_text, min_keyword_length),
        extract_keywords(question_text, min_keyword_length),
        token_threshold,
    )


def combined_similarity(
    user_text: str,
    question_text: str,
    settings: Optional[MatchSettings] = None,
) -> float:
    """
    Weighted blend of whole-string and keyword similarity.

    Args:
        user_text: The live user query
        question_text: A stored question
        settings: Scoring knobs (default: 0.4 string / 0.6 keyword, 80% token match)

    Returns:
        Score in [0, 100]; identical texts score 100.
    """
    settings = settings or DEFAULT_SETTINGS

    text_score = string_similarity(normalize_text(user_text), normalize_text(question_text))
    # Keyword extraction normalizes on its own, so it gets the raw texts.
    keyword_score = keyword_similarity(
        user_text,
        question_text,
        token_threshold=settings.token_threshold,
        min_keyword_length=settings.min_keyword_length,
    )

    return settings.string_weight * text_score + settings.keyword_weight * keyword_score
