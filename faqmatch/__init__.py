"""faqmatch: fuzzy question matching for small FAQ knowledge bases."""

__version__ = "0.1.0"

from .normalize import normalize_text as normalize, extract_keywords
from .similarity import combined_similarity
from .matcher import Candidate, MatchResult, find_best_match, rank_candidates

__all__ = [
    "__version__",
    "normalize",
    "extract_keywords",
    "combined_similarity",
    "Candidate",
    "MatchResult",
    "find_best_match",
    "rank_candidates",
]
