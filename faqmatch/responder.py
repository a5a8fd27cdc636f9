"""
Reply selection for the chat layer.

Turns the outcome of find_best_match into the text shown to the user:
the matched answer, or one of the fixed fallback replies when the
knowledge base is empty, nothing matches, or the knowledge base could
not be loaded.
"""

from typing import Callable, Iterable, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from .config import DEFAULT_SETTINGS, MatchSettings
from .logger import get_logger
from .matcher import Candidate, CandidateLike, find_best_match
from .retry import RetryError

EMPTY_KNOWLEDGE_BASE_REPLY = (
    "I'm sorry, but I don't have any information available in my knowledge base yet. "
    "Please contact the administration for assistance."
)

EMPTY_ANSWER_REPLY = "No answer available for this question."

NO_MATCH_REPLY = (
    "I couldn't find a specific answer to your question in my knowledge base. "
    "Here are some common topics I can help with:\n\n"
    "• Academic deadlines and fees\n"
    "• Course information\n"
    "• Examination and results\n"
    "• Registration procedures\n"
    "• General university policies\n\n"
    "Please try rephrasing your question or contact the administration directly "
    "for more specific information."
)

TECHNICAL_DIFFICULTIES_REPLY = (
    "I'm experiencing technical difficulties. "
    "Please try again later or contact the administration for assistance."
)

# Failures a knowledge-base loader may raise; anything else is a bug and propagates.
SOURCE_ERRORS = (ValueError, RetryError, SQLAlchemyError, OSError)


def reply_for(
    user_query: str,
    candidates: Sequence[CandidateLike],
    settings: Optional[MatchSettings] = None,
) -> str:
    """
    Reply text for a query against an already loaded knowledge base.

    Args:
        user_query: Text typed by the user
        candidates: The whole knowledge base, in priority order
        settings: Threshold and scoring knobs (default: threshold 70)

    Returns:
        The matched answer or a fallback reply. Never raises for empty input.
    """
    settings = settings or DEFAULT_SETTINGS
    logger = get_logger()
    logger.record_query()

    if not candidates:
        logger.record_fallback()
        logger.info("Knowledge base is empty")
        return EMPTY_KNOWLEDGE_BASE_REPLY

    match = find_best_match(user_query, candidates, settings=settings)
    if match is None:
        logger.record_fallback()
        logger.info("No confident match", candidates=len(candidates), threshold=settings.threshold)
        return NO_MATCH_REPLY

    logger.record_match()
    logger.debug(
        "Matched FAQ entry",
        question=match.candidate.question,
        score=round(match.score, 2),
    )
    return match.candidate.answer or EMPTY_ANSWER_REPLY


def answer(
    user_query: str,
    load_candidates: Callable[[], Iterable[Candidate]],
    settings: Optional[MatchSettings] = None,
) -> str:
    """Load the knowledge base, then reply. Loader failures become the technical-difficulties reply."""
    try:
        candidates = list(load_candidates())
    except SOURCE_ERRORS as e:
        logger = get_logger()
        logger.record_query()
        logger.record_fallback()
        logger.error("Error searching FAQ", error_type=type(e).__name__, error=str(e))
        return TECHNICAL_DIFFICULTIES_REPLY
    return reply_for(user_query, candidates, settings)
