"""
Tests for reply selection and fallbacks.
"""

import pytest
from sqlalchemy.exc import OperationalError

from faqmatch.config import MatchSettings
from faqmatch.matcher import Candidate
from faqmatch.responder import (
    answer,
    reply_for,
    EMPTY_ANSWER_REPLY,
    EMPTY_KNOWLEDGE_BASE_REPLY,
    NO_MATCH_REPLY,
    TECHNICAL_DIFFICULTIES_REPLY,
)
from faqmatch.retry import RetryError


class TestReplyFor:
    """Test replies for a loaded knowledge base."""

    def test_matched_answer(self, candidates, quiet_logger):
        reply = reply_for("When is the deadline for fee payment?", candidates)
        assert reply == "Fees are due by the 15th."
        assert quiet_logger.metrics["matches"] == 1
        assert quiet_logger.metrics["queries"] == 1

    def test_empty_knowledge_base(self, quiet_logger):
        assert reply_for("anything", []) == EMPTY_KNOWLEDGE_BASE_REPLY
        assert quiet_logger.metrics["fallbacks"] == 1

    def test_no_match(self, candidates, quiet_logger):
        assert reply_for("What is the cafeteria menu today?", candidates) == NO_MATCH_REPLY
        assert quiet_logger.metrics["fallbacks"] == 1
        assert quiet_logger.metrics["matches"] == 0

    def test_matched_entry_without_answer(self):
        kb = [Candidate(question="How do I register for courses?", answer="")]
        assert reply_for("How do I register for courses?", kb) == EMPTY_ANSWER_REPLY

    def test_threshold_from_settings(self, candidates):
        """fee payment deadline scores between 40 and 70 against the fee entry."""
        assert reply_for("fee payment deadline", candidates) == NO_MATCH_REPLY
        lenient = MatchSettings(threshold=35)
        assert reply_for("fee payment deadline", candidates, lenient) == "Fees are due by the 15th."


class TestAnswer:
    """Test loading plus replying."""

    def test_uses_loader(self, candidates):
        assert answer("How do I register for courses?", lambda: candidates) == "Register through the student portal."

    @pytest.mark.parametrize("error", [
        ValueError("rest source unavailable"),
        RetryError("Failed after 4 attempts"),
        OperationalError("SELECT", {}, Exception("no such table: faq")),
        OSError("disk unavailable"),
    ])
    def test_source_failure_becomes_technical_reply(self, error, quiet_logger):
        def broken_loader():
            raise error

        assert answer("anything", broken_loader) == TECHNICAL_DIFFICULTIES_REPLY
        assert quiet_logger.metrics["fallbacks"] == 1

    def test_programming_errors_propagate(self):
        def buggy_loader():
            raise TypeError("bug")

        with pytest.raises(TypeError):
            answer("anything", buggy_loader)
