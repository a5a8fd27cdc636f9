"""
Tests for database.py - SQLite FAQ table.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from faqmatch.database import FAQ, init_database, get_session, load_candidates_from_db, upsert_candidates
from faqmatch.matcher import Candidate


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_database_file(self, tmp_path):
        db_path = tmp_path / "faq.db"
        assert not db_path.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_creates_tables(self, tmp_path):
        db_path = tmp_path / "faq.db"
        init_database(db_path)

        session = get_session(db_path)
        assert session.query(FAQ).count() == 0
        session.close()

    def test_init_creates_parent_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "faq.db"
        init_database(db_path)
        assert db_path.exists()


class TestFAQModel:
    """Test constraints on the FAQ model."""

    @pytest.fixture
    def db_session(self, tmp_path):
        db_path = tmp_path / "faq.db"
        init_database(db_path)
        session = get_session(db_path)
        yield session
        session.close()

    def test_create_and_read(self, db_session):
        db_session.add(FAQ(question="How do I pay?", answer="Online."))
        db_session.commit()

        row = db_session.query(FAQ).filter_by(question="How do I pay?").first()
        assert row is not None
        assert row.answer == "Online."
        assert row.created_at is not None
        assert row.to_candidate() == Candidate(question="How do I pay?", answer="Online.")

    def test_answer_required(self, db_session):
        db_session.add(FAQ(question="No answer?"))
        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_question_unique(self, db_session):
        db_session.add(FAQ(question="Dup?", answer="1"))
        db_session.commit()
        db_session.add(FAQ(question="Dup?", answer="2"))
        with pytest.raises(IntegrityError):
            db_session.commit()


class TestUpsertAndLoad:
    """Test importing candidates and reading them back."""

    def test_load_preserves_insertion_order(self, tmp_path, candidates):
        db_path = tmp_path / "faq.db"
        upsert_candidates(db_path, candidates)
        assert load_candidates_from_db(db_path) == candidates

    def test_upsert_counts(self, tmp_path, candidates):
        db_path = tmp_path / "faq.db"
        assert upsert_candidates(db_path, candidates) == {"new": 3, "updated": 0, "no-change": 0}

        changed = [Candidate(question=candidates[0].question, answer="Changed.")] + candidates[1:]
        assert upsert_candidates(db_path, changed) == {"new": 0, "updated": 1, "no-change": 2}
        assert load_candidates_from_db(db_path)[0].answer == "Changed."

    def test_upsert_is_idempotent(self, tmp_path, candidates):
        db_path = tmp_path / "faq.db"
        upsert_candidates(db_path, candidates)
        upsert_candidates(db_path, candidates)
        assert len(load_candidates_from_db(db_path)) == 3

    def test_repeated_question_in_one_batch(self, tmp_path):
        db_path = tmp_path / "faq.db"
        batch = [Candidate(question="Q?", answer="first"), Candidate(question="Q?", answer="second")]
        assert upsert_candidates(db_path, batch) == {"new": 1, "updated": 1, "no-change": 0}
        assert load_candidates_from_db(db_path) == [Candidate(question="Q?", answer="second")]


class TestLoadMissingDatabase:
    """Test reading from a database that was never created."""

    def test_missing_file_raises_without_creating_it(self, tmp_path):
        db_path = tmp_path / "missing.db"
        with pytest.raises(ValueError, match="not found"):
            load_candidates_from_db(db_path)
        assert not db_path.exists()
