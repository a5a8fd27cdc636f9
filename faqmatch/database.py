"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for the FAQ table.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List

from sqlalchemy import create_engine, Column, Integer, Text, DateTime
from sqlalchemy.orm import declarative_base, sessionmaker

from .matcher import Candidate

Base = declarative_base()


class FAQ(Base):
    """Stored question/answer pair."""

    __tablename__ = "faq"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question = Column(Text, nullable=False, unique=True)
    answer = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    def to_candidate(self) -> Candidate:
        return Candidate(question=self.question, answer=self.answer or "")


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


def load_candidates_from_db(db_path: Path) -> List[Candidate]:
    """All FAQ rows as Candidates, in insertion order.

    Raises:
        ValueError: If the database file does not exist
    """
    if not db_path.exists():
        raise ValueError(f"Knowledge base database not found: {db_path}")
    session = get_session(db_path)
    try:
        return [row.to_candidate() for row in session.query(FAQ).order_by(FAQ.id).all()]
    finally:
        session.close()


def upsert_candidates(db_path: Path, candidates: Iterable[Candidate]) -> Dict[str, int]:
    """
    Insert new questions and update changed answers.

    Args:
        db_path: Path to SQLite database file (created if missing)
        candidates: Entries to store, keyed by exact question text

    Returns:
        Counts for "new", "updated" and "no-change"
    """
    init_database(db_path)
    session = get_session(db_path)
    counts = {"new": 0, "updated": 0, "no-change": 0}
    try:
        for candidate in candidates:
            row = session.query(FAQ).filter_by(question=candidate.question).first()
            if row is None:
                session.add(FAQ(question=candidate.question, answer=candidate.answer))
                # Flush so a repeated question later in the batch finds this row.
                session.flush()
                counts["new"] += 1
            elif row.answer != candidate.answer:
                row.answer = candidate.answer
                counts["updated"] += 1
            else:
                counts["no-change"] += 1
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
    return counts
