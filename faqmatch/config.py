"""
Matching settings and environment-driven configuration.

Tunables are passed explicitly to the engine as a ``MatchSettings`` value;
nothing in the scoring path reads the environment on its own.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .env import load_env
from .normalize import MIN_KEYWORD_LENGTH

DEFAULT_THRESHOLD = 70.0
DEFAULT_TOKEN_THRESHOLD = 80.0
DEFAULT_STRING_WEIGHT = 0.4
DEFAULT_KEYWORD_WEIGHT = 0.6


@dataclass(frozen=True)
class MatchSettings:
    """Scoring knobs for the matching engine.

    Attributes:
        threshold: Minimum combined score (exclusive) for a match to be returned
        token_threshold: Minimum similarity (exclusive) for two keywords to count as equal
        string_weight: Weight of the whole-string similarity in the combined score
        keyword_weight: Weight of the keyword overlap in the combined score
        min_keyword_length: Tokens this short or shorter are not keywords
    """

    threshold: float = DEFAULT_THRESHOLD
    token_threshold: float = DEFAULT_TOKEN_THRESHOLD
    string_weight: float = DEFAULT_STRING_WEIGHT
    keyword_weight: float = DEFAULT_KEYWORD_WEIGHT
    min_keyword_length: int = MIN_KEYWORD_LENGTH


DEFAULT_SETTINGS = MatchSettings()


@dataclass(frozen=True)
class SourceSettings:
    """Where the knowledge base comes from."""

    store_path: Optional[Path] = None
    db_path: Optional[Path] = None
    rest_url: Optional[str] = None
    rest_key: Optional[str] = None
    rest_table: str = "faq"


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}")


def load_settings() -> MatchSettings:
    """Build MatchSettings from FAQMATCH_* environment variables (and .env)."""
    load_env()
    return MatchSettings(
        threshold=_env_number("FAQMATCH_THRESHOLD", DEFAULT_SETTINGS.threshold, float),
        token_threshold=_env_number("FAQMATCH_TOKEN_THRESHOLD", DEFAULT_SETTINGS.token_threshold, float),
        string_weight=_env_number("FAQMATCH_STRING_WEIGHT", DEFAULT_SETTINGS.string_weight, float),
        keyword_weight=_env_number("FAQMATCH_KEYWORD_WEIGHT", DEFAULT_SETTINGS.keyword_weight, float),
        min_keyword_length=_env_number("FAQMATCH_MIN_KEYWORD_LENGTH", DEFAULT_SETTINGS.min_keyword_length, int),
    )


def load_source_settings() -> SourceSettings:
    load_env()
    store = os.getenv("FAQMATCH_STORE")
    db = os.getenv("FAQMATCH_DB")
    return SourceSettings(
        store_path=Path(store) if store else None,
        db_path=Path(db) if db else None,
        rest_url=os.getenv("FAQMATCH_REST_URL") or None,
        rest_key=os.getenv("FAQMATCH_REST_KEY") or None,
        rest_table=os.getenv("FAQMATCH_REST_TABLE") or "faq",
    )
