import re
from typing import List

# Anything that is neither a word character nor whitespace; re is Unicode-aware on str.
_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

MIN_KEYWORD_LENGTH = 2


def normalize_text(text: str) -> str:
    if not text:
        return ""
    text = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def extract_keywords(text: str, min_length: int = MIN_KEYWORD_LENGTH) -> List[str]:
    """Tokens of the normalized text longer than ``min_length`` characters.

    Order and duplicates are kept. The length cut drops short words such as
    "is", "a" and "to" without needing a stop-word list.
    """
    return [word for word in normalize_text(text).split(" ") if len(word) > min_length]
