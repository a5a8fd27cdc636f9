"""Fetch FAQ rows from a hosted REST table (PostgREST-style, e.g. a Supabase project)."""

from typing import List, Optional

from ..matcher import Candidate
from ..storage import candidates_from_entries
from .common import fetch_with_error_handling


def table_url(base_url: str, table: str = "faq") -> str:
    return f"{base_url.rstrip('/')}/rest/v1/{table}"


def fetch_candidates(base_url: str, api_key: Optional[str] = None, table: str = "faq") -> List[Candidate]:
    """Fetch all question/answer rows from the remote table.

    Raises ValueError with a user-friendly message on HTTP or payload errors.
    """
    url = table_url(base_url, table)
    headers = {"Accept": "application/json"}
    if api_key:
        headers["apikey"] = api_key
        headers["Authorization"] = f"Bearer {api_key}"

    resp = fetch_with_error_handling(url, "rest", headers=headers, params={"select": "question,answer"})
    try:
        rows = resp.json()
    except ValueError:
        raise ValueError(f"rest source returned invalid JSON: {url}")
    if not isinstance(rows, list):
        raise ValueError(f"rest source returned {type(rows).__name__}, expected a list of rows: {url}")
    return candidates_from_entries(rows, origin=url)
