"""
Pytest configuration and shared fixtures.
"""

import os
import pytest
import json
from pathlib import Path
from typing import Any, Dict, List

from faqmatch.logger import get_logger, reset_logger
from faqmatch.matcher import Candidate


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Fresh global logger per test, writing only to a temp directory."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def faq_entries() -> List[Dict[str, Any]]:
    """Raw knowledge base rows as they arrive from JSON or a REST table."""
    return [
        {"question": "When is the deadline for fee payment?", "answer": "Fees are due by the 15th."},
        {"question": "How do I register for courses?", "answer": "Register through the student portal."},
        {"question": "Where can I check my exam results?", "answer": "Results are published on the portal."},
    ]


@pytest.fixture
def candidates(faq_entries) -> List[Candidate]:
    return [Candidate(question=e["question"], answer=e["answer"]) for e in faq_entries]


@pytest.fixture
def kb_file(tmp_path, faq_entries) -> Path:
    """Knowledge base JSON file in the {"faqs": [...]} shape."""
    path = tmp_path / "faq.json"
    path.write_text(json.dumps({"faqs": faq_entries}, indent=2))
    return path


@pytest.fixture
def sample_faq_html() -> str:
    """FAQ page using <details> accordions."""
    return """
    <html>
    <head><title>Student FAQ</title></head>
    <body>
        <h1>Frequently Asked Questions</h1>
        <details>
            <summary>When is the deadline for fee payment?</summary>
            <p>Fees are due by the 15th of each semester.</p>
        </details>
        <details>
            <summary>How do I register for courses?</summary>
            <p>Use the   student portal.</p>
        </details>
    </body>
    </html>
    """


FAQMATCH_ENV_VARS = [
    "FAQMATCH_THRESHOLD",
    "FAQMATCH_TOKEN_THRESHOLD",
    "FAQMATCH_STRING_WEIGHT",
    "FAQMATCH_KEYWORD_WEIGHT",
    "FAQMATCH_MIN_KEYWORD_LENGTH",
    "FAQMATCH_STORE",
    "FAQMATCH_DB",
    "FAQMATCH_REST_URL",
    "FAQMATCH_REST_KEY",
    "FAQMATCH_REST_TABLE",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No FAQMATCH_* variables and no .env file in the working directory."""
    for name in FAQMATCH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # load_dotenv writes straight to os.environ
    for name in FAQMATCH_ENV_VARS:
        os.environ.pop(name, None)
