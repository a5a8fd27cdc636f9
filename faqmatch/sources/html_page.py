from typing import List
import re

from bs4 import BeautifulSoup

from ..matcher import Candidate
from .common import fetch_with_error_handling

_HEADINGS = ["h2", "h3", "h4", "h5"]
_ANSWER_TAGS = {"p", "ul", "ol", "div"}


def _text(el) -> str:
    return re.sub(r"\s+", " ", el.get_text(" ", strip=True)).strip()


def _from_details(soup) -> List[Candidate]:
    pairs = []
    for details in soup.find_all("details"):
        summary = details.find("summary")
        if summary is None:
            continue
        question = _text(summary)
        summary.extract()
        answer = _text(details)
        if question:
            pairs.append(Candidate(question=question, answer=answer))
    return pairs


def _from_definition_lists(soup) -> List[Candidate]:
    pairs = []
    for dt in soup.find_all("dt"):
        dd = dt.find_next_sibling("dd")
        question = _text(dt)
        if question and dd is not None:
            pairs.append(Candidate(question=question, answer=_text(dd)))
    return pairs


def _from_headings(soup) -> List[Candidate]:
    # Only headings phrased as questions; section titles are skipped.
    pairs = []
    for heading in soup.find_all(_HEADINGS):
        question = _text(heading)
        if not question.endswith("?"):
            continue
        parts = []
        for sib in heading.find_next_siblings():
            if sib.name in _HEADINGS:
                break
            if sib.name in _ANSWER_TAGS:
                parts.append(_text(sib))
        answer = " ".join(p for p in parts if p)
        if answer:
            pairs.append(Candidate(question=question, answer=answer))
    return pairs


def parse_faq_html(html: str) -> List[Candidate]:
    """Extract question/answer pairs from an FAQ page.

    Tries, in order, <details>/<summary> accordions, <dt>/<dd> definition
    lists and question-shaped headings followed by paragraphs; the first
    structure that yields pairs wins. Duplicate questions keep their first answer.
    """
    soup = BeautifulSoup(html, "html.parser")
    for strategy in (_from_details, _from_definition_lists, _from_headings):
        pairs = strategy(soup)
        if pairs:
            break
    else:
        return []

    seen = set()
    result = []
    for c in pairs:
        if c.question not in seen:
            seen.add(c.question)
            result.append(c)
    return result


def fetch_faq_page(url: str) -> List[Candidate]:
    """Download an FAQ page and parse it. Raises ValueError on fetch errors."""
    resp = fetch_with_error_handling(url, "html")
    return parse_faq_html(resp.text)
