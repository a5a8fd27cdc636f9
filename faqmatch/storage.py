import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from .logger import get_logger
from .matcher import Candidate
from .schema import entries_of


def candidates_from_entries(entries: Iterable[Any], origin: str = "") -> List[Candidate]:
    """Coerce raw entries to Candidates, skipping ones without a usable question."""
    logger = get_logger()
    candidates = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or not isinstance(entry.get("question"), str) or not entry["question"].strip():
            logger.warning("Skipping FAQ entry without a question", origin=origin, index=i)
            continue
        answer = entry.get("answer")
        candidates.append(Candidate(question=entry["question"], answer=answer if isinstance(answer, str) else ""))
    return candidates


def load_candidates(path: Path) -> List[Candidate]:
    """Read a JSON knowledge base. A missing or blank file is an empty knowledge base.

    Raises:
        ValueError: If the file is not valid JSON or not a list of entries
    """
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8") as f:
        content = f.read().strip()
    if not content:
        return []
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Knowledge base is not valid JSON: {path} ({e})")
    return candidates_from_entries(entries_of(data), origin=str(path))


def save_candidates(path: Path, candidates: Iterable[Candidate]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump({"faqs": [c.to_dict() for c in candidates]}, f, indent=2, ensure_ascii=False)


def merge_candidates(existing: List[Candidate], incoming: Iterable[Candidate]) -> Tuple[List[Candidate], Dict[str, int]]:
    """Merge by exact question text: new questions are appended, changed answers replaced.

    Existing order is preserved so earlier entries keep winning ties.
    """
    merged = list(existing)
    index = {c.question: i for i, c in enumerate(merged)}
    counts = {"new": 0, "updated": 0, "no-change": 0}
    for candidate in incoming:
        pos = index.get(candidate.question)
        if pos is None:
            index[candidate.question] = len(merged)
            merged.append(candidate)
            counts["new"] += 1
        elif merged[pos].answer != candidate.answer:
            merged[pos] = candidate
            counts["updated"] += 1
        else:
            counts["no-change"] += 1
    return merged, counts
