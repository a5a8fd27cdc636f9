from typing import Any, Dict, List

REQUIRED_STR_FIELDS = ["question", "answer"]
MAX_QUESTION_LENGTH = 500


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def validate_entry(data: Any) -> List[str]:
    """
    Returns a list of validation error messages for one FAQ entry.
    Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Entry must be an object with 'question' and 'answer'"]

    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    question = data.get("question")
    if isinstance(question, str) and len(question) > MAX_QUESTION_LENGTH:
        errors.append(f"Field 'question' exceeds max length ({MAX_QUESTION_LENGTH})")

    return errors


def entries_of(data: Any) -> List[Any]:
    """Accept either a bare list of entries or an object holding them under 'faqs'."""
    if isinstance(data, dict):
        data = data.get("faqs", [])
    if not isinstance(data, list):
        raise ValueError("Knowledge base must be a list of entries or an object with a 'faqs' list")
    return data


def validate_knowledge_base(data: Any) -> List[str]:
    """Validate every entry and flag duplicated questions; messages carry the entry index."""
    try:
        entries = entries_of(data)
    except ValueError as e:
        return [str(e)]

    errors: List[str] = []
    seen: Dict[str, int] = {}
    for i, entry in enumerate(entries):
        for err in validate_entry(entry):
            errors.append(f"Entry {i}: {err}")
        if isinstance(entry, dict) and _is_non_empty_str(entry.get("question")):
            key = entry["question"].strip()
            if key in seen:
                errors.append(f"Entry {i}: duplicate question (first seen at entry {seen[key]})")
            else:
                seen[key] = i
    return errors
