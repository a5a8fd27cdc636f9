import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import Callable, List

from . import __version__
from .config import load_settings, load_source_settings
from .database import load_candidates_from_db, upsert_candidates
from .matcher import Candidate, rank_candidates
from .responder import SOURCE_ERRORS, answer
from .schema import validate_knowledge_base
from .storage import load_candidates, merge_candidates, save_candidates

DEFAULT_STORE = "data/faq.json"


def resolve_loader(args: argparse.Namespace) -> Callable[[], List[Candidate]]:
    """Pick the knowledge-base source: command-line flags first, then FAQMATCH_* env, then the default store."""
    sources = load_source_settings()
    db = getattr(args, "db", None)
    rest_url = getattr(args, "rest_url", None)
    store = getattr(args, "store", None)

    if not (db or rest_url or store):
        db = sources.db_path
        rest_url = None if db else sources.rest_url
        store = sources.store_path or DEFAULT_STORE

    if db:
        return lambda: load_candidates_from_db(Path(db))
    if rest_url:
        from .sources import rest
        return lambda: rest.fetch_candidates(rest_url, api_key=sources.rest_key, table=sources.rest_table)
    return lambda: load_candidates(Path(store))


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _settings():
    try:
        return load_settings()
    except ValueError as e:
        raise SystemExit(str(e))


def cmd_ask(args: argparse.Namespace) -> None:
    settings = _settings()
    if args.threshold is not None:
        settings = replace(settings, threshold=args.threshold)
    print(answer(args.query, resolve_loader(args), settings))


def cmd_score(args: argparse.Namespace) -> None:
    settings = _settings()
    try:
        candidates = resolve_loader(args)()
    except SOURCE_ERRORS as e:
        raise SystemExit(str(e))
    if not candidates:
        print("Knowledge base is empty.")
        return
    results = rank_candidates(args.query, candidates, limit=args.limit, settings=settings)
    print(f"Top {len(results)} of {len(candidates)} (threshold {settings.threshold:g}):\n")
    for r in results:
        marker = "*" if r.score > settings.threshold else " "
        print(f"{marker} {r.score:6.2f}  {r.candidate.question}")


def cmd_validate(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SystemExit(f"Invalid JSON: {e}")
    errors = validate_knowledge_base(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_import(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    try:
        candidates = load_candidates(input_path)
    except ValueError as e:
        raise SystemExit(str(e))
    counts = upsert_candidates(Path(args.db), candidates)
    print(f"Done. new={counts['new']} updated={counts['updated']} no-change={counts['no-change']}")


def cmd_import_url(args: argparse.Namespace) -> None:
    from .sources import html_page

    try:
        scraped = html_page.fetch_faq_page(args.url)
    except ValueError as e:
        raise SystemExit(str(e))
    if not scraped:
        print("No question/answer pairs found.")
        return
    store_path = Path(args.store)
    try:
        existing = load_candidates(store_path)
    except ValueError as e:
        raise SystemExit(str(e))
    merged, counts = merge_candidates(existing, scraped)
    save_candidates(store_path, merged)
    print(f"Done. new={counts['new']} updated={counts['updated']} no-change={counts['no-change']}")


def cmd_list(args: argparse.Namespace) -> None:
    try:
        candidates = resolve_loader(args)()
    except SOURCE_ERRORS as e:
        raise SystemExit(str(e))
    if not candidates:
        print("No entries in knowledge base.")
        return
    print(f"Found {len(candidates)} entries:\n")
    for i, c in enumerate(candidates, 1):
        print(f"{i}. Q: {c.question}")
        print(f"   A: {c.answer}")
        print()


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--store", help=f"Path to JSON knowledge base (default: $FAQMATCH_STORE or {DEFAULT_STORE})")
    p.add_argument("--db", help="Path to SQLite knowledge base (or set FAQMATCH_DB)")
    p.add_argument("--rest-url", help="Base URL of a hosted REST FAQ table (or set FAQMATCH_REST_URL)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="faqmatch", description="Fuzzy FAQ matching CLI")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    ask = subparsers.add_parser("ask", help="Answer a question from the knowledge base")
    ask.add_argument("query", help="The question to answer")
    ask.add_argument("--threshold", type=float, help="Confidence threshold override (default: $FAQMATCH_THRESHOLD or 70)")
    _add_source_args(ask)
    ask.set_defaults(func=cmd_ask)

    sc = subparsers.add_parser("score", help="Show ranked similarity scores for a question")
    sc.add_argument("query", help="The question to score")
    sc.add_argument("--limit", type=_positive_int, default=5, help="Number of candidates to show (default 5)")
    _add_source_args(sc)
    sc.set_defaults(func=cmd_score)

    val = subparsers.add_parser("validate", help="Validate a JSON knowledge base")
    val.add_argument("--input", required=True, help="Path to knowledge base JSON")
    val.set_defaults(func=cmd_validate)

    imp = subparsers.add_parser("import", help="Load a JSON knowledge base into SQLite")
    imp.add_argument("--input", required=True, help="Path to knowledge base JSON")
    imp.add_argument("--db", default="data/faq.db", help="Path to SQLite database (default: data/faq.db)")
    imp.set_defaults(func=cmd_import)

    impu = subparsers.add_parser("import-url", help="Scrape an FAQ web page into a JSON knowledge base")
    impu.add_argument("--url", required=True, help="FAQ page URL")
    impu.add_argument("--store", default=DEFAULT_STORE, help=f"Path to JSON knowledge base (default: {DEFAULT_STORE})")
    impu.set_defaults(func=cmd_import_url)

    lst = subparsers.add_parser("list", help="List knowledge base entries")
    _add_source_args(lst)
    lst.set_defaults(func=cmd_list)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
