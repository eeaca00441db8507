"""
CLI entry point for ranking a saved search response.

This is the imperative shell: it parses arguments, loads the response JSON and
the scoring configuration, ranks the results and writes them out. All scoring
decisions live in `massiv_search.scoring`.
"""

import argparse
import csv
import json
import sys
import time
from pathlib import Path
from typing import Dict, List, TextIO, Tuple

from aletk.utils import get_logger, lginf

from massiv_search.adapters.music_assistant.ma_converter import convert_search_results
from massiv_search.config import load_scoring_config
from massiv_search.logic.models import SearchResults
from massiv_search.scoring.models import RankedItem
from massiv_search.scoring.ranking import rank_items, rank_unified_results
from massiv_search.scoring.scorer import SearchScorer

lgr = get_logger(__file__)


# ============================================================================
# Constants
# ============================================================================

OUTPUT_COLUMNS = [
    "rank",
    "score",
    "media_type",
    "name",
    "provider",
    "item_id",
]

EXPLAIN_COLUMNS = [
    "tier",
    "score_breakdown_json",
]


# ============================================================================
# Helpers
# ============================================================================


def load_search_response(file_path: Path) -> SearchResults:
    """Load a `music/search` response. Accepts the bare result or the WebSocket envelope with a `result` key."""
    with open(file_path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Expected a JSON object in {file_path}, got {type(raw).__name__}")

    payload = raw.get("result", raw)
    if not isinstance(payload, dict):
        raise ValueError(f"Expected the search result in {file_path} to be an object")

    return convert_search_results(payload)


def build_output_row(ranked: RankedItem, scorer: SearchScorer, query: str, explain: bool) -> Dict[str, str]:
    """Build a single output row for a ranked item."""
    row = {key: str(value) for key, value in ranked.to_json_summary().items()}

    if explain:
        breakdown = scorer.score_item_detailed(ranked.item, query)
        row["tier"] = "cross_reference" if ranked.cross_referenced else breakdown.tier.value
        row["score_breakdown_json"] = json.dumps(breakdown.to_json_summary()["score_breakdown"], ensure_ascii=False)

    return row


def get_output_columns(explain: bool) -> List[str]:
    return OUTPUT_COLUMNS + EXPLAIN_COLUMNS if explain else list(OUTPUT_COLUMNS)


def write_rows(out: TextIO, rows: List[Dict[str, str]], columns: List[str]) -> None:
    writer = csv.DictWriter(out, fieldnames=columns)
    writer.writeheader()
    writer.writerows(rows)


def rank_search_results(
    results: SearchResults,
    query: str,
    scorer: SearchScorer,
    top_n: int | None,
    min_score: float,
    cross_reference: bool,
) -> Tuple[RankedItem, ...]:
    if cross_reference:
        return rank_unified_results(query, results, scorer=scorer, top_n=top_n, min_score=min_score)

    return rank_items(results.all_items(), query, scorer=scorer, top_n=top_n, min_score=min_score)


# ============================================================================
# CLI Argument Parsing
# ============================================================================


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Rank the results of a saved Music Assistant search by relevance.")

    parser.add_argument(
        "--input",
        "-i",
        type=str,
        required=True,
        help="JSON file with a music/search response.",
    )

    parser.add_argument(
        "--query",
        "-q",
        type=str,
        required=True,
        help="The search term the response was returned for.",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output CSV file path (default: print to stdout).",
    )

    parser.add_argument(
        "--top-n",
        "-n",
        type=int,
        default=None,
        help="Number of top results to keep (default: all).",
    )

    parser.add_argument(
        "--min-score",
        "-m",
        type=float,
        default=0.0,
        help="Minimum score threshold (default: 0.0).",
    )

    parser.add_argument(
        "--explain",
        action="store_true",
        help="Add the matched tier and the per-component score breakdown.",
    )

    parser.add_argument(
        "--no-cross-reference",
        action="store_true",
        help="Do not add artists credited on returned albums and tracks.",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Path of a .env file with MASSIV_SEARCH_* scoring overrides.",
    )

    return parser.parse_args(argv)


# ============================================================================
# Main CLI Entry Point (Imperative Shell)
# ============================================================================


def cli(argv: List[str] | None = None) -> None:
    """
    Main CLI entry point - the imperative shell.

    This function:
    1. Parses CLI arguments
    2. Loads the scoring configuration (defaults + environment)
    3. Loads and converts the search response
    4. Ranks the results
    5. Writes CSV rows to the output file or stdout
    """
    frame = "cli"
    args = parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    if args.top_n is not None and args.top_n < 1:
        raise ValueError(f"--top-n must be at least 1, got {args.top_n}")

    scorer = SearchScorer(config=load_scoring_config(args.env_file))

    lginf(frame, f"Loading search response from {input_path}...", lgr)
    results = load_search_response(input_path)
    lginf(frame, f"Loaded {len(results.all_items())} results", lgr)

    start = time.perf_counter()
    ranked = rank_search_results(
        results,
        args.query,
        scorer,
        top_n=args.top_n,
        min_score=args.min_score,
        cross_reference=not args.no_cross_reference,
    )
    lginf(frame, f"Ranked {len(ranked)} results for {args.query!r} in {(time.perf_counter() - start) * 1000:.1f}ms", lgr)

    columns = get_output_columns(args.explain)
    rows = [build_output_row(item, scorer, args.query, args.explain) for item in ranked]

    if args.output is None:
        write_rows(sys.stdout, rows, columns)
        return

    output_path = Path(args.output)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        write_rows(f, rows, columns)
    lginf(frame, f"Done. Wrote {len(rows)} rows to {output_path}", lgr)


if __name__ == "__main__":
    cli()
