"""Tests for the search ranking CLI module."""

import csv
import io
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from massiv_search.cli.search_ranking_cli import (
    EXPLAIN_COLUMNS,
    OUTPUT_COLUMNS,
    build_output_row,
    cli,
    get_output_columns,
    load_search_response,
    parse_args,
    rank_search_results,
)
from massiv_search.logic.models import Artist
from massiv_search.scoring.models import RankedItem
from massiv_search.scoring.scorer import SearchScorer


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def search_response() -> Dict[str, Any]:
    return {
        "artists": [
            {"item_id": "2", "provider": "tidal", "name": "Pink Flyod", "media_type": "artist"},
            {"item_id": "1", "provider": "spotify", "name": "Pink Floyd", "media_type": "artist", "favorite": True},
        ],
        "albums": [],
        "tracks": [
            {
                "item_id": "t1",
                "provider": "spotify",
                "name": "Yesterday",
                "media_type": "track",
                "artists": [{"item_id": "b1", "provider": "spotify", "name": "The Beatles", "media_type": "artist"}],
            }
        ],
    }


@pytest.fixture
def response_file(tmp_path: Path, search_response: Dict[str, Any]) -> Path:
    path = tmp_path / "search.json"
    path.write_text(json.dumps(search_response), encoding="utf-8")
    return path


@pytest.fixture
def no_env_file(tmp_path: Path) -> str:
    path = tmp_path / ".env"
    path.write_text("", encoding="utf-8")
    return str(path)


def _read_csv(text: str) -> list[dict[str, str]]:
    return list(csv.DictReader(io.StringIO(text)))


# ============================================================================
# Helper tests
# ============================================================================


class TestLoadSearchResponse:
    def test_bare_result(self, response_file: Path) -> None:
        results = load_search_response(response_file)
        assert len(results.artists) == 2
        assert len(results.tracks) == 1

    def test_websocket_envelope(self, tmp_path: Path, search_response: Dict[str, Any]) -> None:
        path = tmp_path / "envelope.json"
        path.write_text(json.dumps({"message_id": "42", "result": search_response}), encoding="utf-8")

        assert len(load_search_response(path).artists) == 2

    def test_rejects_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object"):
            load_search_response(path)


class TestOutputColumns:
    def test_plain(self) -> None:
        assert get_output_columns(False) == OUTPUT_COLUMNS

    def test_explain(self) -> None:
        assert get_output_columns(True) == OUTPUT_COLUMNS + EXPLAIN_COLUMNS


class TestBuildOutputRow:
    def test_plain_row(self) -> None:
        ranked = RankedItem(item=Artist(item_id="1", provider="spotify", name="Pink Floyd"), score=100.0, rank=1)
        row = build_output_row(ranked, SearchScorer(), "pink floyd", explain=False)

        assert row == {
            "rank": "1",
            "score": "100.0",
            "name": "Pink Floyd",
            "media_type": "artist",
            "provider": "spotify",
            "item_id": "1",
        }

    def test_explain_row(self) -> None:
        ranked = RankedItem(item=Artist(item_id="1", provider="spotify", name="Pink Floyd"), score=100.0, rank=1)
        row = build_output_row(ranked, SearchScorer(), "pink floyd", explain=True)

        assert row["tier"] == "exact"
        assert json.loads(row["score_breakdown_json"]) == [
            {"component": "primary", "score": 100.0, "details": "Name: exact"}
        ]

    def test_cross_reference_row(self) -> None:
        ranked = RankedItem(
            item=Artist(item_id="b1", provider="spotify", name="The Beatles"),
            score=25.0,
            rank=2,
            cross_referenced=True,
        )
        row = build_output_row(ranked, SearchScorer(), "yesterday beatles", explain=True)

        assert row["tier"] == "cross_reference"

    def test_cross_reference_row_with_equal_own_score(self) -> None:
        # Baseline 20 plus favorite 5 equals the fixed cross-reference score
        artist = Artist(item_id="z1", provider="spotify", name="Zzzz", favorite=True)
        scorer = SearchScorer()
        assert scorer.score_item(artist, "pink floyd") == 25.0

        ranked = RankedItem(item=artist, score=25.0, rank=1, cross_referenced=True)
        row = build_output_row(ranked, scorer, "pink floyd", explain=True)

        assert row["tier"] == "cross_reference"

    def test_direct_row_keeps_its_tier(self) -> None:
        artist = Artist(item_id="z1", provider="spotify", name="Zzzz", favorite=True)
        ranked = RankedItem(item=artist, score=25.0, rank=1)
        row = build_output_row(ranked, SearchScorer(), "pink floyd", explain=True)

        assert row["tier"] == "baseline"


class TestRankSearchResults:
    def test_with_and_without_cross_reference(self, response_file: Path) -> None:
        results = load_search_response(response_file)
        scorer = SearchScorer()

        with_xref = rank_search_results(results, "beatles", scorer, top_n=None, min_score=0.0, cross_reference=True)
        without_xref = rank_search_results(results, "beatles", scorer, top_n=None, min_score=0.0, cross_reference=False)

        assert len(with_xref) == len(without_xref) + 1
        assert "The Beatles" in [r.item.name for r in with_xref]


# ============================================================================
# CLI tests
# ============================================================================


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args(["-i", "in.json", "-q", "pink floyd"])

        assert args.input == "in.json"
        assert args.query == "pink floyd"
        assert args.output is None
        assert args.top_n is None
        assert args.min_score == 0.0
        assert not args.explain
        assert not args.no_cross_reference

    def test_requires_query(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["-i", "in.json"])


class TestCli:
    def test_writes_csv_to_stdout(
        self,
        response_file: Path,
        no_env_file: str,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        cli(["-i", str(response_file), "-q", "pink floyd", "--env-file", no_env_file])

        rows = _read_csv(capsys.readouterr().out)
        assert [row["name"] for row in rows] == ["Pink Floyd", "Pink Flyod", "Yesterday"]
        assert [row["rank"] for row in rows] == ["1", "2", "3"]
        assert rows[0]["score"] == "105.0"

    def test_writes_output_file(self, response_file: Path, no_env_file: str, tmp_path: Path) -> None:
        output = tmp_path / "ranked.csv"
        cli(
            [
                "-i",
                str(response_file),
                "-q",
                "pink floyd",
                "-o",
                str(output),
                "-n",
                "1",
                "--explain",
                "--env-file",
                no_env_file,
            ]
        )

        rows = _read_csv(output.read_text(encoding="utf-8"))
        assert len(rows) == 1
        assert rows[0]["name"] == "Pink Floyd"
        assert rows[0]["tier"] == "exact"

    def test_min_score(self, response_file: Path, no_env_file: str, capsys: pytest.CaptureFixture[str]) -> None:
        cli(["-i", str(response_file), "-q", "pink floyd", "-m", "50", "--env-file", no_env_file])

        rows = _read_csv(capsys.readouterr().out)
        assert [row["name"] for row in rows] == ["Pink Floyd"]

    def test_missing_input(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            cli(["-i", str(tmp_path / "missing.json"), "-q", "x"])

    def test_rejects_non_positive_top_n(self, response_file: Path) -> None:
        with pytest.raises(ValueError, match="--top-n"):
            cli(["-i", str(response_file), "-q", "x", "-n", "0"])
