"""Tests for the ``deepdive`` Typer CLI (analyze, show-lexicon, validate-config)."""

from __future__ import annotations

import json
import logging

import pytest
from typer.testing import CliRunner

from deepdive.cli import app

runner = CliRunner()

_RECORDS = [
    {
        "title": "Company Releases New Product",
        "url": "https://example.com/neutral",
        "description": "Updates features and announces changes",
    },
    {
        "title": "Company Faces Bankruptcy and Fraud Scandal",
        "url": "https://example.com/negative",
        "description": "Critical security breach exposes customer data",
    },
    {
        "title": "Revolutionary AI Breakthrough Achieves Success",
        "url": "https://example.com/positive",
        "description": "Innovative technology partnership funded by leading investors",
    },
]


@pytest.fixture(autouse=True)
def _restore_root_logger():
    # configure_logging() swaps root handlers onto CliRunner's short-lived streams
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "default.toml"
    path.write_text('[logging]\nlevel = "WARNING"\nlog_file = ""\n', encoding="utf-8")
    return str(path)


@pytest.fixture
def records_file(tmp_path):
    path = tmp_path / "acme.json"
    path.write_text(json.dumps(_RECORDS), encoding="utf-8")
    return str(path)


# ── analyze ───────────────────────────────────────────────────────────────────

class TestAnalyze:
    def test_ascii_report(self, records_file, config_file):
        result = runner.invoke(app, ["analyze", records_file, "--config", config_file])
        assert result.exit_code == 0, result.output
        assert "=== DeepDive Report ===" in result.output
        assert "Query:          acme" in result.output
        assert "1 positive | 1 negative | 1 neutral" in result.output

    def test_json_envelope(self, records_file, config_file):
        result = runner.invoke(
            app, ["analyze", records_file, "--json", "--query", "acme corp", "--config", config_file]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["query"] == "acme corp"
        assert payload["count"] == 3
        assert payload["results"][0]["url"] == "https://example.com/positive"

    def test_provider_payload_shape(self, tmp_path, config_file):
        path = tmp_path / "brave.json"
        path.write_text(json.dumps({"web": {"results": _RECORDS}}), encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path), "--json", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["count"] == 3

    def test_empty_results_list(self, tmp_path, config_file):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"web": {"results": []}}), encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path), "--json", "--config", config_file])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["count"] == 0
        assert payload["report"]["recommendation"] == "No results found for this query."

    @pytest.mark.parametrize(
        "document",
        [
            {},
            {"title": "Fraud scandal", "url": "https://example.com/lone"},
            {"web": [{"title": "x", "url": "https://example.com/x"}]},
            {"web": "results"},
            {"web": {"results": {"title": "x", "url": "https://example.com/x"}}},
        ],
    )
    def test_unrecognised_object_shape_rejected(self, tmp_path, config_file, document):
        path = tmp_path / "odd.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path), "--json", "--config", config_file])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output
        assert not isinstance(result.exception, AttributeError)

    def test_directory_input(self, tmp_path, config_file):
        result = runner.invoke(app, ["analyze", str(tmp_path), "--config", config_file])
        assert result.exit_code == 1
        assert "[ERROR] Input file not found" in result.output

    def test_limit(self, records_file, config_file):
        result = runner.invoke(
            app, ["analyze", records_file, "--json", "--limit", "1", "--config", config_file]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["count"] == 1
        assert payload["results"][0]["url"] == "https://example.com/neutral"

    @pytest.mark.parametrize("limit", ["0", "101"])
    def test_limit_out_of_range(self, records_file, config_file, limit):
        result = runner.invoke(
            app, ["analyze", records_file, "--limit", limit, "--config", config_file]
        )
        assert result.exit_code != 0

    def test_output_and_csv_files(self, tmp_path, records_file, config_file):
        out_json = tmp_path / "out" / "acme.json"
        out_csv = tmp_path / "out" / "acme.csv"
        result = runner.invoke(
            app,
            [
                "analyze", records_file,
                "--output", str(out_json),
                "--csv", str(out_csv),
                "--config", config_file,
            ],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(out_json.read_text(encoding="utf-8"))["count"] == 3
        assert out_csv.read_text(encoding="utf-8").startswith("rank,")

    def test_custom_lexicon(self, tmp_path, records_file, config_file):
        lex = tmp_path / "lex.json"
        lex.write_text(json.dumps({"version": "only-new", "positive": {"high": ["new"]}}), encoding="utf-8")
        result = runner.invoke(
            app, ["analyze", records_file, "--json", "--lexicon", str(lex), "--config", config_file]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["results"][0]["url"] == "https://example.com/neutral"
        assert payload["results"][0]["analysis"]["positiveSignals"] == ["new"]

    def test_missing_input(self, tmp_path, config_file):
        result = runner.invoke(app, ["analyze", str(tmp_path / "nope.json"), "--config", config_file])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_invalid_json_input(self, tmp_path, config_file):
        path = tmp_path / "bad.json"
        path.write_text("not json", encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path), "--config", config_file])
        assert result.exit_code == 1

    def test_malformed_record(self, tmp_path, config_file):
        path = tmp_path / "bad_record.json"
        path.write_text(json.dumps([{"description": "no title"}]), encoding="utf-8")
        result = runner.invoke(app, ["analyze", str(path), "--config", config_file])
        assert result.exit_code == 1
        assert "Malformed" in result.output

    def test_missing_lexicon(self, tmp_path, records_file, config_file):
        result = runner.invoke(
            app,
            ["analyze", records_file, "--lexicon", str(tmp_path / "x.json"), "--config", config_file],
        )
        assert result.exit_code == 1

    def test_directory_lexicon(self, tmp_path, records_file, config_file):
        result = runner.invoke(
            app, ["analyze", records_file, "--lexicon", str(tmp_path), "--config", config_file]
        )
        assert result.exit_code == 1
        assert "[ERROR] Lexicon file not found" in result.output

    def test_stdin(self, config_file):
        result = runner.invoke(
            app, ["analyze", "-", "--json", "--config", config_file], input=json.dumps(_RECORDS)
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["query"] == "stdin"


# ── show-lexicon / validate-config ────────────────────────────────────────────

class TestOtherCommands:
    def test_show_lexicon_default(self, config_file):
        result = runner.invoke(app, ["show-lexicon", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert "[POSITIVE / HIGH]" in result.output
        assert "breakthrough" in result.output

    def test_validate_config(self, config_file):
        result = runner.invoke(app, ["validate-config", "--config", config_file, "--full"])
        assert result.exit_code == 0, result.output
        assert "[OK] Config valid." in result.output
        assert "(built-in)" in result.output

    def test_validate_config_bad_file(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text('[logging]\nlevel = "chatty"\n', encoding="utf-8")
        result = runner.invoke(app, ["validate-config", "--config", str(path)])
        assert result.exit_code == 1
        assert "Config validation failed" in result.output
