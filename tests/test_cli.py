"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from linnaeus.cli import main


@pytest.fixture
def runner(clean_env) -> CliRunner:
    return CliRunner()


def _json(result) -> dict:
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestClassifyCommand:

    def test_rich_output(self, runner, corpus_file):
        result = runner.invoke(
            main, ["classify", "--corpus", str(corpus_file), "--skip-stemming", "ball game ball"]
        )
        assert result.exit_code == 0, result.output
        assert "sports" in result.output

    def test_json_output(self, runner, corpus_file):
        data = _json(runner.invoke(main, [
            "classify", "--corpus", str(corpus_file), "--skip-stemming", "-o", "json",
            "ball game ball",
        ]))
        assert data["category"] == "sports"
        assert data["word_counts"] == {"ball": 2, "game": 1}
        assert list(data["scores"]) == ["sports", "politics"]

    def test_strict_unknown(self, runner, corpus_file):
        data = _json(runner.invoke(main, [
            "classify", "--corpus", str(corpus_file), "--strict", "--skip-stemming",
            "-o", "json", "xylophone quasar",
        ]))
        assert data["category"] == "unknown"
        assert data["only_matched_words"] is True

    def test_reads_file(self, runner, corpus_file, tmp_path):
        doc = tmp_path / "doc.txt"
        doc.write_text("vote law vote", encoding="utf-8")
        data = _json(runner.invoke(main, [
            "classify", "--corpus", str(corpus_file), "--skip-stemming", "-o", "json",
            "--file", str(doc),
        ]))
        assert data["category"] == "politics"

    def test_reads_stdin(self, runner, corpus_file):
        data = _json(runner.invoke(
            main,
            ["classify", "--corpus", str(corpus_file), "--skip-stemming", "-o", "json"],
            input="vote law",
        ))
        assert data["category"] == "politics"

    def test_file_decoded_with_configured_encoding(self, runner, corpus_file, clean_env, tmp_path):
        clean_env.setenv("LINNAEUS_ENCODING", "latin-1")
        doc = tmp_path / "latin1.txt"
        doc.write_bytes("café ball game".encode("latin-1"))
        data = _json(runner.invoke(main, [
            "classify", "--corpus", str(corpus_file), "--skip-stemming", "-o", "json",
            "--file", str(doc),
        ]))
        assert data["category"] == "sports"
        assert data["word_counts"] == {"ball": 1, "café": 1, "game": 1}

    def test_undecodable_file_is_replaced_not_fatal(self, runner, corpus_file, tmp_path):
        doc = tmp_path / "bad.txt"
        doc.write_bytes(b"\xff\xfe\x00ball")
        data = _json(runner.invoke(main, [
            "classify", "--corpus", str(corpus_file), "--skip-stemming", "-o", "json",
            "--file", str(doc),
        ]))
        assert data["category"] == "sports"
        assert data["word_counts"] == {"ball": 1}

    def test_stdin_decoded_with_configured_encoding(self, runner, clean_env):
        clean_env.setenv("LINNAEUS_ENCODING", "latin-1")
        data = _json(runner.invoke(
            main, ["tokens", "--skip-stemming", "-o", "json"], input="naïve ball".encode("latin-1")
        ))
        assert data == {"naïve": 1, "ball": 1}

    def test_empty_memory_backend(self, runner):
        data = _json(runner.invoke(main, ["classify", "--backend", "memory", "-o", "json", "ball"]))
        assert data["category"] == ""
        assert data["scores"] == {}

    def test_missing_corpus_reports_error(self, runner, tmp_path):
        result = runner.invoke(main, ["classify", "--corpus", str(tmp_path / "nope.json"), "ball"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_env_configured_backend(self, runner, corpus_file, clean_env):
        clean_env.setenv("LINNAEUS_BACKEND", "json")
        clean_env.setenv("LINNAEUS_CORPUS_PATH", str(corpus_file))
        clean_env.setenv("LINNAEUS_SKIP_STEMMING", "true")
        data = _json(runner.invoke(main, ["classify", "-o", "json", "ball"]))
        assert data["category"] == "sports"


class TestScoresCommand:

    def test_json_scores_ranked(self, runner, corpus_file):
        data = _json(runner.invoke(main, [
            "scores", "--corpus", str(corpus_file), "--skip-stemming", "-o", "json", "vote",
        ]))
        assert list(data) == ["politics", "sports"]

    def test_rich_table(self, runner, corpus_file):
        result = runner.invoke(main, [
            "scores", "--corpus", str(corpus_file), "--skip-stemming", "ball",
        ])
        assert result.exit_code == 0, result.output
        assert "sports" in result.output
        assert "politics" in result.output


class TestTokensCommand:

    def test_json_counts(self, runner):
        data = _json(runner.invoke(
            main, ["tokens", "--skip-stemming", "-o", "json"], input="The ball, the game. Ball!"
        ))
        assert data == {"ball": 2, "game": 1}

    def test_stemming(self, runner):
        data = _json(runner.invoke(main, ["tokens", "-o", "json", "games running"]))
        assert data == {"game": 1, "run": 1}

    def test_custom_stopwords(self, runner, tmp_path):
        stop = tmp_path / "stop.txt"
        stop.write_text("ball\n", encoding="utf-8")
        data = _json(runner.invoke(main, [
            "tokens", "--skip-stemming", "--stopwords", str(stop), "-o", "json", "the ball game",
        ]))
        assert data == {"the": 1, "game": 1}
