"""Test suite for Command-Line Interface."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from pydantic import ValidationError
from spell_aligner.cli import cli
from spell_aligner.config import get_settings

FIXTURE_DICTIONARY = Path(__file__).parent / "fixtures" / "dictionary.txt"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run each test without SPELL_* variables or a stray .env, with a fresh settings cache."""
    for name in [
        "SPELL_DICTIONARY_PATH",
        "SPELL_MAX_SUGGESTIONS",
        "SPELL_DISTANCE_THRESHOLD",
        "SPELL_COST_MODEL",
        "SPELL_MAX_WORD_LENGTH",
        "SPELL_WORKERS",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def runner():
    return CliRunner()


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_cli_shows_help(self, runner):
        """Test that the group help lists the commands."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "suggest" in result.output
        assert "check" in result.output
        assert "distance" in result.output

    def test_suggest_help_lists_policy_options(self, runner):
        """Test that suggest exposes the policy options."""
        result = runner.invoke(cli, ["suggest", "--help"])

        assert result.exit_code == 0
        for option in ["--dictionary", "--max", "--threshold", "--cost-model", "--workers"]:
            assert option in result.output


class TestSuggestCommand:
    """Tests for the suggest command."""

    def test_suggest_prints_ranked_suggestions(self, runner):
        """Test that suggestions are printed for a misspelled word."""
        result = runner.invoke(cli, ["suggest", "speling", "-d", str(FIXTURE_DICTIONARY)])

        assert result.exit_code == 0
        assert "spewing" in result.output
        assert "spelling" in result.output

    def test_suggest_respects_max(self, runner):
        """Test that --max limits the number of suggestions."""
        result = runner.invoke(
            cli, ["suggest", "speling", "-d", str(FIXTURE_DICTIONARY), "-n", "1"]
        )

        assert result.exit_code == 0
        assert "spewing" in result.output
        assert "spelling" not in result.output

    def test_suggest_correct_word_skips_suggestions(self, runner):
        """Test that a dictionary word is reported as correct."""
        result = runner.invoke(cli, ["suggest", "Apple", "-d", str(FIXTURE_DICTIONARY)])

        assert result.exit_code == 0
        assert "spelled correctly" in result.output

    def test_suggest_threshold_can_exclude_everything(self, runner):
        """Test the message when no word is within the threshold."""
        result = runner.invoke(
            cli, ["suggest", "zzzzzz", "-d", str(FIXTURE_DICTIONARY), "-t", "0"]
        )

        assert result.exit_code == 0
        assert "No suggestions found" in result.output

    def test_suggest_uses_configured_dictionary(self, runner, monkeypatch):
        """Test that SPELL_DICTIONARY_PATH is used when -d is not given."""
        monkeypatch.setenv("SPELL_DICTIONARY_PATH", str(FIXTURE_DICTIONARY))

        result = runner.invoke(cli, ["suggest", "speling"])

        assert result.exit_code == 0
        assert "spewing" in result.output

    def test_suggest_missing_dictionary(self, runner, tmp_path):
        """Test that a missing dictionary aborts with an error."""
        result = runner.invoke(cli, ["suggest", "word", "-d", str(tmp_path / "missing.txt")])

        assert result.exit_code != 0
        assert "Failed to load dictionary" in result.output

    def test_suggest_invalid_dictionary(self, runner, tmp_path):
        """Test that a malformed dictionary aborts with an error."""
        bad = tmp_path / "bad.txt"
        bad.write_text("apple\nbanana123\n")

        result = runner.invoke(cli, ["suggest", "word", "-d", str(bad)])

        assert result.exit_code != 0
        assert "Invalid word format" in result.output

    def test_suggest_empty_dictionary_warns(self, runner, tmp_path):
        """Test that an empty dictionary produces a warning and no suggestions."""
        empty = tmp_path / "empty.txt"
        empty.write_text("\n\n")

        result = runner.invoke(cli, ["suggest", "word", "-d", str(empty)])

        assert result.exit_code == 0
        assert "Dictionary is empty" in result.output
        assert "No suggestions found" in result.output

    def test_suggest_verbose_enables_debug_logging(self, runner):
        """Test that --verbose switches on debug logging."""
        result = runner.invoke(
            cli, ["suggest", "speling", "-d", str(FIXTURE_DICTIONARY), "--verbose"]
        )

        assert result.exit_code == 0
        assert "Debug logging enabled" in result.output

    @pytest.mark.parametrize("query", ["[/x]", "[bold]cat", "c[at]"])
    def test_suggest_prints_bracketed_query_literally(self, runner, query):
        """Test that markup-like brackets in the query are printed, not interpreted."""
        result = runner.invoke(cli, ["suggest", query, "-d", str(FIXTURE_DICTIONARY)])

        assert result.exit_code == 0, result.output
        assert query in result.output

    def test_suggest_bracketed_query_with_no_suggestions(self, runner):
        """Test the no-suggestions message with a bracketed query."""
        result = runner.invoke(
            cli, ["suggest", "[/zz]", "-d", str(FIXTURE_DICTIONARY), "-t", "0"]
        )

        assert result.exit_code == 0, result.output
        assert 'No suggestions found for "[/zz]"' in result.output

    def test_suggest_invalid_configuration(self, runner):
        """Test that invalid settings abort with a readable message."""
        with patch("spell_aligner.cli.get_settings") as mock_settings:
            mock_settings.side_effect = ValidationError.from_exception_data(
                "Settings validation error",
                [{"type": "missing", "loc": ("dictionary_path",), "input": None}],
            )
            result = runner.invoke(cli, ["suggest", "word"])

        assert result.exit_code != 0
        assert "Invalid configuration" in result.output


class TestCheckCommand:
    """Tests for the check command."""

    def test_check_reports_misspelled_words(self, runner):
        """Test that misspelled words are listed with suggestions."""
        result = runner.invoke(
            cli, ["check", "The cta sat on the mta", "-d", str(FIXTURE_DICTIONARY)]
        )

        assert result.exit_code == 0
        assert "cta" in result.output
        assert "mta" in result.output
        assert "misspelled" in result.output

    def test_check_all_words_correct(self, runner):
        """Test the success message when every word is known."""
        result = runner.invoke(cli, ["check", "The cat sat", "-d", str(FIXTURE_DICTIONARY)])

        assert result.exit_code == 0
        assert "Perfect" in result.output

    def test_check_reads_text_file(self, runner, tmp_path):
        """Test that --file supplies the text to check."""
        text_file = tmp_path / "essay.txt"
        text_file.write_text("the speling\n")

        result = runner.invoke(
            cli, ["check", "--file", str(text_file), "-d", str(FIXTURE_DICTIONARY)]
        )

        assert result.exit_code == 0
        assert "speling" in result.output

    def test_check_rejects_non_utf8_file(self, runner, tmp_path):
        """Test that an undecodable --file aborts with an error instead of a traceback."""
        text_file = tmp_path / "latin1.txt"
        text_file.write_bytes(b"caat \xff\xfe\n")

        result = runner.invoke(
            cli, ["check", "--file", str(text_file), "-d", str(FIXTURE_DICTIONARY)]
        )

        assert result.exit_code != 0
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "File encoding error" in result.output

    def test_check_requires_text(self, runner):
        """Test that check aborts when there is nothing to check."""
        result = runner.invoke(cli, ["check", "-d", str(FIXTURE_DICTIONARY)])

        assert result.exit_code != 0
        assert "Provide TEXT or --file" in result.output


class TestDistanceCommand:
    """Tests for the distance command."""

    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (["cat", "cats"], "2"),
            (["a", "b"], "3"),
            (["CAT", "cot"], "1"),
            (["cat", "act", "--cost-model", "unit"], "2"),
        ],
    )
    def test_distance_prints_score(self, runner, args, expected):
        """Test that the alignment distance is printed."""
        result = runner.invoke(cli, ["distance", *args])

        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_distance_bounds_word_length(self, runner, monkeypatch):
        """Test that SPELL_MAX_WORD_LENGTH truncates the words before aligning."""
        monkeypatch.setenv("SPELL_MAX_WORD_LENGTH", "3")

        result = runner.invoke(cli, ["distance", "catxyz", "cat"])

        assert result.exit_code == 0
        assert result.output.strip().splitlines()[-1] == "0"

    def test_distance_rejects_unknown_cost_model(self, runner):
        """Test that an unknown cost model is a usage error."""
        result = runner.invoke(cli, ["distance", "a", "b", "--cost-model", "phonetic"])

        assert result.exit_code != 0
