"""Tests for the click command line interface."""

from pathlib import Path

from click.testing import CliRunner

from justdrift import __version__
from justdrift.cli import main


def test_version() -> None:
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_search_prints_sequence_and_notes() -> None:
    result = CliRunner().invoke(main, ["search", "--half-steps", "7", "--freq-scale", "1.0"])
    assert result.exit_code == 0, result.output
    assert "Half step satisfying sequence:" in result.output
    assert "Downscaling (1, 2, -2)" in result.output
    assert "Upscaling (-2, 3, -1)" in result.output
    assert "Found sequence:" in result.output
    assert "List of notes that correspond to the interval sequence:" in result.output
    assert "C3" in result.output


def test_search_split_lists_both_instruments() -> None:
    result = CliRunner().invoke(main, ["search", "--half-steps", "4", "--split"])
    assert result.exit_code == 0, result.output
    assert "Instrument 1:" in result.output
    assert "Instrument 2:" in result.output


def test_search_writes_midi(tmp_path: Path) -> None:
    out = tmp_path / "drift.mid"
    result = CliRunner().invoke(
        main, ["search", "--half-steps", "5", "--freq-scale", "1.01", "--midi", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert out.read_bytes().startswith(b"MThd")


def test_search_rejects_non_positive_scale() -> None:
    result = CliRunner().invoke(main, ["search", "--freq-scale", "0"])
    assert result.exit_code == 1


def test_search_rejects_unknown_note() -> None:
    result = CliRunner().invoke(main, ["search", "--starting-note", "H"])
    assert result.exit_code == 1


def test_search_reports_convergence_failure() -> None:
    result = CliRunner().invoke(
        main, ["search", "--freq-scale", "1.01", "--max-iterations", "0"]
    )
    assert result.exit_code == 1
    assert "did not converge" in result.output
    assert "Found sequence:" not in result.output


def test_search_negation_exclusion_runs() -> None:
    result = CliRunner().invoke(main, ["search", "--freq-scale", "1.01", "--exclusion", "negation"])
    assert result.exit_code == 0, result.output
    assert "Upscaling (-2, 3, -1)" in result.output


def test_bracket_lists_drift_vectors() -> None:
    result = CliRunner().invoke(main, ["bracket"])
    assert result.exit_code == 0, result.output
    assert "(1, 2, -2)" in result.output
    assert "(-2, 3, -1)" in result.output
    assert "80/81" in result.output


def test_search_reports_direction_counts_and_distance() -> None:
    # Base (1, 0, 0) nets 4 half-steps; unity scale is reached within 2 cents.
    result = CliRunner().invoke(main, ["search", "--half-steps", "4", "--freq-scale-err", "2"])
    assert result.exit_code == 0, result.output
    assert " up, " in result.output
    assert " down)" in result.output
    assert "Keyboard distance:" in result.output


def test_bracket_reports_distance_travelled() -> None:
    result = CliRunner().invoke(main, ["bracket"])
    assert result.exit_code == 0, result.output
    # (1, 2, -2) travels 4 + 5 + 5 + 7 + 7 half steps.
    assert "28 half steps travelled" in result.output
