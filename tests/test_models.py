"""Tests for check states, check results and per-application result sets."""

import pytest
from pydantic import ValidationError

from check_report.models import (
    AggregateSnapshot,
    AppResults,
    CheckResult,
    CheckState,
    worst_state,
)


class TestCheckState:
    """Test severity ordering and parsing."""

    def test_order_is_total_and_ascending(self) -> None:
        """Test states are ordered from least to most severe."""
        ordered = [
            CheckState.NONE,
            CheckState.SUCCESS,
            CheckState.RUNNING,
            CheckState.WARNING,
            CheckState.FAILURE,
            CheckState.ERROR,
            CheckState.PANIC,
        ]
        assert sorted(CheckState) == ordered

    @pytest.mark.parametrize(
        ("state", "expected"),
        [
            (CheckState.NONE, "None"),
            (CheckState.SUCCESS, "Success"),
            (CheckState.RUNNING, "Running"),
            (CheckState.WARNING, "Warning"),
            (CheckState.FAILURE, "Failure"),
            (CheckState.ERROR, "Error"),
            (CheckState.PANIC, "Panic"),
        ],
    )
    def test_bare_string(self, state: CheckState, expected: str) -> None:
        """Test display names used in report headers."""
        assert state.bare_string() == expected

    def test_parse_accepts_names_values_and_members(self) -> None:
        """Test parsing from the forms found in config and results files."""
        assert CheckState.parse("error") == CheckState.ERROR
        assert CheckState.parse(" Warning ") == CheckState.WARNING
        assert CheckState.parse(4) == CheckState.FAILURE
        assert CheckState.parse(CheckState.PANIC) is CheckState.PANIC

    @pytest.mark.parametrize("value", ["bogus", 42, None, True, 1.5])
    def test_parse_rejects_unknown(self, value) -> None:
        """Test unknown states raise ValueError."""
        with pytest.raises(ValueError, match="Unknown check state|is not a valid"):
            CheckState.parse(value)


class TestWorstState:
    """Test the monotonic worst-state reduction."""

    def test_empty_is_none(self) -> None:
        """Test reduction of nothing yields the neutral element."""
        assert worst_state() == CheckState.NONE

    def test_none_never_overrides(self) -> None:
        """Test NONE is overridden by everything else."""
        for state in CheckState:
            assert worst_state(CheckState.NONE, state) == state
            assert worst_state(state, CheckState.NONE) == state

    def test_picks_most_severe(self) -> None:
        """Test the most severe state wins regardless of position."""
        states = [CheckState.SUCCESS, CheckState.FAILURE, CheckState.SUCCESS, CheckState.WARNING]
        assert worst_state(*states) == CheckState.FAILURE
        assert worst_state(*reversed(states)) == CheckState.FAILURE


class TestCheckResult:
    """Test the immutable check result value."""

    def test_defaults(self) -> None:
        """Test an empty result has state NONE and empty text."""
        result = CheckResult()
        assert result.state == CheckState.NONE
        assert result.summary == ""
        assert result.details == ""

    def test_state_coerced_from_name(self) -> None:
        """Test state names are accepted at construction."""
        result = CheckResult(state="failure", summary="s", details="d")
        assert result.state == CheckState.FAILURE

    def test_immutable(self) -> None:
        """Test results cannot be changed after creation."""
        result = CheckResult(state=CheckState.SUCCESS, summary="ok")
        with pytest.raises(ValidationError):
            result.summary = "changed"

    def test_undefined_state_rejected(self) -> None:
        """Test an undefined state fails validation."""
        with pytest.raises(ValidationError):
            CheckResult(state="exploded")


class TestAppResults:
    """Test the append-only per-application result set."""

    def test_preserves_insertion_order(self) -> None:
        """Test results come back in the order they were added."""
        app = AppResults()
        first = CheckResult(state=CheckState.ERROR, summary="first")
        second = CheckResult(state=CheckState.SUCCESS, summary="second")
        app.add_check_result(first)
        app.add_check_result(second)

        assert app.results == (first, second)
        assert len(app) == 2

    def test_results_is_a_copy(self) -> None:
        """Test the exposed results cannot mutate the set."""
        app = AppResults()
        app.add_check_result(CheckResult(summary="one"))
        results = app.results
        app.add_check_result(CheckResult(summary="two"))

        assert len(results) == 1
        assert len(app.results) == 2

    def test_worst_state(self) -> None:
        """Test per-application reduction."""
        app = AppResults()
        assert app.worst_state() == CheckState.NONE
        app.add_check_result(CheckResult(state=CheckState.WARNING))
        app.add_check_result(CheckResult(state=CheckState.SUCCESS))
        assert app.worst_state() == CheckState.WARNING


class TestAggregateSnapshot:
    """Test snapshot helpers."""

    def test_visible_applications_sorted_without_suppressed(self) -> None:
        """Test suppressed names are hidden and the rest sorted ordinally."""
        snapshot = AggregateSnapshot(
            apps={"zeta": (), "alpha": (), "Mu": (), "gone": ()},
            suppressed=frozenset({"gone", "never-registered"}),
        )
        assert snapshot.visible_applications() == ["Mu", "alpha", "zeta"]
