"""Check states, check results and per-application result sets."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class CheckState(IntEnum):
    """Severity of a check outcome, ordered from least to most severe.

    ``NONE`` is the neutral element of the worst-state reduction: it never
    overrides another state and is overridden by every other state.
    """

    NONE = 0
    SUCCESS = 1
    RUNNING = 2
    WARNING = 3
    FAILURE = 4
    ERROR = 5
    PANIC = 6

    def bare_string(self) -> str:
        """Return the display name used in report headers, e.g. ``Error``."""
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: Any) -> CheckState:
        """Convert a member, integer value or case-insensitive name to a state.

        Raises:
            ValueError: If the value does not name a known state
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            msg = f"Unknown check state: {value!r}"
            raise ValueError(msg)
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        msg = f"Unknown check state: {value!r}"
        raise ValueError(msg)


def worst_state(*states: CheckState) -> CheckState:
    """Reduce states to the most severe one, seeded at ``CheckState.NONE``."""
    return max(states, default=CheckState.NONE)


class CheckResult(BaseModel):
    """Outcome of a single check. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    state: CheckState = CheckState.NONE
    summary: str = ""
    details: str = ""

    @field_validator("state", mode="before")
    @classmethod
    def _parse_state(cls, value: Any) -> CheckState:
        return CheckState.parse(value)


class AppResults:
    """Append-only, insertion-ordered check results for one application.

    Not thread-safe on its own; instances are only mutated while the owning
    aggregate holds its lock.
    """

    def __init__(self) -> None:
        self._results: list[CheckResult] = []

    def add_check_result(self, result: CheckResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> tuple[CheckResult, ...]:
        return tuple(self._results)

    def worst_state(self) -> CheckState:
        return worst_state(*(result.state for result in self._results))

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self) -> str:
        return f"AppResults(results={len(self._results)}, worst={self.worst_state().bare_string()})"


@dataclass(frozen=True)
class AggregateSnapshot:
    """Point-in-time copy of an aggregate, safe to read without its lock."""

    apps: Mapping[str, tuple[CheckResult, ...]] = field(default_factory=dict)
    suppressed: frozenset[str] = frozenset()

    def visible_applications(self) -> list[str]:
        """Sorted names of applications that are not suppressed."""
        return sorted(name for name in self.apps if name not in self.suppressed)
