"""Status line appended below the rendered report."""

from __future__ import annotations

import socket
from datetime import datetime

from pydantic import BaseModel, ConfigDict

UNKNOWN_BUILD = "unknown"


class RunMetadata(BaseModel):
    """Process facts shown in the debug footer.

    Read once at process start and passed around explicitly.
    """

    model_config = ConfigDict(frozen=True)

    hostname: str = ""
    build_commit: str = UNKNOWN_BUILD

    @classmethod
    def from_environment(cls, build_commit: str = UNKNOWN_BUILD) -> RunMetadata:
        return cls(hostname=socket.gethostname(), build_commit=build_commit)


def _format_fraction(value: int, scale: int) -> str:
    whole, frac = divmod(value, scale)
    if not frac:
        return str(whole)
    digits = len(str(scale)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(seconds: float) -> str:
    """Format a duration the way Go prints ``time.Duration`` values.

    Examples: ``0s``, ``850ms``, ``12.5s``, ``1m2.25s``, ``1h0m5s``.
    """
    nanos = round(seconds * 1_000_000_000)
    if nanos == 0:
        return "0s"

    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_format_fraction(nanos, 1_000)}µs"
    if nanos < 1_000_000_000:
        return f"{sign}{_format_fraction(nanos, 1_000_000)}ms"

    hours, remainder = divmod(nanos, 3_600_000_000_000)
    minutes, secs = divmod(remainder, 60_000_000_000)
    text = f"{_format_fraction(secs, 1_000_000_000)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return f"{sign}{text}"


def build_footer(
    metadata: RunMetadata,
    start: datetime,
    commit_sha: str,
    label_filter: str = "",
    show_debug_info: bool = False,
    now: datetime | None = None,
) -> str:
    """Build the footer line for a finished run.

    Args:
        metadata: Hostname and build identifier of this process
        start: When the run started
        commit_sha: Commit the checks ran against
        label_filter: Environment label filter, shown in debug mode when set
        show_debug_info: Include pod, duration and build details
        now: Current time, defaults to ``datetime.now()`` in ``start``'s timezone

    Returns:
        Footer text including its trailing newline
    """
    if not show_debug_info:
        return f"<small>_Done. CommitSHA: {commit_sha}_<small>\n"

    env_str = f", Env: {label_filter}" if label_filter else ""
    now = now or datetime.now(tz=start.tzinfo)
    duration = format_duration((now - start).total_seconds())

    return (
        f"<small>_Done: Pod: {metadata.hostname}, Dur: {duration}, "
        f"SHA: {metadata.build_commit}{env_str}_<small>\n"
    )
