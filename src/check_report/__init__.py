"""Aggregate per-application check results into a pull request report.

Typical use::

    aggregate = ResultAggregate("owner/repo", check_id, note_id, EmojiMarker())
    aggregate.register_application("my-app")
    aggregate.record_result("my-app", CheckResult(state=CheckState.SUCCESS, summary="Schema"))
    comment = aggregate.build_comment()
"""

from .aggregate import ResultAggregate
from .collector import CollectionFailure, CollectionOutcome, ParallelCollector, collect_results
from .exceptions import (
    CheckReportError,
    ConfigurationError,
    ResultsFileError,
    UnregisteredApplicationError,
)
from .footer import RunMetadata, build_footer
from .markers import UNKNOWN_MARKER, EmojiMarker, ToEmoji, emoji_for_state
from .models import AggregateSnapshot, AppResults, CheckResult, CheckState, worst_state
from .rendering import ReportFormat, render_report

__version__ = "0.1.0"

__all__ = [
    # Models
    "CheckState",
    "CheckResult",
    "AppResults",
    "AggregateSnapshot",
    "worst_state",
    # Aggregation
    "ResultAggregate",
    "ParallelCollector",
    "CollectionOutcome",
    "CollectionFailure",
    "collect_results",
    # Rendering
    "ReportFormat",
    "render_report",
    "ToEmoji",
    "EmojiMarker",
    "emoji_for_state",
    "UNKNOWN_MARKER",
    "RunMetadata",
    "build_footer",
    # Errors
    "CheckReportError",
    "ConfigurationError",
    "ResultsFileError",
    "UnregisteredApplicationError",
]
