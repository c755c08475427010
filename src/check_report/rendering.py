"""Render an aggregate snapshot into a markdown report.

The report is a title line followed by one collapsible ``<details>`` section
per visible application, in ordinal name order. Each section nests one
collapsible block per check result, in the order the results were recorded.
Output depends only on the snapshot content, never on the order in which
concurrent producers delivered their results.
"""

from dataclasses import dataclass

from .markers import UNKNOWN_MARKER, MarkerFn
from .models import AggregateSnapshot, CheckResult, CheckState, worst_state
from .utils.logging import get_logger

logger = get_logger(__name__)

# Surrounded by blank lines so markdown reads it as a horizontal rule rather
# than a setext heading underline.
RESULT_SEPARATOR = "\n\n---\n\n"

DEFAULT_TITLE = "Kubechecks Report"
DEFAULT_SECTION_HEADING = "ArgoCD Application Checks"


@dataclass(frozen=True)
class ReportFormat:
    """Fixed text pieces of the report."""

    title: str = DEFAULT_TITLE
    section_heading: str = DEFAULT_SECTION_HEADING


def _safe_marker(marker: MarkerFn, state: CheckState) -> str:
    try:
        return str(marker(state))
    except Exception as e:
        logger.warning(
            "marker_lookup_failed",
            state=getattr(state, "name", repr(state)),
            error=str(e),
            error_type=type(e).__name__,
        )
        return UNKNOWN_MARKER


def _render_check(result: CheckResult, marker: MarkerFn) -> str:
    if result.state == CheckState.NONE:
        summary = result.summary
    else:
        summary = f"{result.summary} {result.state.bare_string()} {_safe_marker(marker, result.state)}"

    return f"<details>\n<summary>{summary}</summary>\n\n{result.details}\n</details>"


def _render_application(
    name: str,
    results: tuple[CheckResult, ...],
    marker: MarkerFn,
    report_format: ReportFormat,
) -> str:
    app_state = worst_state(*(result.state for result in results))
    blocks = [_render_check(result, marker) for result in results]

    return (
        "<details>\n"
        "<summary>\n\n"
        f"## {report_format.section_heading}: `{name}` {_safe_marker(marker, app_state)}\n"
        "</summary>\n\n"
        f"{RESULT_SEPARATOR.join(blocks)}"
        "</details>"
    )


def render_report(
    snapshot: AggregateSnapshot,
    marker: MarkerFn,
    report_format: ReportFormat | None = None,
    footer: str = "",
) -> str:
    """Build the report text for a snapshot.

    Args:
        snapshot: Aggregate content copied under the aggregate's lock
        marker: Maps a check state to a short visual marker
        report_format: Title and section heading to use
        footer: Pre-built footer appended verbatim

    Returns:
        The markdown report
    """
    report_format = report_format or ReportFormat()

    parts = [f"# {report_format.title}\n"]
    for name in snapshot.visible_applications():
        parts.append(
            _render_application(name, snapshot.apps[name], marker, report_format)
        )
    parts.append(footer)

    return "".join(parts)
