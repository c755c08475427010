"""Concurrency-safe aggregate of per-application check results."""

import threading

from .exceptions import UnregisteredApplicationError
from .markers import MarkerFn, ToEmoji, as_marker_fn
from .models import AggregateSnapshot, AppResults, CheckResult, CheckState, worst_state
from .rendering import ReportFormat, render_report
from .utils.logging import get_logger
from .utils.tracing import traced

logger = get_logger(__name__)


class ResultAggregate:
    """Collects check results for every application in one validation run.

    Producers on any thread register applications and record results; a
    consumer asks for the worst state or builds the report. All mutation and
    all reads of the shared map and suppression set happen under one lock.
    Rendering works on a snapshot copied under the lock, so the marker
    collaborator is never called while the lock is held.

    Suppressed applications are tombstoned rather than deleted: their
    registrations and results are ignored from the moment they are
    suppressed, and they never appear in the worst state or the report.
    """

    def __init__(
        self,
        name: str,
        check_id: int,
        note_id: int,
        marker: ToEmoji | MarkerFn,
    ) -> None:
        """Initialize the aggregate.

        Args:
            name: Display name of the run (e.g. "owner/repo")
            check_id: Identifier of the check run used by the delivery side
            note_id: Identifier of the comment/note used by the delivery side
            marker: State-to-marker collaborator used when rendering
        """
        self.name = name
        self.check_id = check_id
        self.note_id = note_id
        self._marker = as_marker_fn(marker)

        self._apps: dict[str, AppResults] = {}
        self._suppressed: set[str] = set()
        self._footer = ""
        self._lock = threading.Lock()

    @traced("AddNewApp")
    def register_application(self, name: str) -> None:
        """Give ``name`` an empty result set.

        Calling this again for the same application discards results
        recorded so far. Ignored for suppressed applications.
        """
        with self._lock:
            if name in self._suppressed:
                return
            self._apps[name] = AppResults()

        logger.debug("app_registered", application=name, run=self.name)

    @traced("AddToAppMessage")
    def record_result(self, name: str, result: CheckResult) -> None:
        """Append ``result`` to the results of ``name``.

        Ignored for suppressed applications.

        Raises:
            UnregisteredApplicationError: If ``name`` was never registered
        """
        with self._lock:
            if name in self._suppressed:
                return
            app_results = self._apps.get(name)
            if app_results is None:
                raise UnregisteredApplicationError(name)
            app_results.add_check_result(result)

        logger.debug(
            "result_recorded",
            application=name,
            state=result.state.bare_string(),
            summary=result.summary,
        )

    def suppress(self, name: str) -> None:
        """Permanently exclude ``name`` from the worst state and the report."""
        with self._lock:
            self._suppressed.add(name)

        logger.info("app_suppressed", application=name, run=self.name)

    def is_suppressed(self, name: str) -> bool:
        with self._lock:
            return name in self._suppressed

    def applications(self) -> list[str]:
        """Sorted names of registered, non-suppressed applications."""
        return self.snapshot().visible_applications()

    def worst_state(self) -> CheckState:
        """Most severe state over all results of non-suppressed applications."""
        with self._lock:
            return worst_state(
                *(
                    app_results.worst_state()
                    for name, app_results in self._apps.items()
                    if name not in self._suppressed
                )
            )

    def snapshot(self) -> AggregateSnapshot:
        """Copy the current content for lock-free reading."""
        with self._lock:
            return AggregateSnapshot(
                apps={name: app.results for name, app in self._apps.items()},
                suppressed=frozenset(self._suppressed),
            )

    @property
    def footer(self) -> str:
        return self._footer

    def set_footer(self, footer: str) -> None:
        """Store a pre-built footer appended by ``build_comment``."""
        self._footer = footer

    @traced("buildComment")
    def build_comment(self, report_format: ReportFormat | None = None) -> str:
        """Render the current content of the aggregate into report text."""
        snapshot = self.snapshot()
        return render_report(
            snapshot, self._marker, report_format=report_format, footer=self._footer
        )

    def __repr__(self) -> str:
        return (
            f"ResultAggregate(name={self.name!r}, check_id={self.check_id}, "
            f"note_id={self.note_id})"
        )
