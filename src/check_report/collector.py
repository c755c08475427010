"""Run check producers in parallel and feed their results into an aggregate.

Each application gets its own producer task on a thread pool. A failure in
one application's producer is logged and reported back, but never stops
the other applications from being collected or rendered.
"""

import os
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from tqdm import tqdm

from .aggregate import ResultAggregate
from .error_codes import ErrorCode
from .exceptions import CheckReportError
from .models import CheckResult
from .utils.logging import get_logger

logger = get_logger(__name__)

CheckProducer = Callable[[], Iterable[CheckResult]]


@dataclass
class CollectionFailure:
    """One application whose results could not be fully collected."""

    application: str
    error: str
    error_type: str
    error_code: str | None = None


@dataclass
class CollectionOutcome:
    """Which applications were collected and which failed."""

    succeeded: list[str] = field(default_factory=list)
    failed: list[CollectionFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class ParallelCollector:
    """Thread-pool runner that records producer output into an aggregate."""

    def __init__(
        self,
        aggregate: ResultAggregate,
        max_workers: int | None = None,
        show_progress: bool = False,
    ) -> None:
        self.aggregate = aggregate
        self.max_workers = max_workers or min(os.cpu_count() or 4, 8)
        self.show_progress = show_progress
        self._executor: ThreadPoolExecutor | None = None

    def __enter__(self) -> "ParallelCollector":
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="check-producer"
        )
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._executor:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _run_producer(self, application: str, producer: CheckProducer) -> int:
        recorded = 0
        for result in producer():
            self.aggregate.record_result(application, result)
            recorded += 1
        return recorded

    def collect(
        self,
        checks: Mapping[str, CheckProducer],
        suppress_when_done: Iterable[str] = (),
    ) -> CollectionOutcome:
        """Register every application, then run all producers in parallel.

        Args:
            checks: Application name -> callable yielding its check results
            suppress_when_done: Applications to suppress after collection

        Returns:
            Per-application collection outcome, in sorted name order
        """
        if not self._executor:
            msg = "ParallelCollector must be used as context manager"
            raise RuntimeError(msg)

        for application in checks:
            self.aggregate.register_application(application)

        futures: dict[str, Future[int]] = {
            application: self._executor.submit(self._run_producer, application, producer)
            for application, producer in checks.items()
        }

        outcome = CollectionOutcome()
        pbar = None
        if self.show_progress and len(futures) > 1:
            pbar = tqdm(total=len(futures), desc="Collecting checks", unit="app")

        for application in sorted(futures):
            try:
                recorded = futures[application].result()
            except CheckReportError as e:
                logger.error("app_collection_failed", application=application, **e.to_dict())
                outcome.failed.append(
                    CollectionFailure(application, e.message, type(e).__name__, e.error_code)
                )
            except Exception as e:
                logger.exception(
                    "app_producer_failed",
                    application=application,
                    error=str(e),
                    error_type=type(e).__name__,
                    error_code=ErrorCode.AGG_PRODUCER_FAILED.value,
                )
                outcome.failed.append(
                    CollectionFailure(
                        application,
                        str(e),
                        type(e).__name__,
                        ErrorCode.AGG_PRODUCER_FAILED.value,
                    )
                )
            else:
                logger.debug("app_collected", application=application, results=recorded)
                outcome.succeeded.append(application)
            if pbar is not None:
                pbar.update(1)

        if pbar is not None:
            pbar.close()

        for application in suppress_when_done:
            self.aggregate.suppress(application)

        return outcome


def collect_results(
    aggregate: ResultAggregate,
    checks: Mapping[str, CheckProducer],
    suppress_when_done: Iterable[str] = (),
    max_workers: int | None = None,
    show_progress: bool = False,
) -> CollectionOutcome:
    """Convenience wrapper running a ``ParallelCollector`` once."""
    with ParallelCollector(
        aggregate, max_workers=max_workers, show_progress=show_progress
    ) as collector:
        return collector.collect(checks, suppress_when_done=suppress_when_done)
