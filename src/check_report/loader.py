"""Load check results from a YAML or JSON document.

Expected shape::

    applications:
      my-app:
        - state: success
          summary: Schema validation
          details: All manifests are valid
    suppressed:
      - removed-app
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .error_codes import ErrorCode
from .exceptions import ResultsFileError
from .models import CheckResult
from .utils.logging import get_logger

logger = get_logger(__name__)

_RESULT_LIST = TypeAdapter(list[CheckResult])


class ResultsDocument(BaseModel):
    """Check results of one validation run, keyed by application name.

    Entries stay unvalidated until ``results_for`` is called, so one
    application with a malformed result does not hide the others.
    """

    applications: dict[str, list[Any]] = Field(default_factory=dict)
    suppressed: list[str] = Field(default_factory=list)
    source: str = "<string>"

    def results_for(self, application: str) -> list[CheckResult]:
        """Validate and return the check results of ``application``.

        Raises:
            ResultsFileError: If any entry of this application is invalid
        """
        try:
            return _RESULT_LIST.validate_python(self.applications.get(application, []))
        except ValidationError as e:
            raise ResultsFileError(
                f"Invalid results for application {application} in {self.source}: "
                f"{e.error_count()} error(s)",
                suggestion="Each result needs a known state (none, success, running, "
                "warning, failure, error, panic)",
                error_code=ErrorCode.RES_SCHEMA_INVALID.value,
                context={
                    "source": self.source,
                    "application": application,
                    "errors": e.errors(include_url=False),
                },
            ) from e


def parse_results(raw: str, source: str = "<string>", fmt: str = "yaml") -> ResultsDocument:
    """Parse document text.

    Args:
        raw: Document content
        source: Where the content came from, used in error messages
        fmt: "yaml" or "json"

    Raises:
        ResultsFileError: If the content cannot be parsed or has the wrong shape
    """
    try:
        data = json.loads(raw) if fmt == "json" else yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ResultsFileError(
            f"Cannot parse results document {source}: {e}",
            error_code=ErrorCode.RES_PARSE_FAILED.value,
            context={"source": source, "format": fmt},
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ResultsFileError(
            f"Results document {source} must be a mapping, got {type(data).__name__}",
            error_code=ErrorCode.RES_SCHEMA_INVALID.value,
            context={"source": source},
        )

    try:
        return ResultsDocument.model_validate({**data, "source": source})
    except ValidationError as e:
        raise ResultsFileError(
            f"Invalid results document {source}: {e.error_count()} error(s)",
            suggestion="Each application maps to a list of {state, summary, details}",
            error_code=ErrorCode.RES_SCHEMA_INVALID.value,
            context={"source": source, "errors": e.errors(include_url=False)},
        ) from e


def load_results(path: Path) -> ResultsDocument:
    """Read a results document from disk, choosing the format by suffix."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ResultsFileError(
            f"Cannot read results document {path}: {e}",
            error_code=ErrorCode.RES_PARSE_FAILED.value,
            context={"source": str(path)},
        ) from e

    fmt = "json" if path.suffix.lower() == ".json" else "yaml"
    document = parse_results(raw, source=str(path), fmt=fmt)
    logger.info(
        "results_loaded",
        source=str(path),
        applications=len(document.applications),
        suppressed=len(document.suppressed),
    )
    return document
