"""Tests for the check-report CLI."""

import pytest
from typer.testing import CliRunner

from check_report.cli import app
from check_report.utils.logging import configure_logging

runner = CliRunner()

RESULTS = """
applications:
  zeta:
    - state: success
      summary: Schema validation
      details: valid
  alpha:
    - state: warning
      summary: Deprecated APIs
      details: apps/v1beta1 is deprecated
    - state: success
      summary: Policy checks
      details: all policies pass
  legacy:
    - state: panic
      summary: Broken
      details: should never show
suppressed:
  - legacy
"""


@pytest.fixture(autouse=True)
def _restore_logging():
    """Point logging back at the real stderr after CliRunner swapped it."""
    yield
    configure_logging()


@pytest.fixture
def results_file(clean_env):
    path = clean_env / "results.yaml"
    path.write_text(RESULTS, encoding="utf-8")
    return path


class TestRender:
    """Test `check-report render`."""

    def test_prints_report(self, results_file) -> None:
        """Test the report goes to stdout in sorted order without suppressed apps."""
        result = runner.invoke(app, ["render", str(results_file), "--commit-sha", "abc123"])

        assert result.exit_code == 0, result.output
        assert "# Kubechecks Report" in result.stdout
        assert result.stdout.index("`alpha`") < result.stdout.index("`zeta`")
        assert "`legacy`" not in result.stdout
        assert "should never show" not in result.stdout
        assert "<summary>Deprecated APIs Warning :warning:</summary>" in result.stdout
        assert "<small>_Done. CommitSHA: abc123_<small>" in result.stdout

    def test_fail_on_warning(self, results_file) -> None:
        """Test the exit code follows --fail-on."""
        result = runner.invoke(app, ["render", str(results_file), "--fail-on", "warning"])

        assert result.exit_code == 1

    def test_writes_output_file(self, results_file, clean_env) -> None:
        """Test --output writes the report to a file."""
        output = clean_env / "out" / "comment.md"

        result = runner.invoke(
            app,
            ["render", str(results_file), "--output", str(output), "--debug-info", "--label-filter", "prod"],
        )

        assert result.exit_code == 0, result.output
        text = output.read_text(encoding="utf-8")
        assert text.startswith("# Kubechecks Report\n")
        assert "Env: prod_<small>" in text
        assert "<small>_Done: Pod: " in text

    def test_config_file(self, results_file, clean_env) -> None:
        """Test settings from --config are applied."""
        config = clean_env / "report.yaml"
        config.write_text("report_title: Deploy Checks\nfail_on: success\n", encoding="utf-8")

        result = runner.invoke(app, ["render", str(results_file), "--config", str(config)])

        assert result.exit_code == 1
        assert "# Deploy Checks" in result.stdout

    def test_missing_results_file(self, clean_env) -> None:
        """Test a missing results file exits with code 2."""
        result = runner.invoke(app, ["render", str(clean_env / "nope.yaml")])

        assert result.exit_code == 2

    def test_invalid_result_only_fails_its_application(self, clean_env) -> None:
        """Test one unclassified result does not stop the rest of the report."""
        path = clean_env / "partial.yaml"
        path.write_text(
            "applications:\n"
            "  good:\n    - state: success\n      summary: Schema validation\n"
            "  half:\n    - state: unclassified\n      summary: Diff\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["render", str(path), "--log-level", "ERROR"])

        assert result.exit_code == 0, result.output
        assert "## ArgoCD Application Checks: `good` :white_check_mark:" in result.stdout
        assert "<summary>Schema validation Success :white_check_mark:</summary>" in result.stdout
        assert "`half`" in result.stdout
        assert "incomplete" in result.output
        assert "<small>_Done. CommitSHA: _<small>" in result.stdout

    def test_stdout_matches_output_file(self, clean_env) -> None:
        """Test the printed report is byte-identical to the written file."""
        path = clean_env / "tabs.yaml"
        path.write_text(
            'applications:\n  api:\n    - state: warning\n      summary: Diff\n'
            '      details: "col1\\tcol2"\n',
            encoding="utf-8",
        )
        output = clean_env / "comment.md"
        args = ["render", str(path), "--commit-sha", "abc123", "--log-level", "ERROR"]

        written = runner.invoke(app, [*args, "--output", str(output)])
        printed = runner.invoke(app, args)

        assert written.exit_code == 0, written.output
        assert printed.exit_code == 0, printed.output
        file_text = output.read_text(encoding="utf-8")
        assert "col1\tcol2" in file_text
        assert file_text.endswith("_<small>\n")
        assert printed.stdout == file_text

    def test_invalid_fail_on(self, results_file) -> None:
        """Test an unknown --fail-on state is a configuration error."""
        result = runner.invoke(app, ["render", str(results_file), "--fail-on", "meltdown"])

        assert result.exit_code == 2
