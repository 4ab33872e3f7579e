"""Pytest plugin collecting test outcomes into per-file JSON reports."""

import logging
import re
from collections.abc import Generator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeAlias

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from pluggy import Result

from e2e_acceptance.errors import ReportWriteError
from e2e_acceptance.models.outcome import OutcomeStatus, TestOutcome
from e2e_acceptance.report import DEFAULT_REPORT_DIR, ReportArtifact

log = logging.getLogger(__name__)

# CSI sequences used for colored console output: ESC [ params final-letter
ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[JKmsu]")

TIMED_OUT_ATTR = "e2e_timed_out"

Location: TypeAlias = tuple[str, int | None, str]


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences from ``text``.

    Substitution repeats until nothing matches, so sequences that only form
    once an inner one is removed are stripped as well.
    """
    while (stripped := ANSI_ESCAPE.sub("", text)) != text:
        text = stripped
    return text


def outcome_status(reports: Sequence[pytest.TestReport]) -> OutcomeStatus:
    """Derive one attempt's status from its phase reports.

    A failure in any phase wins over a skip. Failures caused by a Playwright
    timeout are reported as ``timedOut``.
    """
    failed = [r for r in reports if r.outcome in {"failed", "rerun"}]
    if failed:
        if any(getattr(r, TIMED_OUT_ATTR, False) for r in failed):
            return "timedOut"
        return "failed"
    if any(r.skipped for r in reports):
        return "skipped"
    return "passed"


def error_message(reports: Sequence[pytest.TestReport]) -> str | None:
    """Return the cleaned crash message of the first failing phase, if any."""
    for report in reports:
        if report.outcome not in {"failed", "rerun"}:
            continue
        crash = getattr(report.longrepr, "reprcrash", None)
        message = crash.message if crash is not None else report.longreprtext
        return strip_ansi(message)
    return None


class TimeoutTagger:
    """Marks reports whose failure is a Playwright timeout.

    Registered in every process that runs tests, xdist workers included, so
    the mark travels with the serialized report to the process that writes
    the artifacts.
    """

    @pytest.hookimpl(hookwrapper=True)
    def pytest_runtest_makereport(
        self, item: pytest.Item, call: pytest.CallInfo[None]
    ) -> Generator[None, Result[pytest.TestReport], None]:
        outcome = yield
        report = outcome.get_result()
        if call.excinfo is not None and call.excinfo.errisinstance(
            PlaywrightTimeoutError
        ):
            setattr(report, TIMED_OUT_ATTR, True)


@dataclass(kw_only=True)
class JSONReporter:
    """Aggregates outcomes per source file and writes them at session end.

    Buffers are keyed by the source file reported when each test begins, so
    one instance can serve any number of files. Tests within a file are
    expected to run sequentially; outcomes keep completion order.
    """

    output_dir: Path = DEFAULT_REPORT_DIR
    _buffers: dict[str, list[TestOutcome]] = field(
        default_factory=dict, init=False, repr=False
    )
    _sources: dict[str, str] = field(default_factory=dict, init=False, repr=False)
    _phases: dict[str, list[pytest.TestReport]] = field(
        default_factory=dict, init=False, repr=False
    )
    _attempts: dict[str, int] = field(default_factory=dict, init=False, repr=False)
    _written: list[Path] = field(default_factory=list, init=False, repr=False)

    def pytest_runtest_logstart(self, nodeid: str, location: Location) -> None:
        """Start tracking the source file of a test that is about to run."""
        source = location[0]
        self._sources[nodeid] = source
        if source not in self._buffers:
            log.debug("Tracking outcomes for %s", source)
            self._buffers[source] = []

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        """Collect phase reports; a rerun report closes the current attempt."""
        if report.outcome == "rerun":
            phases = [*self._phases.pop(report.nodeid, []), report]
            self._finish_attempt(report.nodeid, phases, report.location)
            return
        self._phases.setdefault(report.nodeid, []).append(report)

    def pytest_runtest_logfinish(self, nodeid: str, location: Location) -> None:
        """Build the outcome record once every phase of a test has reported."""
        phases = self._phases.pop(nodeid, [])
        if phases:
            self._finish_attempt(nodeid, phases, location)

    @pytest.hookimpl(trylast=True)
    def pytest_sessionfinish(self, session: pytest.Session) -> None:
        """Flush all buffered outcomes at the end of the run."""
        self._written = list(self.flush())

    def pytest_terminal_summary(
        self, terminalreporter: pytest.TerminalReporter
    ) -> None:
        """List the artifacts written for this run."""
        if not self._written:
            return
        terminalreporter.write_sep("-", "json report")
        for path in self._written:
            terminalreporter.write_line(f"Consolidated report generated for: {path}")

    def flush(self) -> Sequence[Path]:
        """Write one artifact per tracked source file and clear the buffers.

        Write errors are logged and never raised: report generation must not
        change the outcome of the run it reports on.

        Returns:
            Paths of the artifacts that were written

        """
        if not self._buffers:
            log.warning("No tests were run or test file path was not captured")
            return []

        written: list[Path] = []
        for source, outcomes in self._buffers.items():
            artifact = ReportArtifact(
                test_file_name=Path(source).stem, outcomes=tuple(outcomes)
            )
            try:
                path = artifact.write(self.output_dir)
            except ReportWriteError as e:
                log.error("%s", e)
                continue
            log.info("Consolidated report generated for: %s", path)
            written.append(path)

        self._buffers.clear()
        return written

    def _finish_attempt(
        self,
        nodeid: str,
        reports: Sequence[pytest.TestReport],
        location: Location,
    ) -> None:
        source = self._sources.get(nodeid)
        if source is None:
            log.error("Test file path not set for %s", nodeid)
            return

        attempt = self._attempts.get(nodeid, 0) + 1
        self._attempts[nodeid] = attempt

        outcome = TestOutcome(
            title=location[2],
            status=outcome_status(reports),
            error=error_message(reports),
            duration=round(sum(r.duration for r in reports) * 1000),
            test_file_name=Path(source).stem,
            attempt=attempt,
        )
        self._buffers.setdefault(source, []).append(outcome)
        log.debug(
            "Test completed: %s status=%s attempt=%d",
            outcome.title,
            outcome.status,
            attempt,
        )
