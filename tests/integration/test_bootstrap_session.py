"""Tests for bootstrapping a real pytest session from config.json."""

import json
import os
from collections.abc import Callable

import pytest

from e2e_acceptance.config import CONFIG_PATH_ENV_VAR
from e2e_acceptance.testing.factories import write_config

RunFn = Callable[..., pytest.RunResult]

ENVIRONMENT_TEST = """
import os


def test_sees_configuration(base_url):
    assert os.environ["E2E_UNIQUE_CONTEXT"] == "{context}"
    assert base_url == "https://app.test"
"""

TIMEOUT_TEST = """
from playwright.sync_api import TimeoutError


def test_waits():
    raise TimeoutError("Timeout 30000ms exceeded.")
"""


def read_report(pytester: pytest.Pytester, name: str) -> list[dict[str, object]]:
    """Load an artifact written under the inner root directory."""
    path = pytester.path / "test-results" / "json" / f"report-{name}.json"
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.mark.usefixtures("clean_environment")
class TestBootstrapSession:
    """Tests for a bootstrapped session."""

    def test_tests_see_propagated_configuration(
        self, pytester: pytest.Pytester, run_bootstrapped: RunFn
    ) -> None:
        """Exposes config values and the base URL to tests."""
        write_config(pytester.path / "config.json")
        pytester.makepyfile(test_env=ENVIRONMENT_TEST.format(context="ctx1"))

        result = run_bootstrapped()

        result.assert_outcomes(passed=1)
        assert os.environ["E2E_APP_URL"] == "https://app.test"

    def test_writes_report_under_rootdir(
        self, pytester: pytest.Pytester, run_bootstrapped: RunFn
    ) -> None:
        """Registers the reporter writing to test-results/json."""
        write_config(pytester.path / "config.json")
        pytester.makepyfile(test_env=ENVIRONMENT_TEST.format(context="ctx1"))

        run_bootstrapped()

        records = read_report(pytester, "test_env")
        assert [(r["title"], r["status"]) for r in records] == [
            ("test_sees_configuration", "passed")
        ]

    def test_reports_timeout(
        self, pytester: pytest.Pytester, run_bootstrapped: RunFn
    ) -> None:
        """Reports a Playwright timeout as timedOut."""
        write_config(pytester.path / "config.json")
        pytester.makepyfile(test_slow=TIMEOUT_TEST)

        run_bootstrapped()

        (record,) = read_report(pytester, "test_slow")
        assert record["status"] == "timedOut"

    def test_config_file_override(
        self,
        pytester: pytest.Pytester,
        run_bootstrapped: RunFn,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Loads the file named by E2E_CONFIG_FILE."""
        path = write_config(pytester.path / "staging.json", E2E_UNIQUE_CONTEXT="stg")
        monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(path))
        pytester.makepyfile(test_env=ENVIRONMENT_TEST.format(context="stg"))

        result = run_bootstrapped()

        result.assert_outcomes(passed=1)

    def test_missing_config_halts_run(
        self, pytester: pytest.Pytester, run_bootstrapped: RunFn
    ) -> None:
        """Stops before any test runs when config.json is absent."""
        marker = pytester.path / "ran.txt"
        pytester.makepyfile(
            test_env=f"""
            from pathlib import Path


            def test_never_runs():
                Path({str(marker)!r}).write_text("ran")
            """
        )

        result = run_bootstrapped()

        assert result.ret == pytest.ExitCode.USAGE_ERROR
        result.stderr.fnmatch_lines(["*Config file not found*"])
        assert not marker.exists()
        assert "E2E_APP_URL" not in os.environ

    def test_missing_key_halts_run(
        self, pytester: pytest.Pytester, run_bootstrapped: RunFn
    ) -> None:
        """Names the missing key and runs nothing."""
        write_config(pytester.path / "config.json", E2E_PASSWORD=None)
        pytester.makepyfile(test_env="def test_never_runs():\n    pass\n")

        result = run_bootstrapped()

        assert result.ret == pytest.ExitCode.USAGE_ERROR
        result.stderr.fnmatch_lines(["*Missing required configuration*E2E_PASSWORD*"])
        assert not (pytester.path / "test-results").exists()


@pytest.mark.usefixtures("clean_environment", "importable_package")
def test_worker_timeout_reported_as_timed_out(
    bootstrapped_suite: pytest.Pytester,
) -> None:
    """Keeps the timedOut status of a test run in an xdist worker."""
    write_config(bootstrapped_suite.path / "config.json")
    bootstrapped_suite.makepyfile(test_slow=TIMEOUT_TEST)

    result = bootstrapped_suite.runpytest_subprocess("-n", "1", timeout=300)

    result.assert_outcomes(failed=1)
    (record,) = read_report(bootstrapped_suite, "test_slow")
    assert record["status"] == "timedOut"
    assert "Timeout 30000ms exceeded." in record["error"]
