"""Fixtures for integration tests.

These tests run inner pytest sessions through ``pytester``, in-process unless
they need separate worker processes.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from e2e_acceptance.config import CONFIG_PATH_ENV_VAR, PROPAGATED_KEYS
from e2e_acceptance.reporter import JSONReporter, TimeoutTagger

PROJECT_ROOT = Path(__file__).parents[2]

# Inner sessions run in this process; loading pytest-playwright a second time
# nests its per-test assertion scope inside the outer one.
INNER_SESSION_ARGS = ("-p", "no:cacheprovider", "-p", "no:playwright")

BOOTSTRAP_CONFTEST = """
from e2e_acceptance.bootstrap import bootstrap_session


def pytest_configure(config):
    bootstrap_session(config)
"""


@pytest.fixture
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset propagated keys, restoring them after the test."""
    for key in PROPAGATED_KEYS:
        monkeypatch.setenv(key, "stale")
        monkeypatch.delenv(key)
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)


@pytest.fixture
def report_dir(pytester: pytest.Pytester) -> Path:
    """Directory the reporter writes to."""
    return pytester.path / "reports" / "json"


@pytest.fixture
def run_suite(
    pytester: pytest.Pytester, report_dir: Path
) -> Callable[..., pytest.RunResult]:
    """Run an inner session with a fresh reporter registered."""

    def _run(*args: str) -> pytest.RunResult:
        reporter = JSONReporter(output_dir=report_dir)
        return pytester.runpytest(
            *INNER_SESSION_ARGS, *args, plugins=[TimeoutTagger(), reporter]
        )

    return _run


@pytest.fixture
def importable_package(monkeypatch: pytest.MonkeyPatch) -> None:
    """Let subprocess sessions import the package from the source tree."""
    monkeypatch.setenv("PYTHONPATH", str(PROJECT_ROOT))


@pytest.fixture
def bootstrapped_suite(pytester: pytest.Pytester) -> pytest.Pytester:
    """Inner suite whose conftest bootstraps it from config.json."""
    pytester.makeconftest(BOOTSTRAP_CONFTEST)
    return pytester


@pytest.fixture
def run_bootstrapped(
    bootstrapped_suite: pytest.Pytester,
) -> Callable[..., pytest.RunResult]:
    """Run the bootstrapped suite in-process."""

    def _run(*args: str) -> pytest.RunResult:
        return bootstrapped_suite.runpytest(*INNER_SESSION_ARGS, *args)

    return _run
