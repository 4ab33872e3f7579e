"""Session bootstrap wiring configuration and reporting into pytest.

Called once from the scenario suite's ``pytest_configure``: it loads the
configuration, broadcasts it through the process environment (inherited by
any worker spawned afterwards), points the browser context's base URL at the
application and registers the JSON reporter, plus a timeout tagger in every
process that runs tests.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import pytest
from playwright.sync_api import expect

from e2e_acceptance.config import (
    CONFIG_PATH_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    load_config,
    propagate_environment,
)
from e2e_acceptance.errors import ConfigMissingError
from e2e_acceptance.models.config import E2EConfig
from e2e_acceptance.report import DEFAULT_REPORT_DIR
from e2e_acceptance.reporter import JSONReporter, TimeoutTagger

log = logging.getLogger(__name__)

REPORTER_PLUGIN_NAME = "e2e-json-reporter"
TIMEOUT_TAGGER_PLUGIN_NAME = "e2e-timeout-tagger"

EXPECT_TIMEOUT_MS = 10_000
ACTION_TIMEOUT_MS = 30_000

# pytest-playwright option -> capture mode applied while the option is "off"
CAPTURE_POLICY: Mapping[str, str] = {
    "video": "retain-on-failure",
    "screenshot": "only-on-failure",
}


def resolve_config_path(
    rootpath: Path, environ: Mapping[str, str] = os.environ
) -> Path:
    """Return the config file location, honoring the E2E_CONFIG_FILE override."""
    if override := environ.get(CONFIG_PATH_ENV_VAR):
        return Path(override)
    return rootpath / DEFAULT_CONFIG_PATH


def bootstrap_session(
    config: pytest.Config, config_path: Path | None = None
) -> E2EConfig:
    """Load configuration and prepare the session before any scenario runs.

    Args:
        config: The pytest configuration of the current session
        config_path: Explicit config file, defaults to ``<rootdir>/config.json``

    Returns:
        The loaded configuration record

    Raises:
        pytest.UsageError: If the configuration is missing or incomplete, which
            halts the whole run

    """
    path = config_path or resolve_config_path(config.rootpath)
    try:
        e2e_config = load_config(path)
    except ConfigMissingError as e:
        raise pytest.UsageError(str(e)) from e

    propagate_environment(e2e_config)
    apply_browser_options(config, e2e_config)
    register_timeout_tagger(config)

    # xdist workers forward their reports to the controller, which owns the
    # reporter
    if not hasattr(config, "workerinput"):
        register_reporter(config)

    return e2e_config


def apply_browser_options(config: pytest.Config, e2e_config: E2EConfig) -> None:
    """Apply base URL, capture policy and assertion timeout defaults."""
    option = config.option
    if not getattr(option, "base_url", None):
        option.base_url = e2e_config.app_url
        log.info("Using base URL %s", e2e_config.app_url)

    for name, mode in CAPTURE_POLICY.items():
        if getattr(option, name, "off") == "off":
            setattr(option, name, mode)

    expect.set_options(timeout=EXPECT_TIMEOUT_MS)


def register_timeout_tagger(config: pytest.Config) -> TimeoutTagger:
    """Register the timeout tagger once per process."""
    existing = config.pluginmanager.get_plugin(TIMEOUT_TAGGER_PLUGIN_NAME)
    if existing is not None:
        return existing

    tagger = TimeoutTagger()
    config.pluginmanager.register(tagger, TIMEOUT_TAGGER_PLUGIN_NAME)
    return tagger


def register_reporter(config: pytest.Config) -> JSONReporter:
    """Register the JSON reporter once per session."""
    existing = config.pluginmanager.get_plugin(REPORTER_PLUGIN_NAME)
    if existing is not None:
        return existing

    reporter = JSONReporter(output_dir=config.rootpath / DEFAULT_REPORT_DIR)
    config.pluginmanager.register(reporter, REPORTER_PLUGIN_NAME)
    return reporter
