"""Fixtures for the browser scenarios.

Run with ``pytest tests/e2e``. The session is bootstrapped from
``config.json`` in the root directory (or ``E2E_CONFIG_FILE``) before any
scenario is collected.
"""

from collections.abc import Iterator, Mapping
from typing import Any

import pytest
from playwright.sync_api import Browser, Page

from e2e_acceptance.bootstrap import ACTION_TIMEOUT_MS, bootstrap_session
from e2e_acceptance.config import config_from_environment
from e2e_acceptance.models.config import E2EConfig
from e2e_acceptance.pages import (
    LoginPage,
    NavigationMenu,
    ProfilePage,
    ReportsPage,
    UserSpec,
    UsersPage,
)
from e2e_acceptance.steplog import StepLog

ROLE_USERS: Mapping[str, str] = {
    "allreports": "REPORT_READ_ALL",
    "physician_all_fields": "REPORT_READ_PHYSICIAN-ALL-FIELDS",
}


def pytest_configure(config: pytest.Config) -> None:
    bootstrap_session(config)


@pytest.fixture(scope="session")
def e2e_config() -> E2EConfig:
    """Settings propagated by the bootstrap, as seen from this process."""
    return config_from_environment()


@pytest.fixture(scope="session")
def steps(e2e_config: E2EConfig) -> Iterator[StepLog]:
    """Diagnostic step log shared by every scenario."""
    step_log = StepLog.open(e2e_config.log_file)
    yield step_log
    step_log.close()


@pytest.fixture(autouse=True)
def _action_timeout(page: Page) -> None:
    page.set_default_timeout(ACTION_TIMEOUT_MS)


@pytest.fixture
def login_page(page: Page, steps: StepLog) -> LoginPage:
    return LoginPage(page=page, steps=steps)


@pytest.fixture
def menu(page: Page, steps: StepLog) -> NavigationMenu:
    return NavigationMenu(page=page, steps=steps)


@pytest.fixture
def reports_page(page: Page) -> ReportsPage:
    return ReportsPage(page=page)


@pytest.fixture
def profile_page(page: Page, steps: StepLog) -> ProfilePage:
    return ProfilePage(page=page, steps=steps)


@pytest.fixture(scope="module")
def role_users(
    browser: Browser,
    browser_context_args: dict[str, Any],
    e2e_config: E2EConfig,
    steps: StepLog,
) -> Mapping[str, UserSpec]:
    """Create or update the role-restricted users as the administrator.

    Uses its own browser context so the scenarios start signed out.
    """
    users = {
        name: UserSpec.for_context(name, role, e2e_config.unique_context)
        for name, role in ROLE_USERS.items()
    }
    password = e2e_config.password.get_secret_value()

    context = browser.new_context(**browser_context_args)
    try:
        page = context.new_page()
        page.set_default_timeout(ACTION_TIMEOUT_MS)

        login = LoginPage(page=page, steps=steps)
        login.open()
        login.login(e2e_config.user, password)
        NavigationMenu(page=page, steps=steps).open("Users")

        users_page = UsersPage(page=page, steps=steps)
        for user in users.values():
            users_page.create_or_update_user(user, password)
    finally:
        context.close()

    return users
