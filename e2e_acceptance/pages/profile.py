"""Profile form page object."""

from dataclasses import dataclass
from pathlib import Path

from playwright.sync_api import Locator, Page

from e2e_acceptance.pages.common import (
    EMAIL_INPUT,
    FIRST_NAME_INPUT,
    LAST_NAME_INPUT,
    wait_for_spinner,
)
from e2e_acceptance.steplog import StepLog

FILE_INPUT = 'input[type="file"]'
SAVE_BUTTON = 'button:has-text("Save")'


@dataclass(frozen=True, kw_only=True)
class ProfilePage:
    """The signed-in user's own profile form."""

    page: Page
    steps: StepLog

    @property
    def email(self) -> Locator:
        return self.page.locator(EMAIL_INPUT)

    @property
    def first_name(self) -> Locator:
        return self.page.locator(FIRST_NAME_INPUT)

    @property
    def last_name(self) -> Locator:
        return self.page.locator(LAST_NAME_INPUT)

    def wait_until_loaded(self) -> None:
        self.steps.step("Waiting for profile loading spinner to disappear")
        wait_for_spinner(self.page)

    def update_names(self, first_name: str, last_name: str) -> None:
        self.steps.step("Updating Profile information")
        self.page.fill(FIRST_NAME_INPUT, first_name)
        self.page.fill(LAST_NAME_INPUT, last_name)

    def upload_avatar(self, path: Path) -> None:
        self.steps.step("Uploading file %s", path.name)
        self.page.set_input_files(FILE_INPUT, path)

    def save(self) -> None:
        """Submit the form and wait for the save round-trip."""
        self.page.click(SAVE_BUTTON)
        wait_for_spinner(self.page)

    def reload(self) -> None:
        self.steps.step("Refreshing page")
        self.page.reload()
        wait_for_spinner(self.page)
