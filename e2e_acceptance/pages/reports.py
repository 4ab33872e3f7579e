"""Reports list page object."""

from dataclasses import dataclass

from playwright.sync_api import Locator, Page

from e2e_acceptance.pages.common import wait_for_spinner


@dataclass(frozen=True, kw_only=True)
class ReportsPage:
    page: Page

    def wait_until_loaded(self) -> None:
        wait_for_spinner(self.page)

    def cell(self, text: str) -> Locator:
        """Locate a table cell containing ``text``."""
        return self.page.locator(f'td:has-text("{text}")')
