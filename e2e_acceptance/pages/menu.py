"""Side navigation menu page object."""

from dataclasses import dataclass

from playwright.sync_api import Locator, Page

from e2e_acceptance.steplog import StepLog

MENU_ITEM = 'div.q-item__section:has-text("{label}")'


@dataclass(frozen=True, kw_only=True)
class NavigationMenu:
    """Menu entries shown once a user is signed in."""

    page: Page
    steps: StepLog

    def item(self, label: str) -> Locator:
        return self.page.locator(MENU_ITEM.format(label=label))

    def open(self, label: str) -> None:
        """Wait for a menu entry to appear, then click it."""
        self.steps.step("Waiting for %s menu item and clicking it", label)
        selector = MENU_ITEM.format(label=label)
        self.page.wait_for_selector(selector, state="visible")
        self.page.click(selector)

    def logoff(self) -> None:
        self.open("Logoff")
