"""Login form page object."""

from dataclasses import dataclass

from playwright.sync_api import Locator, Page

from e2e_acceptance.pages.common import EMAIL_INPUT, PASSWORD_INPUT, SSO_CHECKBOX
from e2e_acceptance.steplog import StepLog

LOGIN_BUTTON = 'button:has-text("Login")'
SSO_CHECKED_CLASS = "q-checkbox--checked"


@dataclass(frozen=True, kw_only=True)
class LoginPage:
    """Email/password login form with its "Use SSO" toggle."""

    page: Page
    steps: StepLog

    @property
    def email(self) -> Locator:
        return self.page.locator(EMAIL_INPUT)

    @property
    def password(self) -> Locator:
        return self.page.locator(PASSWORD_INPUT)

    @property
    def sso_checkbox(self) -> Locator:
        return self.page.locator(SSO_CHECKBOX)

    def error(self, text: str) -> Locator:
        """Locate a validation message with the given text."""
        return self.page.locator(f'.text-negative:has-text("{text}")')

    def open(self, url: str = "/") -> None:
        self.steps.step("Navigating to %s", url)
        self.page.goto(url)

    def submit(self) -> None:
        self.steps.step("Clicking on Login button")
        self.page.click(LOGIN_BUTTON)

    def toggle_sso(self) -> None:
        self.steps.step("Toggling Use SSO checkbox")
        self.sso_checkbox.click()

    def sso_checked(self) -> bool:
        classes = self.sso_checkbox.get_attribute("class") or ""
        return SSO_CHECKED_CLASS in classes.split()

    def fill_email(self, email: str) -> None:
        self.page.fill(EMAIL_INPUT, email)

    def login(self, email: str, password: str) -> None:
        """Sign in with a password, turning SSO off first if needed."""
        self.steps.step("Logging in as %s", email)
        self.fill_email(email)
        if self.sso_checked():
            self.toggle_sso()
        self.page.fill(PASSWORD_INPUT, password)
        self.submit()
