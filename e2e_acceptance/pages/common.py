"""Selectors and waits shared by the page objects."""

from playwright.sync_api import Page

SPINNER_SELECTOR = ".blurred-form"
EMAIL_INPUT = 'input[aria-label="Email"]'
PASSWORD_INPUT = 'input[aria-label="Password"]'
FIRST_NAME_INPUT = 'input[aria-label="First Name"]'
LAST_NAME_INPUT = 'input[aria-label="Last Name"]'
SSO_CHECKBOX = ".q-checkbox"


def wait_for_spinner(page: Page) -> None:
    """Block until the loading overlay is hidden."""
    page.wait_for_selector(SPINNER_SELECTOR, state="hidden")
