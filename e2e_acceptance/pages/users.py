"""User administration page object."""

from dataclasses import dataclass

from playwright.sync_api import Locator, Page

from e2e_acceptance.pages.common import (
    EMAIL_INPUT,
    FIRST_NAME_INPUT,
    LAST_NAME_INPUT,
    PASSWORD_INPUT,
    SSO_CHECKBOX,
    wait_for_spinner,
)
from e2e_acceptance.steplog import StepLog

SEARCH_INPUT = 'input.q-field__native[placeholder="Search"]'
ADD_BUTTON = 'button:has-text("Add")'
EDIT_BUTTON = 'button:has-text("Edit")'
ROLES_SELECT = ".q-select"
ROLES_COMBOBOX = 'input[role="combobox"][aria-label="Roles"]'
SELECTED_ROLES = "div.q-field__native span"
SAVE_BUTTON = 'button span.block:has-text("Save")'

ROLE_SELECT_TIMEOUT_MS = 5_000
ROLE_SELECTED_JS = """(role) => {
    const selected = document.querySelector('div.q-field__native span');
    return selected !== null && selected.innerText.includes(role);
}"""


@dataclass(frozen=True, kw_only=True)
class UserSpec:
    """A user the scenarios create, namespaced by the run's unique context."""

    email: str
    first_name: str
    last_name: str
    role: str

    @classmethod
    def for_context(cls, name: str, role: str, unique_context: str) -> "UserSpec":
        """Build ``e2e+<name>+<context>@sample.com`` with last name ``name``."""
        return cls(
            email=f"e2e+{name}+{unique_context}@sample.com",
            first_name="e2e",
            last_name=name,
            role=role,
        )


@dataclass(frozen=True, kw_only=True)
class UsersPage:
    """Searchable user list with its add/edit form."""

    page: Page
    steps: StepLog

    def row(self, email: str) -> Locator:
        return self.page.locator(f'tr:has-text("{email}")')

    def form_fields(self) -> list[Locator]:
        """Inputs the add/edit form must show."""
        return [
            self.page.locator(EMAIL_INPUT),
            self.page.locator(FIRST_NAME_INPUT),
            self.page.locator(LAST_NAME_INPUT),
            self.page.locator(PASSWORD_INPUT),
            self.page.locator(SSO_CHECKBOX),
            self.page.locator(ROLES_SELECT),
        ]

    def search(self, email: str) -> None:
        self.steps.step("Waiting for search bar to be visible")
        self.page.wait_for_selector(SEARCH_INPUT, state="visible")
        self.page.fill(SEARCH_INPUT, email)
        self.steps.step("Waiting for loading spinner to disappear")
        wait_for_spinner(self.page)

    def open_form(self, email: str) -> None:
        """Open the edit form for an existing user, or the add form."""
        row = self.row(email)
        if row.count() == 0:
            self.steps.step("User not found, clicking Add button")
            self.page.click(ADD_BUTTON)
        else:
            self.steps.step("User found, clicking Edit button")
            row.locator(EDIT_BUTTON).click()

    def wait_for_form(self) -> None:
        self.steps.step("Verifying user form fields are visible")
        for locator in self.form_fields():
            locator.wait_for(state="visible")

    def fill_form(self, user: UserSpec, password: str) -> None:
        """Fill identity fields and a password, with SSO turned off."""
        self.steps.page_snapshot("before roles dropdown", self.page.content())
        self.steps.step("Filling user form fields")
        self.page.fill(EMAIL_INPUT, user.email)
        self.page.fill(FIRST_NAME_INPUT, user.first_name)
        self.page.fill(LAST_NAME_INPUT, user.last_name)

        sso = self.page.locator(SSO_CHECKBOX)
        if sso.get_attribute("aria-checked") == "true":
            sso.click()
        self.page.fill(PASSWORD_INPUT, password)

    def select_role(self, role: str) -> None:
        """Open the Roles dropdown from the keyboard and pick ``role``."""
        self.steps.step("Pressing Tab from Password field to reach roles dropdown")
        self.page.press(PASSWORD_INPUT, "Tab")
        self.steps.step("Pressing Enter to expand roles dropdown")
        self.page.press(ROLES_COMBOBOX, "Enter")
        self.steps.page_snapshot("after roles dropdown expansion", self.page.content())

        self.steps.step("Selecting role %s", role)
        selected = self.page.locator(SELECTED_ROLES).inner_text()
        if role not in selected:
            self.page.locator(f'div[role="option"]:has-text("{role}")').click()
            self.page.wait_for_function(
                ROLE_SELECTED_JS, arg=role, timeout=ROLE_SELECT_TIMEOUT_MS
            )

        self.steps.step("Ensuring dropdown is closed")
        self.page.click("body", force=True)

    def save(self) -> None:
        self.steps.step("Clicking Save button")
        save_button = self.page.locator(SAVE_BUTTON)
        save_button.wait_for(state="visible")
        save_button.click()
        wait_for_spinner(self.page)

    def create_or_update_user(self, user: UserSpec, password: str) -> None:
        """Create ``user``, or update it when a previous run already did."""
        self.steps.step("Creating user: %s", user.email)
        self.search(user.email)
        self.open_form(user.email)
        self.wait_for_form()
        self.fill_form(user, password)
        self.select_role(user.role)
        self.save()
