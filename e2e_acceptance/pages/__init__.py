"""Page objects for the application under test."""

from e2e_acceptance.pages.login import LoginPage
from e2e_acceptance.pages.menu import NavigationMenu
from e2e_acceptance.pages.profile import ProfilePage
from e2e_acceptance.pages.reports import ReportsPage
from e2e_acceptance.pages.users import UserSpec, UsersPage

__all__ = [
    "LoginPage",
    "NavigationMenu",
    "ProfilePage",
    "ReportsPage",
    "UserSpec",
    "UsersPage",
]
