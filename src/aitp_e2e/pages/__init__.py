"""
Page Object Model classes for the AITP E2E suite.

These classes provide reusable locators and actions for the pages of the
application. Pages compose shared components (the sidebar) instead of
inheriting from one another.
"""

from .base_page import BasePage
from .chat_page import ChatPage
from .profile_page import ProfilePage
from .sidebar_component import SidebarComponent
from .signin_page import SigninPage, is_signin_url
from .stratsync_dashboard_page import StratsyncDashboardPage

__all__ = [
    "BasePage",
    "ChatPage",
    "ProfilePage",
    "SidebarComponent",
    "SigninPage",
    "StratsyncDashboardPage",
    "is_signin_url",
]
