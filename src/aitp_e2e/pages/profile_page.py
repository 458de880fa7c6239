"""
Profile Page Object: account details, calendar integrations, account deletion.
"""

import re
from typing import Literal

from playwright.async_api import Locator

from .base_page import BasePage

CalendarType = Literal["Microsoft", "Google", "Apple"]


class ProfilePage(BasePage):
    """Page Object for the My Account page."""

    path = "/profile"

    @property
    def heading(self) -> Locator:
        return self.page.get_by_role("heading", name="My Account")

    @property
    def delete_account_button(self) -> Locator:
        return self.page.get_by_role("button", name="Delete Account")

    @property
    def delete_input(self) -> Locator:
        """Confirmation textbox in the delete account dialog."""
        return self.page.get_by_role("textbox", name="Type DELETE to confirm:")

    @property
    def delete_dialog(self) -> Locator:
        return self.page.get_by_role("alertdialog", name="Delete Account")

    @property
    def integrations_header(self) -> Locator:
        return self.page.get_by_text("IntegrationsConnect external")

    def calendar_card(self, name: CalendarType) -> Locator:
        """Integration card of a calendar provider."""
        return self.page.locator(".flex.flex-col.gap-4.rounded-lg").filter(
            has_text=re.compile(f"{name} Calendar")
        )

    def calendar_connect_button(self, name: CalendarType) -> Locator:
        return self.calendar_card(name).get_by_role("button", name="Connect")

    def calendar_status(self, name: CalendarType) -> Locator:
        return self.calendar_card(name).get_by_text(re.compile("connected", re.I))
