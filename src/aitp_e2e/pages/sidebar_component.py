"""
Sidebar component: navigation links, the user settings menu and chat list.

The sidebar is present on every signed-in page, so pages hold an instance
of it instead of inheriting its locators.
"""

import logging
import re
from typing import Optional

from playwright.async_api import Locator, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .base_page import BasePage

logger = logging.getLogger(__name__)


class SidebarComponent(BasePage):
    """Locators and actions of the application sidebar."""

    # Guest selectors
    @property
    def create_account_button(self) -> Locator:
        return self.page.get_by_role("button", name="Sign In / Create Account")

    @property
    def toggle_theme_button(self) -> Locator:
        return self.page.get_by_role("button", name="Toggle theme")

    @property
    def terms_of_service_link(self) -> Locator:
        return self.page.get_by_role("link", name="Terms of Service")

    @property
    def verification_code_input_group(self) -> Locator:
        return self.page.get_by_role("group", name="Verification code")

    # Navigation links
    @property
    def logo_link(self) -> Locator:
        return self.page.get_by_role("link", name="Logo")

    @property
    def meeting_optimizer_link(self) -> Locator:
        return self.page.get_by_role("link", name="Meeting Optimizer", exact=True)

    @property
    def stratsync_link(self) -> Locator:
        return self.page.get_by_role("link", name="StratSync", exact=True)

    @property
    def run_business_link(self) -> Locator:
        return self.page.get_by_role("link", name="Run the Business")

    @property
    def response_aggregation_link(self) -> Locator:
        return self.page.get_by_role("link", name="Response Aggregation")

    @property
    def import_external_memory_button(self) -> Locator:
        return self.page.get_by_role("button", name="Import External Memory")

    # Layout
    @property
    def toggle_button(self) -> Locator:
        """Icon-only button in the header that collapses the sidebar."""
        return (
            self.page.locator("header")
            .get_by_role("button")
            .filter(has_text=re.compile(r"^$"))
        )

    @property
    def container(self) -> Locator:
        """Sidebar root element carrying the ``data-state`` attribute."""
        return self.page.locator('div[data-slot="sidebar"]')

    # User settings menu
    @property
    def settings_dropdown(self) -> Locator:
        return self.page.locator(
            'button[data-sidebar="menu-button"][data-slot="dropdown-menu-trigger"]'
        )

    @property
    def user_email_label(self) -> Locator:
        """Email shown on the user menu button of a signed-in user."""
        return (
            self.settings_dropdown.locator("div.truncate")
            .filter(has_text="@")
            .first
        )

    @property
    def admin_menu_item(self) -> Locator:
        return self.page.get_by_role("menuitem", name="Admin")

    def menu_item(self, name: str) -> Locator:
        """An entry of any open dropdown menu."""
        return self.page.get_by_role("menuitem", name=name)

    # Chat list
    @property
    def chat_actions_dropdown(self) -> Locator:
        return self.page.locator(
            "button[data-sidebar='menu-action'][data-slot='dropdown-menu-trigger']"
        )

    @property
    def delete_chat_button(self) -> Locator:
        return self.page.get_by_role("menuitem", name="Delete")

    @property
    def confirm_delete_chat_button(self) -> Locator:
        return self.page.get_by_role("button", name="Continue")

    @property
    def more_chat_dropdown(self) -> Locator:
        return self.page.get_by_role("menu", name="More")

    # Actions
    async def open_settings(self) -> None:
        """Open the user settings dropdown."""
        await self.settings_dropdown.click()

    async def click_menu_link_and_assert_popup(self, name: str, expected_url: str) -> None:
        """Click a settings menu entry that opens a popup and check its URL."""
        await self.open_settings()
        async with self.page.expect_popup() as popup_info:
            await self.menu_item(name).click()
        popup = await popup_info.value
        await popup.wait_for_load_state("domcontentloaded")

        await expect(popup).to_have_url(expected_url)
        await popup.close()

    async def click_menu_link_and_assert_redirect(self, name: str, expected_url: str) -> None:
        """Click a settings menu entry and check where the page lands."""
        await self.open_settings()
        await self.menu_item(name).click()
        await expect(self.page).to_have_url(expected_url)

    async def logout(self) -> None:
        """Sign out through the settings menu."""
        await self.open_settings()
        await self.menu_item("Sign out").click()
        await self.wait_for_path("/signin", timeout=1500)

    async def delete_first_chat(self) -> None:
        """Delete the most recent chat from the sidebar list."""
        await self.chat_actions_dropdown.first.click()
        await self.delete_chat_button.click()
        await self.confirm_delete_chat_button.click()

    async def read_current_user(self, timeout: float = 5000) -> Optional[str]:
        """
        Read the signed-in user's email from the sidebar.

        Args:
            timeout: How long to wait for the label, in milliseconds.

        Returns:
            The email address, or None if no signed-in user is shown in time.
        """
        label = self.user_email_label
        try:
            await label.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeoutError:
            logger.debug("No signed-in user label after %sms", timeout)
            return None
        text = (await label.inner_text()).strip()
        return text or None
