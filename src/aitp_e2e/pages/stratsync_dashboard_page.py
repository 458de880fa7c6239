"""
StratSync dashboard Page Object with its Company / My StratSync tabs.
"""

from typing import Optional

from playwright.async_api import Locator

from .base_page import BasePage

DASHBOARD_PATH = "/dashboard/stratsync"


class StratsyncDashboardPage(BasePage):
    """Page Object for the StratSync dashboard."""

    path = DASHBOARD_PATH

    @property
    def heading(self) -> Locator:
        return self.page.get_by_role("heading", name="StratSync")

    @property
    def company_dashboard_tab(self) -> Locator:
        return self.page.get_by_role("tab", name="Company Dashboard")

    @property
    def my_stratsync_tab(self) -> Locator:
        return self.page.get_by_role("tab", name="My StratSync")

    @property
    def create_new_company_dashboard_button(self) -> Locator:
        return self.page.get_by_role("button", name="Paste or Create New Company")

    @property
    def create_stratsync_dashboard_button(self) -> Locator:
        return self.page.get_by_role("button", name="Create My StratSync Dashboard")

    def current_tab(self) -> Optional[str]:
        """
        Tab the current URL points at.

        Returns:
            ``"stratsync"`` for the personal tab, ``"company"`` for the
            company tab (the dashboard's default), None off the dashboard.
        """
        url = self.page.url
        if DASHBOARD_PATH not in url:
            return None
        if "tab=personal" in url:
            return "stratsync"
        return "company"

    async def goto(self) -> None:
        """Open the dashboard unless it is already shown."""
        if self.current_tab() is not None:
            return
        await self.navigate_to(DASHBOARD_PATH)
        await self.wait_for_path(DASHBOARD_PATH)

    async def goto_company_dashboard(self) -> None:
        if self.current_tab() == "company":
            return
        await self.company_dashboard_tab.click()
        await self.wait_for_path(f"{DASHBOARD_PATH}?tab=company")

    async def goto_my_stratsync(self) -> None:
        if self.current_tab() == "stratsync":
            return
        await self.my_stratsync_tab.click()
        await self.wait_for_path(f"{DASHBOARD_PATH}?tab=personal")
