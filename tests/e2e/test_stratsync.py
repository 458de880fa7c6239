"""
E2E tests for the StratSync dashboard.
"""

import pytest
from playwright.async_api import expect

from aitp_e2e.pages import StratsyncDashboardPage

pytestmark = [pytest.mark.e2e, pytest.mark.asyncio(loop_scope="session")]


class TestStratsyncDashboard:
    """Tests for the dashboard tabs."""

    async def test_dashboard_elements(self, stratsync_page: StratsyncDashboardPage):
        """Test the title and both tabs."""
        await stratsync_page.goto()

        await expect(stratsync_page.heading).to_be_visible()
        await expect(stratsync_page.my_stratsync_tab).to_be_visible()
        await expect(stratsync_page.company_dashboard_tab).to_be_visible()

    async def test_switch_tabs(self, stratsync_page: StratsyncDashboardPage):
        """Test that the company tab is the default and tabs switch."""
        company = stratsync_page.company_dashboard_tab
        personal = stratsync_page.my_stratsync_tab
        await stratsync_page.goto()

        await expect(company).to_have_attribute("aria-selected", "true")
        await expect(personal).to_have_attribute("aria-selected", "false")

        await personal.click()
        await expect(company).to_have_attribute("aria-selected", "false")
        await expect(personal).to_have_attribute("aria-selected", "true")

        await company.click()
        await expect(company).to_have_attribute("aria-selected", "true")
        await expect(personal).to_have_attribute("aria-selected", "false")

    async def test_tab_urls(self, stratsync_page: StratsyncDashboardPage):
        """Test that tab navigation is reflected in the URL."""
        await stratsync_page.goto()

        await stratsync_page.goto_my_stratsync()
        assert stratsync_page.current_tab() == "stratsync"

        await stratsync_page.goto_company_dashboard()
        assert stratsync_page.current_tab() == "company"
