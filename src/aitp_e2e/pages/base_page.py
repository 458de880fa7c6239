"""
Base Page Object with the page handle and navigation shared by all pages.

Feature pages extend this once and compose components (such as the sidebar)
rather than inheriting from each other.
"""

from typing import Optional
from urllib.parse import urlsplit

from playwright.async_api import Locator, Page, expect


class BasePage:
    """Base class for all Page Objects with common functionality."""

    path = "/"

    def __init__(self, page: Page, base_url: str):
        self.page = page
        self.base_url = base_url.rstrip("/")

    def url_for(self, path: str = "") -> str:
        """Absolute URL of a path on the application under test."""
        return f"{self.base_url}/{path.lstrip('/')}"

    @property
    def current_path(self) -> str:
        """Path component of the page's current URL."""
        return urlsplit(self.page.url).path

    @property
    def toast_notification(self) -> Locator:
        """Toast notification container."""
        return self.page.get_by_test_id("toast")

    # Navigation
    async def navigate_to(self, path: str = "") -> None:
        """Navigate to a specific path."""
        await self.page.goto(self.url_for(path))

    async def goto(self) -> None:
        """Navigate to this page's own path."""
        await self.navigate_to(self.path)

    async def wait_for_path(self, path: str, timeout: Optional[float] = None) -> None:
        """Wait until the browser is on the given path of the application."""
        await self.page.wait_for_url(self.url_for(path), timeout=timeout)

    async def wait_for_page_load(self, timeout: int = 30000) -> None:
        """Wait for page to fully load."""
        await self.page.wait_for_load_state("load", timeout=timeout)

    # Assertions
    async def assert_at(self, path: str) -> None:
        """Assert that the browser is on the given path."""
        await expect(self.page).to_have_url(self.url_for(path))

    async def assert_visible(self, locator: Locator) -> None:
        """Assert that an element is visible."""
        await expect(locator).to_be_visible()

    # Theme
    async def get_theme(self) -> str:
        """Computed color scheme of the document (``light`` or ``dark``)."""
        return await self.page.evaluate(
            "() => getComputedStyle(document.documentElement).colorScheme"
        )
