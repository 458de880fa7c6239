"""
Pytest fixtures for Playwright E2E tests.

This module provides fixtures for the browser, per-test contexts, role
sessions restored from the session cache, and page objects. Role sessions
are created once per run by :class:`SessionCacheManager` and persisted under
``tests/storage`` so later runs skip the email-code login entirely.
"""

import logging
from pathlib import Path
from typing import AsyncGenerator, Awaitable, Callable, Optional

import pytest
import pytest_asyncio
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from aitp_e2e import Role
from aitp_e2e.auth import SessionCacheManager
from aitp_e2e.browser import BrowserConfig, get_browser_config, get_screenshot_path
from aitp_e2e.config import Settings, get_settings
from aitp_e2e.logging_config import setup_logging
from aitp_e2e.pages import ChatPage, ProfilePage, SigninPage, StratsyncDashboardPage

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"

ContextFactory = Callable[..., Awaitable[BrowserContext]]


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(scope="session")
def settings() -> Settings:
    """Validated settings; a missing variable fails the run by name."""
    settings = get_settings()
    setup_logging(settings.log_level)
    return settings


@pytest.fixture(scope="session")
def app_url(settings: Settings) -> str:
    """Application under test, without a trailing slash."""
    return settings.base_url


@pytest.fixture(scope="session")
def ai_leadership_url(settings: Settings) -> str:
    return settings.ai_leadership_url


@pytest.fixture(scope="session")
def session_cache(settings: Settings) -> SessionCacheManager:
    """The one session cache shared by every fixture of the run."""
    return SessionCacheManager.from_settings(settings)


@pytest.fixture(scope="session")
def browser_config(pytestconfig) -> BrowserConfig:
    """Browser preset chosen with ``--browser`` (first one if repeated)."""
    names = pytestconfig.getoption("browser", default=None) or ["chromium"]
    if isinstance(names, str):
        names = [names]
    return get_browser_config(names[0])


# =============================================================================
# Playwright Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="session")
async def playwright() -> AsyncGenerator[Playwright, None]:
    """Create a Playwright instance for the test session."""
    async with async_playwright() as pw:
        yield pw


@pytest_asyncio.fixture(scope="session")
async def browser(
    playwright: Playwright,
    browser_config: BrowserConfig,
    settings: Settings,
    pytestconfig,
) -> AsyncGenerator[Browser, None]:
    """Launch the selected browser once per session."""
    headless = settings.runner.headless and not pytestconfig.getoption("headed", default=False)
    browser = await getattr(playwright, browser_config.name).launch(
        **browser_config.to_launch_options(headless=headless, slow_mo=settings.runner.slow_mo)
    )
    yield browser
    await browser.close()


@pytest_asyncio.fixture
async def new_context(
    browser: Browser,
    browser_config: BrowserConfig,
    settings: Settings,
) -> AsyncGenerator[ContextFactory, None]:
    """
    Factory for extra browser contexts, closed after the test.

    Usage:
        async def test_something(new_context, main_user_state):
            context = await new_context(main_user_state)
    """
    contexts = []

    async def factory(storage_state: Optional[Path] = None, **overrides) -> BrowserContext:
        options = browser_config.to_context_options(base_url=settings.base_url)
        if storage_state is not None:
            options["storage_state"] = str(storage_state)
        options.update(overrides)

        context = await browser.new_context(**options)
        context.set_default_timeout(settings.runner.timeout)
        contexts.append(context)
        return context

    yield factory

    for context in contexts:
        await context.close()


async def _screenshot_on_failure(page: Page, request) -> None:
    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed and not page.is_closed():
        path = get_screenshot_path(request.node.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        await page.screenshot(path=str(path), full_page=True)
        logger.info("Saved failure screenshot to %s", path)


@pytest_asyncio.fixture
async def context(new_context: ContextFactory) -> BrowserContext:
    """A fresh, signed-out context for each test."""
    return await new_context()


@pytest_asyncio.fixture
async def page(context: BrowserContext, request) -> AsyncGenerator[Page, None]:
    """A signed-out page; a screenshot is saved if the test fails."""
    page = await context.new_page()
    yield page
    await _screenshot_on_failure(page, request)


# =============================================================================
# Role Session Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="session")
async def main_user_state(
    session_cache: SessionCacheManager,
    browser: Browser,
    browser_config: BrowserConfig,
    settings: Settings,
) -> Path:
    """Storage state of the main user, signing in on first use."""
    return await session_cache.ensure_storage_state(
        Role.MAIN, browser, **browser_config.to_context_options(base_url=settings.base_url)
    )


@pytest_asyncio.fixture(scope="session")
async def test_user_state(
    session_cache: SessionCacheManager,
    browser: Browser,
    browser_config: BrowserConfig,
    settings: Settings,
) -> Path:
    """Storage state of the second user, for cross-user checks."""
    return await session_cache.ensure_storage_state(
        Role.TEST, browser, **browser_config.to_context_options(base_url=settings.base_url)
    )


@pytest_asyncio.fixture(scope="session")
async def admin_state(
    session_cache: SessionCacheManager,
    browser: Browser,
    browser_config: BrowserConfig,
    settings: Settings,
) -> Path:
    """
    Storage state of the admin user.

    Skips when neither a saved admin session nor an admin inbox exists;
    record one with ``aitp-e2e save-admin-session``.
    """
    path = session_cache.storage_state_path(Role.ADMIN)
    if not path.exists() and not session_cache.inboxes.is_configured(Role.ADMIN):
        pytest.skip(f"No admin session at {path}; run 'aitp-e2e save-admin-session'")
    return await session_cache.ensure_storage_state(
        Role.ADMIN, browser, **browser_config.to_context_options(base_url=settings.base_url)
    )


@pytest.fixture(scope="session")
def main_user_email(session_cache: SessionCacheManager, main_user_state: Path) -> str:
    """Address the main user is signed in as."""
    return session_cache.current_user(Role.MAIN)


@pytest_asyncio.fixture
async def main_user_page(
    new_context: ContextFactory, main_user_state: Path, request
) -> AsyncGenerator[Page, None]:
    """A page signed in as the main user."""
    context = await new_context(main_user_state)
    page = await context.new_page()
    yield page
    await _screenshot_on_failure(page, request)


@pytest_asyncio.fixture
async def test_user_page(
    new_context: ContextFactory, test_user_state: Path, request
) -> AsyncGenerator[Page, None]:
    """A page signed in as the second user."""
    context = await new_context(test_user_state)
    page = await context.new_page()
    yield page
    await _screenshot_on_failure(page, request)


# =============================================================================
# Page Object Fixtures
# =============================================================================

@pytest.fixture
def signin_page(page: Page, app_url: str) -> SigninPage:
    """Sign-in page on a signed-out context."""
    return SigninPage(page, app_url)


@pytest.fixture
def guest_chat_page(page: Page, app_url: str) -> ChatPage:
    """Chat page on a signed-out context, for guest flows."""
    return ChatPage(page, app_url)


@pytest.fixture
def chat_page(main_user_page: Page, app_url: str) -> ChatPage:
    """Chat page signed in as the main user."""
    return ChatPage(main_user_page, app_url)


@pytest.fixture
def profile_page(main_user_page: Page, app_url: str) -> ProfilePage:
    return ProfilePage(main_user_page, app_url)


@pytest.fixture
def stratsync_page(main_user_page: Page, app_url: str) -> StratsyncDashboardPage:
    return StratsyncDashboardPage(main_user_page, app_url)


# =============================================================================
# Utility Fixtures
# =============================================================================

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Store each phase's report on the item for the failure screenshot."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


@pytest.fixture
def test_pdf() -> Path:
    """A small PDF for attachment tests."""
    return DATA_DIR / "test-pdf.pdf"
