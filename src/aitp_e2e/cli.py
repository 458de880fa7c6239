#!/usr/bin/env python3
"""
Command-line interface for aitp-e2e.

Warms and clears the per-role session cache outside of a pytest run, and
records the admin session, which cannot be created through the email-code
flow.

Usage:
    aitp-e2e login {main,test,admin}
    aitp-e2e save-admin-session
    aitp-e2e clear [--inboxes]

Options:
    --debug         Enable debug logging
    --version       Show version and exit
    --help          Show this message and exit
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from playwright.async_api import async_playwright

from aitp_e2e import __version__
from aitp_e2e.auth import SessionCacheManager
from aitp_e2e.auth.inbox_cache import INBOX_CACHE_FILE
from aitp_e2e.browser import get_browser_config
from aitp_e2e.config import Settings, get_settings
from aitp_e2e.exceptions import AitpE2EError
from aitp_e2e.logging_config import setup_logging
from aitp_e2e.roles import Role

logger = logging.getLogger(__name__)


async def login(settings: Settings, role: Role, browser_name: str) -> str:
    """Sign a role in (or restore its session) and save its storage state."""
    manager = SessionCacheManager.from_settings(settings)
    preset = get_browser_config(browser_name)

    async with async_playwright() as pw:
        browser = await getattr(pw, preset.name).launch(
            **preset.to_launch_options(
                headless=settings.runner.headless, slow_mo=settings.runner.slow_mo
            )
        )
        try:
            path = await manager.ensure_storage_state(
                role, browser, **preset.to_context_options()
            )
        finally:
            await browser.close()

    identity = manager.current_user(role)
    logger.info("Saved %s session for %s to %s", role.value, identity, path)
    return identity


async def save_admin_session(settings: Settings, browser_name: str) -> None:
    """Open a headed browser on the sign-in page and save the admin session."""
    manager = SessionCacheManager.from_settings(settings)
    preset = get_browser_config(browser_name)
    path = manager.storage_state_path(Role.ADMIN)

    async with async_playwright() as pw:
        browser = await getattr(pw, preset.name).launch(
            **preset.to_launch_options(headless=False)
        )
        try:
            context = await browser.new_context(**preset.to_context_options())
            page = await context.new_page()
            await page.goto(f"{settings.base_url}/signin")

            # Sign in by hand, then resume from the Playwright inspector
            await page.pause()

            path.parent.mkdir(parents=True, exist_ok=True)
            await context.storage_state(path=str(path))
            await context.close()
        finally:
            await browser.close()

    logger.info("Saved admin session to %s", path)


def clear(settings: Settings, include_inboxes: bool = False) -> int:
    """Delete persisted sessions, and optionally the inbox cache."""
    storage_dir = settings.runner.storage_dir
    removed = 0
    targets = [storage_dir / role.storage_state_name for role in Role]
    if include_inboxes:
        targets.append(storage_dir / INBOX_CACHE_FILE)

    for path in targets:
        if path.exists():
            path.unlink()
            removed += 1
            logger.info("Removed %s", path)
    return removed


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="aitp-e2e - session cache tools for the AITP E2E suite",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Sign the main user in and cache the session:
        aitp-e2e login main

    Record the admin session by hand:
        aitp-e2e save-admin-session

Environment Variables:
    BASE_URL                          Application under test
    AI_LEADERSHIP_URL                 Marketing site URL
    MAILSLURP_API_KEY                 MailSlurp API key
    MAILSLURP_MAIN_USER_INBOX_NAME    Inbox name of the main user
    MAILSLURP_TEST_USER_INBOX_NAME    Inbox name of the test user
    E2E_STORAGE_DIR                   Session cache directory
        """,
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--browser",
        default="chromium",
        choices=["chromium", "firefox", "webkit", "chrome"],
        help="Browser to use (default: chromium)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"aitp-e2e {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser(
        "login", help="Sign a role in and cache its session"
    )
    login_parser.add_argument(
        "role",
        choices=[role.value for role in Role],
        help="Role to sign in as",
    )

    subparsers.add_parser(
        "save-admin-session", help="Record the admin session interactively"
    )

    clear_parser = subparsers.add_parser(
        "clear", help="Delete cached sessions"
    )
    clear_parser.add_argument(
        "--inboxes",
        action="store_true",
        help="Also forget the cached inbox records",
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the aitp-e2e command.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = parse_args(argv)

    try:
        settings = get_settings()
    except AitpE2EError as e:
        setup_logging("DEBUG" if args.debug else "INFO")
        logger.error("%s", e)
        return 2

    setup_logging("DEBUG" if args.debug else settings.log_level)

    try:
        if args.command == "login":
            identity = asyncio.run(login(settings, Role(args.role), args.browser))
            print(identity)
        elif args.command == "save-admin-session":
            asyncio.run(save_admin_session(settings, args.browser))
        elif args.command == "clear":
            removed = clear(settings, include_inboxes=args.inboxes)
            print(f"Removed {removed} file(s)")
        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    except AitpE2EError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
