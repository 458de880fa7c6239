"""
E2E tests for the sign-in page.

Tests cover:
- Email form elements and validation
- Verification code form
- Live sign-in through an emailed code
- Session persistence and sign-out
- Guest access
"""

import asyncio
from urllib.parse import urlsplit

import pytest
from playwright.async_api import Page, expect

from aitp_e2e import Role
from aitp_e2e.auth import SessionCacheManager, generate_email
from aitp_e2e.pages import ChatPage, SigninPage

pytestmark = [pytest.mark.e2e, pytest.mark.asyncio(loop_scope="session")]

TERMS_OF_SERVICE_PATH = "/legal/aitp-terms-of-service"


# =============================================================================
# Email Form Tests
# =============================================================================

class TestEmailForm:
    """Tests for the sign-in page before an email is submitted."""

    async def test_sign_in_page_elements(self, page: Page, signin_page: SigninPage):
        """Test that the sign-in page shows all its elements."""
        await signin_page.goto()

        await expect(page.get_by_role("img")).to_be_visible()
        await expect(page.get_by_role("heading", name="Sign in to AITP")).to_be_visible()
        await expect(page.get_by_text("Enter your email and we'll")).to_be_visible()
        await expect(page.get_by_text("Email Address")).to_be_visible()
        await expect(signin_page.email_input).to_be_visible()
        await expect(signin_page.send_code_button).to_be_visible()
        await expect(page.get_by_text("By continuing, you agree to")).to_be_visible()

    async def test_terms_of_service_link(
        self, page: Page, signin_page: SigninPage, ai_leadership_url: str
    ):
        """Test that the Terms of Service link opens the legal page."""
        await signin_page.goto()

        async with page.expect_popup() as popup_info:
            await signin_page.terms_of_service_link.click()
        popup = await popup_info.value

        actual = urlsplit(popup.url)
        expected = urlsplit(f"{ai_leadership_url}{TERMS_OF_SERVICE_PATH}")
        assert (actual.netloc, actual.path) == (expected.netloc, expected.path)
        await popup.close()

    async def test_send_code_enabled_only_for_valid_email(self, signin_page: SigninPage):
        """Test that the send code button follows email validity."""
        await signin_page.goto()

        await expect(signin_page.send_code_button).to_be_disabled()

        await signin_page.email_input.fill("invalid-email-format")
        await expect(signin_page.send_code_button).to_be_disabled()

        await signin_page.email_input.fill(generate_email())
        await expect(signin_page.send_code_button).to_be_enabled()

    async def test_continue_as_guest_button(self, page: Page, signin_page: SigninPage):
        """Test that guest access is offered."""
        await signin_page.goto()

        await expect(signin_page.continue_as_guest_button).to_be_visible()
        await expect(signin_page.continue_as_guest_button).to_be_enabled()
        await expect(page.get_by_text("Try our AI BTS")).to_be_visible()


# =============================================================================
# Verification Form Tests
# =============================================================================

class TestVerificationForm:
    """Tests for the sign-in page after an email is submitted."""

    async def test_toast_after_submission(self, signin_page: SigninPage):
        """Test that a toast confirms the code was sent."""
        await signin_page.goto()
        await signin_page.request_code(generate_email())

        await expect(signin_page.toast_notification).to_be_visible()

    async def test_verification_form_elements(self, page: Page, signin_page: SigninPage):
        """Test that the verification form shows all its elements."""
        await signin_page.goto()
        await signin_page.request_code(generate_email())

        await expect(page.get_by_role("img", name="Logo")).to_be_visible()
        await expect(page.get_by_role("heading", name="Enter verification code")).to_be_visible()
        await expect(page.get_by_text("We've sent a 6-digit code to")).to_be_visible()
        await expect(page.get_by_text("Verification Code", exact=True)).to_be_visible()
        await expect(page.get_by_text("Didn't receive the code?")).to_be_visible()
        await expect(signin_page.resend_code_button).to_be_visible()
        await expect(signin_page.use_different_email_button).to_be_visible()

    async def test_use_different_email(self, signin_page: SigninPage):
        """Test returning to the email form from the verification form."""
        await signin_page.goto()
        await signin_page.request_code(generate_email())

        await signin_page.use_different_email_button.click()

        await expect(signin_page.email_input).to_be_visible()

    async def test_resend_code(self, signin_page: SigninPage):
        """Test that resending is possible once and then disabled again."""
        await signin_page.goto()
        await signin_page.request_code(generate_email())

        await expect(signin_page.resend_code_button).to_be_visible()
        await expect(signin_page.resend_code_button).to_be_enabled(timeout=25000)

        await signin_page.resend_code_button.click()

        await expect(signin_page.resend_code_button).to_be_disabled()


# =============================================================================
# Session Tests
# =============================================================================

class TestSession:
    """Tests for signing in, staying signed in and signing out."""

    async def test_sign_in_with_emailed_code(
        self, page: Page, session_cache: SessionCacheManager, app_url: str
    ):
        """Test the full email-code sign-in and a sign-out afterwards."""
        inbox = await asyncio.to_thread(session_cache.inboxes.ensure, Role.TEST)

        address = await session_cache.code_login.login(page, inbox)

        chat_page = ChatPage(page, app_url)
        assert await chat_page.sidebar.read_current_user() == address

        await chat_page.sidebar.logout()
        await page.goto(f"{app_url}/")
        await expect(page).to_have_url(f"{app_url}/signin")

    async def test_stays_signed_in_after_closing_app(
        self, new_context, main_user_state, app_url: str
    ):
        """Test that a stored session survives closing the page."""
        context = await new_context(main_user_state)
        page = await context.new_page()
        await page.close()

        page = await context.new_page()
        await page.goto(f"{app_url}/")

        await expect(page).to_have_url(f"{app_url}/")


# =============================================================================
# Guest Tests
# =============================================================================

class TestGuestAccess:
    """Tests for entering the app without an account."""

    async def test_continue_as_guest_redirects_home(
        self, page: Page, signin_page: SigninPage, app_url: str
    ):
        """Test that guests land on the main page."""
        await signin_page.continue_as_guest()

        await expect(page).to_have_url(f"{app_url}/")
