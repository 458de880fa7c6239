"""
Sign-in Page Object: email entry and the one-time code form.
"""

from typing import Optional
from urllib.parse import urlsplit

from playwright.async_api import Locator, expect

from .base_page import BasePage

SIGNIN_PATH = "/signin"


def is_signin_url(url: str) -> bool:
    """Whether a URL points at the sign-in route."""
    return urlsplit(url).path.rstrip("/").endswith(SIGNIN_PATH)


class SigninPage(BasePage):
    """Page Object for the sign-in page."""

    path = SIGNIN_PATH

    # Selectors
    @property
    def email_input(self) -> Locator:
        """Email address input."""
        return self.page.get_by_role("textbox", name="Email Address")

    @property
    def send_code_button(self) -> Locator:
        """Button that emails the verification code."""
        return self.page.get_by_role("button", name="Send verification code")

    @property
    def terms_of_service_link(self) -> Locator:
        """Terms of Service link below the form."""
        return self.page.get_by_text("Terms of Service")

    @property
    def resend_code_button(self) -> Locator:
        """Resend code button on the verification form."""
        return self.page.get_by_role("button", name="Resend code")

    @property
    def use_different_email_button(self) -> Locator:
        """Button returning to the email step."""
        return self.page.get_by_role("button", name="Use a different email")

    @property
    def verification_code_inputs(self) -> Locator:
        """Single-character inputs of the verification code group."""
        return self.page.get_by_role("group", name="Verification code").locator("input")

    @property
    def continue_as_guest_button(self) -> Locator:
        """Guest access button."""
        return self.page.get_by_role("button", name="Continue as guest")

    # Actions
    async def request_code(self, email: str) -> None:
        """Submit an email address and ask for a verification code."""
        await self.email_input.fill(email)
        await self.send_code_button.click()

    async def fill_code(self, code: str) -> None:
        """Type each digit of the code into its own input."""
        inputs = self.verification_code_inputs
        await expect(inputs.first).to_be_visible()
        for index, digit in enumerate(code):
            await inputs.nth(index).fill(digit)

    async def wait_for_redirect(self, timeout: Optional[float] = None) -> None:
        """Wait until the application navigates away from the sign-in route."""
        await self.page.wait_for_url(
            lambda url: not is_signin_url(url), timeout=timeout
        )

    async def continue_as_guest(self) -> None:
        """Open the sign-in page and enter the app as a guest."""
        await self.goto()
        await self.continue_as_guest_button.click()
        await self.wait_for_path("/")
