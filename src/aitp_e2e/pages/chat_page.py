"""
Chat Page Object for the main conversation view.
"""

from playwright.async_api import Locator, Page, Response, expect

from .base_page import BasePage
from .sidebar_component import SidebarComponent

CHAT_API_PATH = "/api/chat"


class ChatPage(BasePage):
    """Page Object for the chat screen at the application root."""

    def __init__(self, page: Page, base_url: str):
        super().__init__(page, base_url)
        self.sidebar = SidebarComponent(page, base_url)

    # Composer
    @property
    def input(self) -> Locator:
        """Multimodal chat input."""
        return self.page.get_by_test_id("multimodal-input")

    @property
    def send_button(self) -> Locator:
        return self.page.get_by_test_id("send-button")

    @property
    def attachments_button(self) -> Locator:
        return self.page.get_by_test_id("attachments-button")

    @property
    def input_attachment_preview(self) -> Locator:
        return self.page.get_by_test_id("input-attachment-preview")

    @property
    def recording_button(self) -> Locator:
        """Microphone button, shown again once a response has finished."""
        return self.page.get_by_role("button", name="Start recording")

    @property
    def recording_button_webkit(self) -> Locator:
        """WebKit variant of the microphone button (recording unsupported)."""
        return self.page.get_by_role("button", name="Audio recording requires")

    # Messages
    @property
    def message_content(self) -> Locator:
        return self.page.get_by_test_id("message-content")

    @property
    def message_content_webkit(self) -> Locator:
        return self.page.get_by_test_id("message-assistant")

    @property
    def upvote_button(self) -> Locator:
        return self.page.get_by_test_id("message-upvote")

    @property
    def downvote_button(self) -> Locator:
        return self.page.get_by_test_id("message-downvote")

    @property
    def thinking_indicator(self) -> Locator:
        return self.page.get_by_text("Thinking...")

    @property
    def save_as_final_response_button(self) -> Locator:
        return self.page.get_by_role("button", name="Save as Final Response")

    # Header actions
    @property
    def new_chat_button(self) -> Locator:
        return self.page.get_by_role("button", name="New Chat")

    @property
    def private_button(self) -> Locator:
        return self.page.get_by_role("button", name="Private")

    @property
    def public_button(self) -> Locator:
        return self.page.get_by_role("button", name="Public")

    @property
    def feedback_button(self) -> Locator:
        return self.page.locator('button[data-slot="popover-trigger"]')

    @property
    def main_chat_actions_dropdown(self) -> Locator:
        return self.page.locator("header").get_by_role("button", name="Chat actions")

    @property
    def copy_button(self) -> Locator:
        return self.page.get_by_role("menuitem", name="Copy")

    @property
    def export_pdf_button(self) -> Locator:
        return self.page.get_by_role("menuitem", name="Export PDF")

    # Empty state
    @property
    def new_meeting_optimizer_button(self) -> Locator:
        return self.page.get_by_role("button", name="New Meeting Optimizer")

    @property
    def my_stratsync_button(self) -> Locator:
        return self.page.get_by_role("button", name="My StratSync")

    # Chat not found modal
    @property
    def chat_not_found_modal(self) -> Locator:
        return self.page.get_by_role("dialog").filter(has_text="Chat not found")

    @property
    def refresh_page_button_in_modal(self) -> Locator:
        return self.chat_not_found_modal.get_by_role("button", name="Refresh page")

    @property
    def start_new_chat_button_in_modal(self) -> Locator:
        return self.chat_not_found_modal.get_by_role("button", name="Start a new chat")

    @property
    def guest_limit_notification(self) -> Locator:
        return (
            self.page.get_by_label("Notifications alt+T")
            .get_by_text("Guest accounts are limited to")
        )

    def _response_ready_button(self) -> Locator:
        browser = self.page.context.browser
        if browser is not None and browser.browser_type.name == "webkit":
            return self.recording_button_webkit
        return self.recording_button

    # Actions
    async def send_message(self, message: str, wait_for_recording: bool = True) -> None:
        """
        Type and send a message, then wait for the response to finish.

        Args:
            message: Prompt text.
            wait_for_recording: Wait with the default timeout. When False the
                wait is unbounded, for long generations.
        """
        await expect(self.input).to_be_visible()
        await self.input.click()
        await self.input.fill(message)
        await self.send_button.click()

        if wait_for_recording:
            await self._response_ready_button().wait_for(state="visible")
        else:
            await self._response_ready_button().wait_for(state="visible", timeout=0)

    async def send_message_via_api(self, message: str) -> Response:
        """
        Send a message and return the chat API response it triggered.

        The response is awaited before the UI finishes streaming so callers
        can assert on the status code.
        """
        await expect(self.input).to_be_visible()
        await self.input.fill(message)

        async with self.page.expect_response(
            lambda r: CHAT_API_PATH in r.url and r.request.method == "POST"
        ) as response_info:
            await self.send_button.click()
        response = await response_info.value

        if response.ok:
            await self._response_ready_button().wait_for(state="visible")
        return response

    async def create_new_chat(self) -> None:
        """Start a fresh conversation."""
        await self.new_chat_button.click()
        await expect(self.input).to_be_visible()
        await expect(self.input).to_be_empty()
