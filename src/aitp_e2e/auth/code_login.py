"""
Interactive sign-in through an emailed one-time code.

One call to :meth:`EmailCodeLogin.login` walks these stages in order::

    FormVisible -> CodeRequested -> PollingMailbox -> CodeExtracted
        -> CodeSubmitted -> Redirected -> MailboxCleared

Any failure aborts the whole attempt; a retried login starts again from the
empty form. The inbox is cleared only after a successful redirect.
"""

import asyncio
import logging
import re
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol

from playwright.async_api import Page

from ..exceptions import (
    RetryExhausted,
    VerificationCodeNotFoundError,
    VerificationEmailNotReceivedError,
)
from ..mail import EmailPreview, InboxRecord, MailClient
from ..pages import SigninPage
from .addresses import tag_address, untag_address
from .retry import poll

logger = logging.getLogger(__name__)

CODE_PATTERN = re.compile(r'class="bold">(\d{6})<', re.IGNORECASE)


class LoginStage(str, Enum):
    """Progress of a single login attempt."""

    FORM_VISIBLE = "FormVisible"
    CODE_REQUESTED = "CodeRequested"
    POLLING_MAILBOX = "PollingMailbox"
    CODE_EXTRACTED = "CodeExtracted"
    CODE_SUBMITTED = "CodeSubmitted"
    REDIRECTED = "Redirected"
    MAILBOX_CLEARED = "MailboxCleared"


class SigninForm(Protocol):
    """What the login flow needs from the sign-in page."""

    async def goto(self) -> None: ...

    async def request_code(self, email: str) -> None: ...

    async def fill_code(self, code: str) -> None: ...

    async def wait_for_redirect(self, timeout: Optional[float] = None) -> None: ...


def extract_verification_code(body: str) -> Optional[str]:
    """Pull the 6-digit code out of a verification email body."""
    match = CODE_PATTERN.search(body or "")
    return match.group(1) if match else None


def message_matches(message: EmailPreview, address: str) -> bool:
    """Whether a listed message was sent to the given address."""
    return address.lower() in message.recipients()


def pick_message(
    messages: list[EmailPreview], tagged: str, base: str
) -> Optional[EmailPreview]:
    """
    Choose the verification email for a login attempt.

    A message to the tagged address wins wherever it sits in the listing;
    only when there is none does a message to the untagged base address
    count.
    """
    for message in messages:
        if message_matches(message, tagged):
            return message
    for message in messages:
        if message_matches(message, base):
            return message
    return None


class EmailCodeLogin:
    """Signs a page in with an inbox by fetching the emailed code."""

    def __init__(
        self,
        base_url: str,
        mail: MailClient,
        *,
        attempts: int = 5,
        interval: float = 2.0,
        redirect_timeout: float = 30000,
        form_factory: Callable[[Page, str], SigninForm] = SigninPage,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.base_url = base_url
        self.mail = mail
        self.attempts = attempts
        self.interval = interval
        self.redirect_timeout = redirect_timeout
        self.form_factory = form_factory
        self.sleep = sleep
        self.stage: Optional[LoginStage] = None

    def _advance(self, stage: LoginStage, address: str) -> None:
        self.stage = stage
        logger.debug("Login %s: %s", address, stage.value)

    async def login(self, page: Page, inbox: InboxRecord) -> str:
        """
        Perform one complete sign-in.

        Args:
            page: Page to sign in.
            inbox: Inbox that receives the code.

        Returns:
            The tagged address the session is signed in as.

        Raises:
            VerificationEmailNotReceivedError: No matching email arrived.
            VerificationCodeNotFoundError: The email holds no code.
        """
        tagged = tag_address(inbox.email_address)
        form = self.form_factory(page, self.base_url)
        logger.info("Signing in as %s", tagged)

        await form.goto()
        self._advance(LoginStage.FORM_VISIBLE, tagged)

        await form.request_code(tagged)
        self._advance(LoginStage.CODE_REQUESTED, tagged)

        message = await self.wait_for_message(inbox, tagged)
        email = await asyncio.to_thread(self.mail.get_email, message.id)
        code = extract_verification_code(email.body or "")
        if code is None:
            raise VerificationCodeNotFoundError(
                email.id, details={"address": tagged, "subject": email.subject}
            )
        self._advance(LoginStage.CODE_EXTRACTED, tagged)

        await form.fill_code(code)
        self._advance(LoginStage.CODE_SUBMITTED, tagged)

        await form.wait_for_redirect(timeout=self.redirect_timeout)
        self._advance(LoginStage.REDIRECTED, tagged)

        await asyncio.to_thread(self.mail.delete_all_emails, inbox.id)
        self._advance(LoginStage.MAILBOX_CLEARED, tagged)

        logger.info("Signed in as %s", tagged)
        return tagged

    async def wait_for_message(self, inbox: InboxRecord, tagged: str) -> EmailPreview:
        """
        Poll the inbox until the verification email for ``tagged`` shows up.

        Raises:
            VerificationEmailNotReceivedError: After the last empty poll.
        """
        base = untag_address(tagged)
        attempt = 0

        async def fetch() -> Optional[EmailPreview]:
            nonlocal attempt
            attempt += 1
            self._advance(LoginStage.POLLING_MAILBOX, tagged)
            logger.debug("Polling inbox %s (attempt %d/%d)", inbox.id, attempt, self.attempts)
            messages = await asyncio.to_thread(self.mail.list_emails, inbox.id)
            return pick_message(messages, tagged, base)

        try:
            return await poll(
                fetch,
                attempts=self.attempts,
                interval=self.interval,
                sleep=self.sleep,
            )
        except RetryExhausted as e:
            raise VerificationEmailNotReceivedError(tagged, e.attempts) from e
