"""
MailSlurp REST client.

A small synchronous wrapper over ``requests.Session`` exposing exactly the
inbox and email operations the login flow needs. Callers running inside an
event loop hand these calls to a worker thread.
"""

import logging
from typing import Any, Optional

import requests

from ..exceptions import MailApiError
from .models import Email, EmailPreview, InboxRecord

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.mailslurp.com"


class MailClient:
    """
    Client for the MailSlurp inbox API.

    Authenticates with the ``x-api-key`` header; every non-2xx response
    raises :class:`MailApiError`.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "x-api-key": api_key,
            "Accept": "application/json",
        })

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode the JSON body, if any."""
        url = f"{self.api_url}/{path.lstrip('/')}"
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(
                method, url, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise MailApiError(url=url, reason=str(e)) from e

        if not response.ok:
            raise MailApiError(
                url=url,
                status=response.status_code,
                reason=response.text[:200],
            )

        if not response.content:
            return None
        return response.json()

    # Inbox endpoints
    def _inbox_page(self, page: int, size: int) -> tuple[list[InboxRecord], bool]:
        """Fetch one page of inboxes and whether it is the last one."""
        data = self._request(
            "GET", "inboxes/paginated",
            params={"page": page, "size": size, "sort": "DESC"},
        )
        inboxes = [InboxRecord.model_validate(item) for item in data.get("content", [])]
        return inboxes, bool(data.get("last", True)) or not inboxes

    def list_inboxes(self, page: int = 0, size: int = 100) -> list[InboxRecord]:
        """List one page of the account's inboxes, newest first."""
        return self._inbox_page(page, size)[0]

    def find_inbox_by_name(self, name: str, size: int = 100) -> Optional[InboxRecord]:
        """Return the first inbox whose name matches on any page, or None."""
        page = 0
        while True:
            inboxes, last = self._inbox_page(page, size)
            for inbox in inboxes:
                if inbox.name == name:
                    return inbox
            if last:
                return None
            page += 1

    def create_inbox(self, name: str) -> InboxRecord:
        """Create a named inbox."""
        data = self._request("POST", "inboxes", params={"name": name})
        inbox = InboxRecord.model_validate(data)
        logger.info("Created inbox %s (%s)", inbox.name, inbox.email_address)
        return inbox

    def get_inbox(self, inbox_id: str) -> InboxRecord:
        """Fetch an inbox by id."""
        return InboxRecord.model_validate(self._request("GET", f"inboxes/{inbox_id}"))

    # Email endpoints
    def list_emails(self, inbox_id: str) -> list[EmailPreview]:
        """List the messages currently in an inbox."""
        data = self._request(
            "GET", f"inboxes/{inbox_id}/emails", params={"sort": "DESC"}
        )
        return [EmailPreview.model_validate(item) for item in data or []]

    def get_email(self, email_id: str) -> Email:
        """Fetch a single message including its body."""
        return Email.model_validate(self._request("GET", f"emails/{email_id}"))

    def delete_all_emails(self, inbox_id: str) -> None:
        """Delete every message in an inbox."""
        self._request("DELETE", f"inboxes/{inbox_id}/deleteAllInboxEmails")
        logger.debug("Cleared inbox %s", inbox_id)
