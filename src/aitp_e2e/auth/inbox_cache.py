"""
Local cache of the inbox used by each role.

The cache is a JSON file mapping role names to inbox records, so repeated
runs reuse the same MailSlurp inboxes instead of creating new ones. The file
is read and rewritten without locking.
"""

import json
import logging
from pathlib import Path
from typing import Mapping, Optional

from pydantic import ValidationError

from ..exceptions import MailApiError, MailboxSetupError, MissingConfigError
from ..mail import InboxRecord, MailClient
from ..roles import Role

logger = logging.getLogger(__name__)

INBOX_CACHE_FILE = "inboxes.json"

INBOX_ENV_VARS = {
    Role.MAIN: "MAILSLURP_MAIN_USER_INBOX_NAME",
    Role.TEST: "MAILSLURP_TEST_USER_INBOX_NAME",
    Role.ADMIN: "MAILSLURP_ADMIN_INBOX_NAME",
}


class InboxCache:
    """Resolves and remembers the inbox record of each role."""

    def __init__(
        self,
        path: Path,
        mail: MailClient,
        inbox_names: Mapping[Role, str],
    ):
        self.path = Path(path)
        self.mail = mail
        self.inbox_names = dict(inbox_names)

    def is_configured(self, role: Role) -> bool:
        """Whether an inbox name is known for the role."""
        return role in self.inbox_names

    def load(self) -> dict[str, InboxRecord]:
        """Read all cached records; a missing or empty file is an empty cache."""
        if not self.path.exists():
            return {}

        raw = self.path.read_text(encoding="utf-8").strip()
        if not raw:
            return {}

        try:
            data = json.loads(raw)
            return {
                key: InboxRecord.model_validate(value)
                for key, value in data.items()
            }
        except (json.JSONDecodeError, AttributeError, ValidationError) as e:
            logger.warning("Ignoring unreadable inbox cache %s: %s", self.path, e)
            return {}

    def save(self, records: Mapping[str, InboxRecord]) -> None:
        """Write all records, creating the cache directory on demand."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            key: record.model_dump(by_alias=True)
            for key, record in records.items()
        }
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, role: Role) -> Optional[InboxRecord]:
        """Cached record for the role, without touching the mail API."""
        return self.load().get(role.value)

    def ensure(self, role: Role) -> InboxRecord:
        """
        Return the role's inbox, fetching or creating it on first use.

        Lookup by name always happens before creation, so calling this
        repeatedly never creates a second inbox for the same name.

        Raises:
            MissingConfigError: If no inbox name is configured for the role.
            MailboxSetupError: If the mail API cannot list or create inboxes.
        """
        records = self.load()
        cached = records.get(role.value)
        if cached is not None:
            return cached

        name = self.inbox_names.get(role)
        if not name:
            raise MissingConfigError(INBOX_ENV_VARS[role])

        try:
            inbox = self.mail.find_inbox_by_name(name)
            if inbox is None:
                logger.info("No inbox named %s yet, creating it", name)
                inbox = self.mail.create_inbox(name)
        except MailApiError as e:
            raise MailboxSetupError(name, reason=str(e)) from e

        records[role.value] = inbox
        self.save(records)
        logger.info("Using inbox %s for role %s", inbox.email_address, role.value)
        return inbox
