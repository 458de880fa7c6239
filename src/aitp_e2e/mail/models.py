"""
Pydantic models for the MailSlurp API payloads the suite consumes.

Only the fields the session bootstrap reads are declared; everything else
the API returns is ignored.
"""

from datetime import datetime
from email.utils import parseaddr
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MailSchema(BaseModel):
    """Base schema mapping camelCase API fields to snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class InboxRecord(MailSchema):
    """A role's mailbox: id, address and display name."""

    id: str
    email_address: str
    name: Optional[str] = None


class EmailPreview(MailSchema):
    """An entry of an inbox listing."""

    id: str
    inbox_id: Optional[str] = None
    to: list[str] = Field(default_factory=list)
    subject: Optional[str] = None
    created_at: Optional[datetime] = None

    def recipients(self) -> list[str]:
        """Bare, lower-cased recipient addresses."""
        return [parseaddr(value)[1].lower() for value in self.to if value]


class Email(EmailPreview):
    """A full message including its body."""

    body: Optional[str] = None
