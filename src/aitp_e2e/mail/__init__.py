"""MailSlurp client and payload models."""

from .client import DEFAULT_API_URL, MailClient
from .models import Email, EmailPreview, InboxRecord

__all__ = [
    "DEFAULT_API_URL",
    "Email",
    "EmailPreview",
    "InboxRecord",
    "MailClient",
]
