"""
Session bootstrap: inbox cache, email-code login and per-role session cache.
"""

from .addresses import generate_email, tag_address, untag_address
from .code_login import (
    EmailCodeLogin,
    LoginStage,
    extract_verification_code,
    pick_message,
)
from .inbox_cache import InboxCache
from .retry import poll
from .session_manager import SessionCacheManager

__all__ = [
    "EmailCodeLogin",
    "InboxCache",
    "LoginStage",
    "SessionCacheManager",
    "extract_verification_code",
    "generate_email",
    "pick_message",
    "poll",
    "tag_address",
    "untag_address",
]
