"""aitp-e2e - End-to-end browser tests for the AI Thought Partner web app."""

from aitp_e2e.__version__ import (
    __description__,
    __license__,
    __title__,
    __version__,
    __version_info__,
    get_version,
)
from aitp_e2e.roles import Role, StaleSessionPolicy

__all__ = [
    "__version__",
    "__version_info__",
    "__title__",
    "__description__",
    "__license__",
    "get_version",
    "Role",
    "StaleSessionPolicy",
]
