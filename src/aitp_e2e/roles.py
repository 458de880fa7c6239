"""Logical test identities and the policy applied to stale sessions."""

from enum import Enum


class Role(str, Enum):
    """A fixed logical user the suite can sign in as."""

    MAIN = "main"
    TEST = "test"
    ADMIN = "admin"

    @property
    def storage_state_name(self) -> str:
        """File name of the persisted browser session for this role."""
        if self is Role.ADMIN:
            return "storage-state-admin.json"
        return f"storage-state-{self.value}-user.json"


class StaleSessionPolicy(str, Enum):
    """What to do when a persisted session no longer shows a logged-in user."""

    # Keep the session and report the cached inbox address as the user
    TRUST_CACHE = "trust_cache"
    # Drop the session file and sign in again through the email code flow
    REAUTHENTICATE = "reauthenticate"
