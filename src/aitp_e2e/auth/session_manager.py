"""
Per-role session cache.

:class:`SessionCacheManager` decides whether a role needs a fresh email-code
login or can reuse a browser session saved by an earlier run, and remembers
which address each role resolved to. One instance lives for the whole test
process and is handed to fixtures explicitly.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from playwright.async_api import Browser, Page

from ..exceptions import MissingConfigError, SessionError
from ..mail import InboxRecord, MailClient
from ..pages import SidebarComponent
from ..roles import Role, StaleSessionPolicy
from .code_login import EmailCodeLogin
from .inbox_cache import INBOX_CACHE_FILE, INBOX_ENV_VARS, InboxCache

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


class IdentityReader(Protocol):
    """Reads the signed-in user's address from the UI."""

    async def read_current_user(self, timeout: float = 5000) -> Optional[str]: ...


class SessionCacheManager:
    """Restores or creates authenticated browser sessions per role."""

    def __init__(
        self,
        base_url: str,
        storage_dir: Path,
        inboxes: InboxCache,
        code_login: EmailCodeLogin,
        *,
        policy: StaleSessionPolicy = StaleSessionPolicy.TRUST_CACHE,
        identity_timeout: float = 5000,
        identity_reader_factory: Callable[[Page, str], IdentityReader] = SidebarComponent,
    ):
        self.base_url = base_url.rstrip("/")
        self.storage_dir = Path(storage_dir)
        self.inboxes = inboxes
        self.code_login = code_login
        self.policy = policy
        self.identity_timeout = identity_timeout
        self.identity_reader_factory = identity_reader_factory
        self._current_users: dict[Role, str] = {}

    @classmethod
    def from_settings(
        cls, settings: "Settings", mail: Optional[MailClient] = None
    ) -> "SessionCacheManager":
        """Build a manager and its collaborators from validated settings."""
        if mail is None:
            mail = MailClient(
                settings.mailslurp.api_key or "",
                api_url=settings.mailslurp.api_url,
                timeout=settings.mailslurp.request_timeout,
            )
        runner = settings.runner
        inboxes = InboxCache(
            runner.storage_dir / INBOX_CACHE_FILE,
            mail,
            settings.inbox_names(),
        )
        code_login = EmailCodeLogin(
            settings.base_url or "",
            mail,
            attempts=runner.login_poll_attempts,
            interval=runner.login_poll_interval,
            redirect_timeout=runner.redirect_timeout,
        )
        return cls(
            settings.base_url or "",
            runner.storage_dir,
            inboxes,
            code_login,
            policy=runner.stale_session_policy,
            identity_timeout=runner.identity_timeout,
        )

    # Current-user markers
    def current_user(self, role: Role) -> str:
        """
        Address the role last signed in as in this process.

        Raises:
            SessionError: If the role has not been logged in yet.
        """
        try:
            return self._current_users[role]
        except KeyError:
            raise SessionError(f"No user resolved yet for role '{role.value}'") from None

    def _record(self, role: Role, identity: str) -> str:
        self._current_users[role] = identity
        logger.info("Role %s is %s", role.value, identity)
        return identity

    # Persisted sessions
    def storage_state_path(self, role: Role) -> Path:
        """File holding the role's serialized browser session."""
        return self.storage_dir / role.storage_state_name

    def forget(self, role: Role) -> None:
        """Delete the role's persisted session, if any."""
        self.storage_state_path(role).unlink(missing_ok=True)

    def _read_state(self, path: Path) -> Optional[dict[str, Any]]:
        try:
            state = json.loads(path.read_text(encoding="utf-8"))
            state["cookies"] = list(state["cookies"])
            state["origins"] = list(state.get("origins") or [])
            return state
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Session file %s is unreadable: %s", path, e)
            return None

    async def _restore_session(self, page: Page, path: Path) -> Optional[str]:
        """Load saved cookies, open the app and read who is signed in."""
        state = self._read_state(path)
        if state is None:
            return None
        await page.context.add_cookies(state["cookies"])
        await page.goto(f"{self.base_url}/")
        reader = self.identity_reader_factory(page, self.base_url)
        return await reader.read_current_user(timeout=self.identity_timeout)

    async def _ensure_inbox(self, role: Role) -> Optional[InboxRecord]:
        if not self.inboxes.is_configured(role):
            return None
        return await asyncio.to_thread(self.inboxes.ensure, role)

    async def login_as_role(self, role: Role, page: Page) -> str:
        """
        Make sure ``page``'s context is signed in as ``role``.

        Reuses the role's persisted session when one exists; otherwise runs
        the email-code login and persists the resulting session.

        Args:
            role: Logical user to sign in as.
            page: Page whose context receives the session.

        Returns:
            The address the role is signed in as.

        Raises:
            MailboxSetupError: If the role's inbox cannot be found or created.
            MissingConfigError: If a fresh login is needed but the role has
                no inbox configured.
            LoginError: If the email-code login fails.
        """
        inbox = await self._ensure_inbox(role)
        state_path = self.storage_state_path(role)

        if state_path.exists():
            identity = await self._restore_session(page, state_path)
            if identity:
                return self._record(role, identity)

            if self.policy is StaleSessionPolicy.TRUST_CACHE:
                if inbox is None:
                    raise SessionError(
                        f"Stored session for role '{role.value}' shows no "
                        "signed-in user and no inbox is configured to fall back on"
                    )
                logger.warning(
                    "Stored session for %s shows no signed-in user, assuming %s",
                    role.value, inbox.email_address,
                )
                return self._record(role, inbox.email_address)

            logger.warning(
                "Stored session for %s shows no signed-in user, signing in again",
                role.value,
            )
            self.forget(role)

        if inbox is None:
            raise MissingConfigError(INBOX_ENV_VARS[role])

        await page.context.clear_cookies()
        identity = await self.code_login.login(page, inbox)

        self.storage_dir.mkdir(parents=True, exist_ok=True)
        await page.context.storage_state(path=str(state_path))
        return self._record(role, identity)

    async def ensure_storage_state(
        self, role: Role, browser: Browser, **context_options: Any
    ) -> Path:
        """
        Sign ``role`` in within a throwaway context and save its session.

        The context starts from the role's saved state, so the rewritten
        file keeps its origins and picks up refreshed cookies.

        Args:
            role: Logical user.
            browser: Browser to open the context in.
            **context_options: Extra ``new_context`` options.

        Returns:
            Path of the saved storage state, ready for ``storage_state=``.
        """
        path = self.storage_state_path(role)
        saved = self._read_state(path) if path.exists() else None
        if saved is not None:
            context_options.setdefault("storage_state", saved)
        context = await browser.new_context(**context_options)
        try:
            page = await context.new_page()
            await self.login_as_role(role, page)
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            await context.storage_state(path=str(path))
        finally:
            await context.close()
        return path
