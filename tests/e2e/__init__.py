"""
AITP E2E Tests Package.

This package contains end-to-end tests for the AI Thought Partner web app
using Playwright's async API with pytest-asyncio.

Test Modules:
    - test_signin: Sign-in form, email-code login, sign-out, guest access
    - test_chat_ui: Chat controls, attachments, privacy, guest limit
    - test_sidebar: Navigation, settings menu, chat list, guest sidebar
    - test_profile: My Account page and calendar integrations
    - test_stratsync: StratSync dashboard tabs
    - test_response_time: Long-running response time runs (regression)

Sessions:
    The first run signs the main and test users in through an emailed code
    and saves their sessions under tests/storage; later runs reuse them.
    The admin session is recorded by hand with `aitp-e2e save-admin-session`.

Running Tests:
    # Run the E2E suite
    pytest -m e2e

    # Run specific test file
    pytest -m e2e tests/e2e/test_signin.py

    # Run with specific browser
    pytest -m e2e --browser firefox

    # Run in headed mode (visible browser)
    pytest -m e2e --headed

    # Run the regression runs
    pytest -m regression

Environment Variables:
    BASE_URL: Application under test
    AI_LEADERSHIP_URL: Marketing site for legal page links
    MAILSLURP_API_KEY: MailSlurp API key
    MAILSLURP_MAIN_USER_INBOX_NAME: Inbox name of the main user
    MAILSLURP_TEST_USER_INBOX_NAME: Inbox name of the test user
    E2E_SLOW_MO: Slow motion delay in ms (default: 0)
    E2E_TIMEOUT: Default timeout in ms (default: 30000)
    E2E_STALE_SESSION_POLICY: trust_cache or reauthenticate
"""
