"""Version information for aitp-e2e."""

__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Release information
__title__ = "aitp-e2e"
__description__ = "End-to-end browser tests for the AI Thought Partner web app"
__license__ = "MIT"


def get_version() -> str:
    """Return the current version string."""
    return __version__
