"""
Browser launch and context presets for the E2E fixtures and the CLI.

Usage:
    pytest -m e2e --browser chromium
    pytest -m e2e --browser firefox
    pytest -m e2e --browser webkit
    pytest -m e2e --headed
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

# Test results directory
TEST_RESULTS_DIR = Path("test-results")

# Screenshots directory
SCREENSHOTS_DIR = TEST_RESULTS_DIR / "screenshots"


# =============================================================================
# Browser Configuration
# =============================================================================

@dataclass
class BrowserConfig:
    """Configuration for a browser instance."""

    # Browser name: chromium, firefox, webkit
    name: str = "chromium"

    # Browser channel: chrome, msedge
    channel: Optional[str] = None

    # Viewport dimensions
    viewport_width: int = 1280
    viewport_height: int = 720

    # Locale for the browser
    locale: str = "en-US"

    # Permissions to grant
    permissions: List[str] = field(default_factory=list)

    # Color scheme: light, dark, no-preference
    color_scheme: Optional[str] = None

    # Accept downloads (PDF export)
    accept_downloads: bool = True

    def to_launch_options(self, headless: bool = True, slow_mo: int = 0) -> Dict[str, Any]:
        """Convert to Playwright browser launch options."""
        options: Dict[str, Any] = {
            "headless": headless,
            "slow_mo": slow_mo,
        }
        if self.channel:
            options["channel"] = self.channel
        return options

    def to_context_options(self, base_url: Optional[str] = None) -> Dict[str, Any]:
        """Convert to Playwright browser context options."""
        options: Dict[str, Any] = {
            "viewport": {
                "width": self.viewport_width,
                "height": self.viewport_height,
            },
            "locale": self.locale,
            "accept_downloads": self.accept_downloads,
        }
        if base_url:
            options["base_url"] = base_url
        if self.permissions:
            options["permissions"] = self.permissions
        if self.color_scheme:
            options["color_scheme"] = self.color_scheme
        return options


# =============================================================================
# Predefined Browser Configurations
# =============================================================================

# Clipboard access is only grantable in Chromium
CHROMIUM_CONFIG = BrowserConfig(
    name="chromium", permissions=["clipboard-read", "clipboard-write"]
)
FIREFOX_CONFIG = BrowserConfig(name="firefox")
WEBKIT_CONFIG = BrowserConfig(name="webkit")

CHROME_CONFIG = BrowserConfig(
    name="chromium", channel="chrome",
    permissions=["clipboard-read", "clipboard-write"],
)


def get_browser_config(browser_name: str) -> BrowserConfig:
    """
    Get browser configuration by name.

    Args:
        browser_name: Name of the browser (chromium, firefox, webkit, chrome)

    Returns:
        BrowserConfig instance for the specified browser
    """
    configs = {
        "chromium": CHROMIUM_CONFIG,
        "firefox": FIREFOX_CONFIG,
        "webkit": WEBKIT_CONFIG,
        "chrome": CHROME_CONFIG,
    }
    return configs.get(browser_name.lower(), CHROMIUM_CONFIG)


def get_screenshot_path(test_name: str) -> Path:
    """
    Get the screenshot path for a test.

    Args:
        test_name: Name of the test

    Returns:
        Path where screenshot should be saved
    """
    # Sanitize test name for filesystem
    safe_name = "".join(c if c.isalnum() or c in "-_" else "_" for c in test_name)
    return SCREENSHOTS_DIR / f"{safe_name}.png"
