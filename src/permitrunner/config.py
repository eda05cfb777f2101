"""
Configuration management for PermitRunner.

Loads configuration from environment variables (PERMITRUNNER_ prefix) and
an optional .env file, with defaults that reproduce a plain run against the
Park It Right visitor permit form.
"""

import os
from pathlib import Path
from typing import Optional
from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings

PERMIT_REQUEST_URL = "https://www.parkitrightpermit.com/park-it-right-contact-visitor-permit-request/"


class PermitRunnerConfig(BaseSettings):
    """Configuration for PermitRunner."""

    # Target form
    form_url: str = Field(
        default=PERMIT_REQUEST_URL,
        description="Permit request page"
    )

    form_name: str = Field(
        default="visitors",
        description="name attribute of the form that is submitted"
    )

    ready_field: str = Field(
        default="property-name",
        description="Input name that must be visible before typing starts"
    )

    # Browser Configuration
    browser_type: str = Field(
        default="chromium",
        description="Browser engine: 'chromium', 'firefox', or 'webkit'. Content-sized capture uses CDP on chromium."
    )

    headless: bool = Field(
        default=False,
        description="Run browser in headless mode"
    )

    slow_mo: int = Field(
        default=0,
        ge=0,
        le=5000,
        description="Slow down browser actions by N milliseconds (for debugging)"
    )

    # Browser Viewport (before the capture override)
    viewport_width: int = Field(
        default=1280,
        ge=800,
        le=3840,
        description="Browser viewport width"
    )

    viewport_height: int = Field(
        default=1024,
        ge=600,
        le=2160,
        description="Browser viewport height"
    )

    # Timeouts (in milliseconds)
    navigation_timeout: int = Field(
        default=60000,
        ge=5000,
        le=180000,
        description="Navigation timeout in milliseconds"
    )

    element_timeout: int = Field(
        default=30000,
        ge=1000,
        le=120000,
        description="Timeout waiting for the ready field to become visible"
    )

    # Fixed delays (in milliseconds)
    settle_delay_ms: int = Field(
        default=2000,
        ge=0,
        le=60000,
        description="Pause after the ready field is visible, before typing"
    )

    submit_delay_ms: int = Field(
        default=2000,
        ge=0,
        le=60000,
        description="Pause after submitting, before capture"
    )

    # Screenshot Configuration
    screenshot_quality: int = Field(
        default=90,
        ge=1,
        le=100,
        description="Quality passed to the capture call"
    )

    screenshot_before_submit: bool = Field(
        default=False,
        description="Capture the filled form before submitting instead of the page after submitting"
    )

    # Paths
    output_dir: Optional[Path] = Field(
        default=None,
        description="Directory the registration screenshot is written to (default: cwd)"
    )

    log_dir: Optional[Path] = Field(
        default=None,
        description="When set, also log to permitrunner.log in this directory"
    )

    log_level: str = Field(
        default="INFO",
        description="Python logging level"
    )

    model_config = ConfigDict(
        env_prefix="PERMITRUNNER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def __init__(self, **kwargs):
        """Initialize configuration and fill in default paths."""
        super().__init__(**kwargs)

        if self.output_dir is None:
            self.output_dir = Path.cwd()

    def _log_config(self):
        """Log configuration settings for debugging."""
        import logging
        import json
        logger = logging.getLogger(__name__)

        config_dict = {}
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            if isinstance(value, Path):
                config_dict[field_name] = str(value)
            else:
                config_dict[field_name] = value

        logger.debug("=" * 60)
        logger.debug("PermitRunner Configuration")
        logger.debug("=" * 60)
        logger.debug(json.dumps(config_dict, indent=2))
        logger.debug("=" * 60)

    def _create_directories(self):
        """Create output and log directories if they don't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def browser_args(self) -> list:
        """
        Get Playwright browser launch arguments (only used for Chromium).

        Returns:
            List of browser arguments
        """
        args = []

        if self.headless and self.browser_type == "chromium":
            args.extend([
                '--disable-gpu',
                '--no-sandbox',
                '--disable-dev-shm-usage',
            ])

        return args

    @property
    def viewport_size(self) -> dict:
        """
        Get viewport size as dictionary.

        Returns:
            Dictionary with width and height
        """
        return {
            'width': self.viewport_width,
            'height': self.viewport_height
        }

    def get_log_path(self, log_name: str = "permitrunner.log") -> Optional[Path]:
        """
        Get full path for the log file, or None when file logging is off.

        Args:
            log_name: Name of the log file
        """
        if self.log_dir is None:
            return None
        return self.log_dir / log_name

    def get_screenshot_path(self, filename: str) -> Path:
        """
        Get full path for a screenshot file.

        Args:
            filename: Name of the screenshot file

        Returns:
            Path to the screenshot file
        """
        return self.output_dir / filename


# Global configuration instance
_config: Optional[PermitRunnerConfig] = None


def get_config() -> PermitRunnerConfig:
    """
    Get the global configuration instance.

    Returns:
        PermitRunnerConfig instance
    """
    global _config
    if _config is None:
        _config = PermitRunnerConfig()
    return _config


def reload_config() -> PermitRunnerConfig:
    """
    Reload configuration from environment.

    Returns:
        New PermitRunnerConfig instance
    """
    global _config
    _config = PermitRunnerConfig()
    return _config


def set_config(config: PermitRunnerConfig):
    """
    Set the global configuration instance.

    Args:
        config: PermitRunnerConfig instance to set
    """
    global _config
    _config = config


def get_dev_config() -> PermitRunnerConfig:
    """
    Get development configuration (visible browser, slow motion).

    Returns:
        PermitRunnerConfig configured for development
    """
    return PermitRunnerConfig(
        browser_type="chromium",
        headless=False,
        slow_mo=250,
        log_level="DEBUG"
    )


def get_test_config(temp_dir: Optional[Path] = None) -> PermitRunnerConfig:
    """
    Get test configuration.

    Loads settings from a .env file first, then lets environment variables
    choose the browser:
      - PERMITRUNNER_BROWSER_TYPE=chromium|firefox|webkit
      - PERMITRUNNER_HEADLESS=true|false

    Delays are zeroed so unit tests with fake pages don't sleep.

    Args:
        temp_dir: Directory for screenshots and logs (uses cwd if None)

    Returns:
        PermitRunnerConfig configured for testing
    """
    from dotenv import load_dotenv
    env_file = Path.cwd() / '.env'
    if env_file.exists():
        load_dotenv(env_file)

    browser_type = os.getenv('PERMITRUNNER_BROWSER_TYPE', 'chromium')
    headless_env = os.getenv('PERMITRUNNER_HEADLESS', 'true').lower()
    headless = headless_env in ('true', '1', 'yes')

    base_dir = temp_dir if temp_dir is not None else Path.cwd()

    return PermitRunnerConfig(
        browser_type=browser_type,
        headless=headless,
        slow_mo=0,
        settle_delay_ms=0,
        submit_delay_ms=0,
        output_dir=base_dir / "screenshots",
        log_dir=base_dir / "logs",
        log_level="DEBUG"
    )
