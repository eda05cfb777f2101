"""
Playwright client that drives the visitor permit form.

The client receives an ordered list of FormField entries (selector -> value)
and runs one atomic request:
launch -> navigate -> wait for the form -> type every field -> submit -> capture -> close

Nothing is retried. The first failing step aborts the rest of the sequence.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
    Error as PlaywrightError
)

from .capture import capture_content_screenshot
from .config import PermitRunnerConfig
from .errors import FormAutomationError
from .form_fields import input_selector
from .logging_config import log_form_action
from .models import FormField

logger = logging.getLogger(__name__)


class PermitFormClient:
    """
    Atomic permit submission client.

    Each request is self-contained:
    1. Launch browser
    2. Navigate and fill the form
    3. Submit and capture the result
    4. Close browser (always, even on failure)
    """

    def __init__(self, config: PermitRunnerConfig):
        """
        Initialize the client with configuration.

        Args:
            config: PermitRunnerConfig with browser and form settings
        """
        self.config = config
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def submit_permit_request(self, fields: List[FormField]) -> Dict[str, Any]:
        """
        Fill and submit the permit form, then capture the page.

        Args:
            fields: Ordered fields to type (resident first, then visitor)

        Returns:
            {
                'screenshot': b'...PNG bytes...',
                'fields_filled': 22,
                'page_url': 'https://...',
                'execution_time_ms': 8500
            }

        Raises:
            FormAutomationError: Launch, navigation, wait, typing or submit failed
            CaptureError: The screenshot could not be taken
        """
        start_time = time.time()

        try:
            logger.info("=" * 70)
            logger.info(f"Starting permit request: {self.config.form_url}")
            logger.info(f"   Fields: {len(fields)}")
            logger.info("=" * 70)

            await self._launch_browser()

            await self.navigate(self.config.form_url)
            await self.wait_until_visible(input_selector(self.config.ready_field))
            await self._pause(self.config.settle_delay_ms)

            fields_filled = await self.fill_form(fields)

            screenshot = None
            if self.config.screenshot_before_submit:
                screenshot = await self.capture()

            await self.submit(self.config.form_name)
            await self._pause(self.config.submit_delay_ms)

            if screenshot is None:
                screenshot = await self.capture()

            execution_time_ms = int((time.time() - start_time) * 1000)
            logger.info(f"✓ Permit request completed in {execution_time_ms}ms")

            return {
                'screenshot': screenshot,
                'fields_filled': fields_filled,
                'page_url': self.page.url,
                'execution_time_ms': execution_time_ms
            }

        finally:
            await self._close_browser()

    async def _launch_browser(self):
        """Launch the configured browser engine and open a page."""
        try:
            self.playwright = await async_playwright().start()

            if self.config.browser_type == "webkit":
                browser_launcher = self.playwright.webkit
            elif self.config.browser_type == "firefox":
                browser_launcher = self.playwright.firefox
            else:
                browser_launcher = self.playwright.chromium

            self.browser = await browser_launcher.launch(
                headless=self.config.headless,
                slow_mo=self.config.slow_mo,
                args=self.config.browser_args
            )

            self.context = await self.browser.new_context(viewport=self.config.viewport_size)
            self.page = await self.context.new_page()

        except PlaywrightError as e:
            logger.error(f"✗ Browser launch failed: {e}")
            raise FormAutomationError(f"failed to launch {self.config.browser_type}: {e}") from e

        logger.info(
            f"Browser launched: {self.config.browser_type} "
            f"(headless={self.config.headless}, viewport={self.config.viewport_width}x{self.config.viewport_height})"
        )

    async def navigate(self, url: str):
        """Go to `url` and wait for the load event."""
        try:
            await self.page.goto(url, wait_until='load', timeout=self.config.navigation_timeout)
        except PlaywrightError as e:
            log_form_action("navigate", url, success=False, logger=logger)
            raise FormAutomationError(f"failed to navigate to {url}: {e}") from e
        log_form_action("navigate", url, logger=logger)

    async def wait_until_visible(self, selector: str):
        """Block until the element is visible, bounded by element_timeout."""
        try:
            await self.page.locator(selector).wait_for(
                state='visible',
                timeout=self.config.element_timeout
            )
        except PlaywrightError as e:
            log_form_action("wait_visible", selector, success=False, logger=logger)
            raise FormAutomationError(f"element {selector} did not become visible: {e}") from e
        log_form_action("wait_visible", selector, logger=logger)

    async def send_text(self, selector: str, value: str):
        """Type `value` key by key into the element."""
        try:
            await self.page.locator(selector).press_sequentially(
                value,
                timeout=self.config.element_timeout
            )
        except PlaywrightError as e:
            log_form_action("type", selector, success=False, logger=logger)
            raise FormAutomationError(f"failed to type into {selector}: {e}") from e
        logger.debug(f"    Typed {selector} = {value}")

    async def fill_form(self, fields: List[FormField]) -> int:
        """
        Type every field in order.

        Returns:
            Number of fields typed
        """
        for field in fields:
            await self.send_text(field.selector, field.value)
        log_form_action("fill", f"{len(fields)} fields", logger=logger)
        return len(fields)

    async def submit(self, form_name: str):
        """Submit the form whose name attribute is `form_name`."""
        selector = f'form[name="{form_name}"]'
        try:
            await self.page.locator(selector).evaluate(
                "form => form.submit()",
                timeout=self.config.element_timeout
            )
        except PlaywrightError as e:
            log_form_action("submit", selector, success=False, logger=logger)
            raise FormAutomationError(f"failed to submit form {form_name}: {e}") from e
        log_form_action("submit", selector, logger=logger)

    async def _pause(self, delay_ms: int):
        """Fixed wait on the page. Fails if the page or browser was closed meanwhile."""
        try:
            await self.page.wait_for_timeout(delay_ms)
        except PlaywrightError as e:
            log_form_action("pause", f"{delay_ms}ms", success=False, logger=logger)
            raise FormAutomationError(f"page closed during {delay_ms}ms pause: {e}") from e

    async def capture(self) -> bytes:
        """Content-sized PNG of the current page."""
        return await capture_content_screenshot(
            self.page,
            self.config.screenshot_quality,
            self.config.browser_type
        )

    async def _close_browser(self):
        """
        Close browser and clean up resources.

        Always called in the finally block of submit_permit_request.
        """
        try:
            if self.browser:
                try:
                    await self.browser.close()
                    logger.info("Browser closed")
                except PlaywrightError as e:
                    logger.warning(f"Error closing browser: {e}")

            if self.playwright:
                try:
                    await self.playwright.stop()
                except PlaywrightError as e:
                    logger.warning(f"Error stopping Playwright: {e}")

        finally:
            self.browser = None
            self.context = None
            self.page = None
            self.playwright = None
