"""
Pytest configuration and fixtures for PermitRunner tests.

Provides a session-wide test config, sample records, and fake Playwright
objects so the form driver and capture code run without a browser.
"""

import base64
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest
from playwright.async_api import Error as PlaywrightError

from permitrunner.config import get_test_config, set_config
from permitrunner.logging_config import setup_logging

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture(scope='session', autouse=True)
def test_config(tmp_path_factory):
    """
    Set up test configuration for the entire test session.

    Screenshots and logs go to a temporary directory; delays are zeroed.
    """
    test_output_dir = tmp_path_factory.mktemp('test_output')
    config = get_test_config(temp_dir=test_output_dir)
    config._create_directories()
    set_config(config)

    log_file = config.get_log_path('test_permitrunner.log')
    setup_logging(level='DEBUG', use_colors=False, log_file=log_file)

    logger = logging.getLogger('permitrunner.test')
    logger.info("=" * 80)
    logger.info("PermitRunner Test Session Started")
    logger.info("=" * 80)
    logger.info(f"Test output directory: {test_output_dir}")

    yield config

    logger.info("=" * 80)
    logger.info("PermitRunner Test Session Complete")
    logger.info("=" * 80)


@pytest.fixture
def resident_data() -> Dict[str, Any]:
    return {
        "property_name": "Maple Court",
        "first_name": "Ana",
        "last_name": "Ruiz",
        "street_address": "100 Maple Ave",
        "apartment_number": "4B",
        "city": "Austin",
        "state": "TX",
        "zipcode": "78701",
    }


@pytest.fixture
def visitor_data() -> Dict[str, Any]:
    return {
        "first_name": "Sam",
        "last_name": "Lee",
        "email_address": "sam@example.com",
        "phone_number": "512-555-0100",
        "street_address": "9 Oak St",
        "apartment_number": "",
        "city": "Round Rock",
        "zipcode": "78664",
        "vehicle": {
            "year": "2019",
            "make": "Honda",
            "model": "Civic",
            "color": "Blue",
            "licence_plate_number": "ABC1234",
            "license_plate_state_issuer": "TX",
        },
    }


@pytest.fixture
def write_json(tmp_path):
    """Write a dict (or raw text) to a file under tmp_path and return its path."""
    def _write(name: str, content) -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding='utf-8')
        else:
            path.write_text(json.dumps(content), encoding='utf-8')
        return path
    return _write


class FakeLocator:
    """Records calls made through page.locator(selector)."""

    def __init__(self, page: 'FakePage', selector: str):
        self.page = page
        self.selector = selector

    def _maybe_fail(self, action: str):
        if (action, self.selector) in self.page.failures:
            raise PlaywrightError(f"{action} failed on {self.selector}")

    async def wait_for(self, state: str = 'visible', timeout: Optional[float] = None):
        self._maybe_fail('wait_for')
        self.page.calls.append(('wait_for', self.selector, state))

    async def press_sequentially(self, text: str, delay=None, no_wait_after=None, timeout=None):
        self._maybe_fail('type')
        self.page.calls.append(('type', self.selector, text))

    async def evaluate(self, expression: str, arg=None, timeout=None):
        self._maybe_fail('evaluate')
        self.page.calls.append(('evaluate', self.selector, expression))


class FakeCDPSession:
    """Answers the three CDP commands used for capture."""

    def __init__(self, content_size: Dict[str, float], fail_on: Optional[str] = None):
        self.content_size = content_size
        self.fail_on = fail_on
        self.sent: List[Tuple[str, Optional[dict]]] = []
        self.detached = False

    async def send(self, method: str, params: Optional[dict] = None):
        self.sent.append((method, params))
        if method == self.fail_on:
            raise PlaywrightError(f"{method} failed")
        if method == "Page.getLayoutMetrics":
            return {"cssContentSize": dict(self.content_size)}
        if method == "Page.captureScreenshot":
            return {"data": base64.b64encode(PNG_BYTES).decode('ascii')}
        return {}

    async def detach(self):
        self.detached = True


class FakeContext:
    def __init__(self, cdp: FakeCDPSession):
        self.cdp = cdp

    async def new_cdp_session(self, page):
        return self.cdp


class FakePage:
    """
    Minimal stand-in for playwright.async_api.Page.

    `failures` holds (action, selector) pairs that should raise.
    """

    def __init__(self, content_size: Optional[Dict[str, float]] = None, cdp_fail_on: Optional[str] = None):
        self.url = "about:blank"
        self.calls: List[Tuple] = []
        self.failures = set()
        self.goto_error: Optional[Exception] = None
        self.sleep_error: Optional[Exception] = None
        self.content_size = content_size or {"x": 0, "y": 0, "width": 1199.2, "height": 2400.5}
        self.cdp = FakeCDPSession(self.content_size, fail_on=cdp_fail_on)
        self.context = FakeContext(self.cdp)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    async def goto(self, url: str, wait_until=None, timeout=None):
        if self.goto_error:
            raise self.goto_error
        self.calls.append(('goto', url))
        self.url = url

    async def wait_for_timeout(self, timeout: float):
        if self.sleep_error:
            raise self.sleep_error
        self.calls.append(('sleep', timeout))

    async def evaluate(self, expression: str, arg=None):
        self.calls.append(('page_evaluate', expression))
        return {"width": self.content_size["width"], "height": self.content_size["height"]}

    async def set_viewport_size(self, viewport_size: Dict[str, int]):
        self.calls.append(('set_viewport_size', viewport_size))

    async def screenshot(self, **kwargs):
        self.calls.append(('screenshot', kwargs))
        return PNG_BYTES


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
