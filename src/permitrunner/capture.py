"""
Content-sized screenshot of the permit page.

Capture sequence:
1. Measure the page content box, rounded up to whole pixels
2. Override the device metrics to exactly that size (portrait, angle 0)
3. Capture a PNG clipped to the content box

Chromium goes through a CDP session. Firefox and WebKit have no CDP, so the
content size comes from the document's scroll size and Playwright's own
clip screenshot is used.
"""

import base64
import logging
import math
import re
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from playwright.async_api import Page, Error as PlaywrightError

from .errors import CaptureError
from .models import Visitor

logger = logging.getLogger(__name__)

_SCROLL_SIZE_JS = """() => ({
    width: Math.max(document.documentElement.scrollWidth, document.body ? document.body.scrollWidth : 0),
    height: Math.max(document.documentElement.scrollHeight, document.body ? document.body.scrollHeight : 0)
})"""


def _filename_part(name: str) -> str:
    """Keep a name inside the output directory: no separators, no leading dots."""
    part = re.sub(r"[\\/\x00]", "_", name)
    return part.lstrip(".") or "_"


def screenshot_filename(visitor: Visitor, on_date: Optional[date] = None) -> str:
    """
    Name of the registration screenshot.

    Args:
        visitor: The registered visitor
        on_date: Date stamped in the name (default: today)

    Returns:
        '{first}-{last}-{YYYYMMDD}-registration.png'
    """
    if on_date is None:
        on_date = date.today()
    first = _filename_part(visitor.first_name)
    last = _filename_part(visitor.last_name)
    return f"{first}-{last}-{on_date.strftime('%Y%m%d')}-registration.png"


def _content_box(content_size: Dict[str, Any]) -> Dict[str, Any]:
    """Round a CDP content size up to whole pixels."""
    return {
        'x': content_size.get('x', 0),
        'y': content_size.get('y', 0),
        'width': int(math.ceil(content_size['width'])),
        'height': int(math.ceil(content_size['height'])),
    }


async def _capture_with_cdp(page: Page, quality: int) -> bytes:
    cdp = await page.context.new_cdp_session(page)
    try:
        metrics = await cdp.send("Page.getLayoutMetrics")
        content_size = metrics.get("cssContentSize") or metrics["contentSize"]
        box = _content_box(content_size)
        logger.debug(f"  Content size: {box['width']}x{box['height']}")

        await cdp.send("Emulation.setDeviceMetricsOverride", {
            "width": box['width'],
            "height": box['height'],
            "deviceScaleFactor": 1,
            "mobile": False,
            "screenOrientation": {"type": "portraitPrimary", "angle": 0},
        })

        result = await cdp.send("Page.captureScreenshot", {
            "format": "png",
            "quality": quality,
            "clip": {
                "x": box['x'],
                "y": box['y'],
                "width": content_size['width'],
                "height": content_size['height'],
                "scale": 1,
            },
        })
        return base64.b64decode(result["data"])

    finally:
        try:
            await cdp.detach()
        except PlaywrightError as e:
            logger.warning(f"Could not detach CDP session: {e}")


async def _capture_with_viewport(page: Page) -> bytes:
    size = await page.evaluate(_SCROLL_SIZE_JS)
    box = _content_box(size)
    logger.debug(f"  Content size: {box['width']}x{box['height']}")

    await page.set_viewport_size({'width': box['width'], 'height': box['height']})

    # Playwright rejects a quality setting for PNG
    return await page.screenshot(
        type='png',
        clip={'x': 0, 'y': 0, 'width': box['width'], 'height': box['height']}
    )


async def capture_content_screenshot(page: Page, quality: int, browser_type: str = "chromium") -> bytes:
    """
    Capture a PNG of the whole page content.

    Args:
        page: Page to capture
        quality: Quality passed to the capture call
        browser_type: Engine the page belongs to

    Returns:
        PNG bytes

    Raises:
        CaptureError: If measuring, resizing or capturing fails
    """
    try:
        if browser_type == "chromium":
            data = await _capture_with_cdp(page, quality)
        else:
            data = await _capture_with_viewport(page)
    except (PlaywrightError, KeyError, TypeError, ValueError) as e:
        logger.error(f"✗ Screenshot failed: {type(e).__name__}: {e}")
        raise CaptureError(f"failed to capture screenshot: {e}") from e

    logger.info(f"✓ Screenshot captured ({len(data) / 1024:.1f}KB)")
    return data


def write_screenshot(data: bytes, path: Path) -> Path:
    """
    Write screenshot bytes to disk.

    Raises:
        CaptureError: If the file cannot be written
    """
    try:
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        logger.error(f"✗ Could not write screenshot {path}: {e}")
        raise CaptureError(f"failed to write screenshot {path}: {e}") from e

    logger.info(f"✓ Screenshot saved: {path}")
    return path
