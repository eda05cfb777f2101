"""
Permit request runner.

Runs the phases of one permit request in order:
1. Load and normalize the resident and visitor files
2. Validate both records (resident first)
3. Map records to the form's named inputs
4. Fill, submit and capture with Playwright
5. Write the registration screenshot

Every phase raises a PermitRunnerError subclass. This module turns those
into a result dict; whether to exit is the caller's decision.
"""

import logging
import time
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .capture import screenshot_filename, write_screenshot
from .config import PermitRunnerConfig, get_config
from .errors import PermitRunnerError
from .form_fields import build_form_fields
from .playwright_client import PermitFormClient
from .record_loader import load_resident, load_visitor
from .validators import validate_records

logger = logging.getLogger(__name__)


async def run_permit_request(
    resident_path: Union[str, Path],
    visitor_path: Union[str, Path],
    config: Optional[PermitRunnerConfig] = None,
    client: Optional[PermitFormClient] = None,
    today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Submit one visitor permit request.

    Args:
        resident_path: Resident JSON file
        visitor_path: Visitor JSON file
        config: Configuration (global config if None)
        client: Form client (a new PermitFormClient if None)
        today: Date used in the screenshot name (today if None)

    Returns:
        {
            'success': True,
            'screenshot_path': '/.../Jane-Doe-20240101-registration.png',
            'fields_filled': 22,
            'execution_time_ms': 8500,
            'timestamp': 1700000000.0
        }

        OR on failure:
        {
            'success': False,
            'error': 'resident first name is required',
            'error_type': 'MissingFieldError',
            'stage': 'validate',
            ...
        }
    """
    start_time = time.time()
    config = config or get_config()

    try:
        resident = load_resident(resident_path)
        visitor = load_visitor(visitor_path)

        validate_records(resident, visitor)

        fields = build_form_fields(resident, visitor)

        client = client or PermitFormClient(config)
        result = await client.submit_permit_request(fields)

        filename = screenshot_filename(visitor, today)
        screenshot_path = write_screenshot(result['screenshot'], config.get_screenshot_path(filename))

        execution_time_ms = int((time.time() - start_time) * 1000)

        return {
            'success': True,
            'screenshot_path': str(screenshot_path),
            'fields_filled': result['fields_filled'],
            'execution_time_ms': execution_time_ms,
            'timestamp': time.time()
        }

    except PermitRunnerError as e:
        logger.error(f"✗ Permit request failed during {e.stage}: {e}")

        return {
            'success': False,
            'error': str(e),
            'error_type': type(e).__name__,
            'stage': e.stage,
            'execution_time_ms': int((time.time() - start_time) * 1000),
            'timestamp': time.time()
        }
