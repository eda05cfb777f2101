"""
PermitRunner - submits the Park It Right visitor parking permit form.

Reads a resident and a visitor JSON record, validates them, fills the permit
form with Playwright and saves a screenshot of the result.
"""

__version__ = "1.0.0"

from .config import get_config, PermitRunnerConfig
from .errors import (
    PermitRunnerError,
    RecordIOError,
    RecordDecodeError,
    MissingFieldError,
    FormAutomationError,
    CaptureError
)
from .models import Resident, Visitor, Vehicle, FormField
from .runner import run_permit_request

__all__ = [
    "get_config",
    "PermitRunnerConfig",
    "PermitRunnerError",
    "RecordIOError",
    "RecordDecodeError",
    "MissingFieldError",
    "FormAutomationError",
    "CaptureError",
    "Resident",
    "Visitor",
    "Vehicle",
    "FormField",
    "run_permit_request"
]
