"""
Error types for PermitRunner.

Every phase of a run raises one of these. The runner catches them and turns
them into a failure result; the CLI decides whether to exit.
"""

from typing import Optional


class PermitRunnerError(Exception):
    """Base class for all PermitRunner failures."""

    stage: str = "unknown"


class RecordIOError(PermitRunnerError):
    """A record file could not be resolved, opened, read or closed."""

    stage = "load"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class RecordDecodeError(PermitRunnerError):
    """A record file is not well-formed JSON or does not match the record shape."""

    stage = "load"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MissingFieldError(PermitRunnerError):
    """
    A required record field is empty.

    Attributes:
        record_kind: 'resident' or 'visitor'
        field: Attribute path of the empty field (e.g. 'vehicle.year')
        label: Human-readable field name (e.g. 'vehicle year')
    """

    stage = "validate"

    def __init__(self, record_kind: str, field: str, label: str):
        super().__init__(f"{record_kind} {label} is required")
        self.record_kind = record_kind
        self.field = field
        self.label = label


class FormAutomationError(PermitRunnerError):
    """Navigation, element wait, typing or submit failed in the browser."""

    stage = "automation"


class CaptureError(PermitRunnerError):
    """The post-submit screenshot could not be taken or written."""

    stage = "capture"
