"""
Loads resident and visitor records from JSON files.

A load either returns a complete record or raises; partial records are
never returned.
"""

import logging
from pathlib import Path
from typing import Type, TypeVar, Union

from pydantic import ValidationError

from .errors import RecordDecodeError, RecordIOError
from .models import Resident, Visitor
from .normalizers import normalize_record

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Resident, Visitor)


def resolve_path(file_path: Union[str, Path]) -> Path:
    """
    Resolve a record path to an absolute path.

    Raises:
        RecordIOError: If the path cannot be resolved
    """
    try:
        return Path(file_path).expanduser().absolute()
    except (OSError, RuntimeError) as e:
        raise RecordIOError(
            f"failed to get absolute path of {file_path}: {e}",
            path=str(file_path)
        ) from e


def load_record(file_path: Union[str, Path], model: Type[RecordT]) -> RecordT:
    """
    Decode a JSON file into a record model.

    Args:
        file_path: Path to the JSON file (relative paths resolve against cwd)
        model: Resident or Visitor

    Returns:
        The decoded record, not yet normalized

    Raises:
        RecordIOError: Path cannot be resolved, or file cannot be opened or read
        RecordDecodeError: Content is not JSON or does not match the record shape
    """
    path = resolve_path(file_path)

    try:
        record = model.from_json_file(path)
    except UnicodeDecodeError as e:
        raise RecordDecodeError(
            f"failed to decode {file_path}: not valid UTF-8 text",
            path=str(path)
        ) from e
    except OSError as e:
        raise RecordIOError(f"failed to open file {file_path}: {e}", path=str(path)) from e
    except ValidationError as e:
        raise RecordDecodeError(
            f"failed to decode {model.__name__.lower()} file {file_path}: {e}",
            path=str(path)
        ) from e

    logger.debug(f"Decoded {model.__name__.lower()} record from {path}")
    return record


def load_resident(file_path: Union[str, Path]) -> Resident:
    """Load and normalize the resident record."""
    resident = normalize_record(load_record(file_path, Resident))
    logger.info(f"✓ Resident loaded: {resident.first_name} {resident.last_name} ({file_path})")
    return resident


def load_visitor(file_path: Union[str, Path]) -> Visitor:
    """Load and normalize the visitor record."""
    visitor = normalize_record(load_record(file_path, Visitor))
    logger.info(f"✓ Visitor loaded: {visitor.first_name} {visitor.last_name} ({file_path})")
    return visitor
