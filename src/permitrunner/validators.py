"""
Required-field validation for permit records.

Each record type has a fixed, ordered list of required fields. Validation
stops at the first empty one and reports only that field.
"""

import logging
from typing import List, Tuple, Union

from .errors import MissingFieldError
from .models import Resident, Visitor

logger = logging.getLogger(__name__)

# (attribute path, label) in the order they are checked
RESIDENT_REQUIRED_FIELDS: List[Tuple[str, str]] = [
    ("first_name", "first name"),
    ("last_name", "last name"),
    ("property_name", "property name"),
    ("street_address", "street address"),
    ("apartment_number", "apartment number"),
    ("city", "city"),
    ("state", "state"),
    ("zipcode", "zipcode"),
]

VISITOR_REQUIRED_FIELDS: List[Tuple[str, str]] = [
    ("first_name", "first name"),
    ("last_name", "last name"),
    ("street_address", "street address"),
    ("apartment_number", "apartment number"),
    ("city", "city"),
    ("zipcode", "zipcode"),
    ("email_address", "email address"),
    ("phone_number", "phone number"),
    ("vehicle.year", "vehicle year"),
    ("vehicle.make", "vehicle make"),
    ("vehicle.model", "vehicle model"),
    ("vehicle.color", "vehicle color"),
    ("vehicle.licence_plate_number", "vehicle license plate number"),
    ("vehicle.license_plate_state_issuer", "vehicle license plate state issuer"),
]


def get_field_value(record: Union[Resident, Visitor], field_path: str) -> str:
    """Read a dotted attribute path such as 'vehicle.year' from a record."""
    value = record
    for part in field_path.split("."):
        value = getattr(value, part)
    return value


def _check_required(
    record: Union[Resident, Visitor],
    record_kind: str,
    required_fields: List[Tuple[str, str]]
) -> None:
    for field_path, label in required_fields:
        if len(get_field_value(record, field_path)) == 0:
            logger.error(f"✗ {record_kind} {label} is required (field: {field_path})")
            raise MissingFieldError(record_kind, field_path, label)


def validate_resident(resident: Resident) -> None:
    """
    Check the resident's required fields.

    Raises:
        MissingFieldError: Naming the first empty field
    """
    _check_required(resident, "resident", RESIDENT_REQUIRED_FIELDS)
    logger.debug("Resident validation passed")


def validate_visitor(visitor: Visitor) -> None:
    """
    Check the visitor's required fields, including the vehicle.

    Raises:
        MissingFieldError: Naming the first empty field
    """
    _check_required(visitor, "visitor", VISITOR_REQUIRED_FIELDS)
    logger.debug("Visitor validation passed")


def validate_records(resident: Resident, visitor: Visitor) -> None:
    """Validate the resident, then the visitor."""
    validate_resident(resident)
    validate_visitor(visitor)
    logger.info("✓ Record validation passed")
