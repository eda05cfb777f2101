"""
Mapping from permit records to the permit form's named inputs.

The form is driven from a declarative list: each entry pairs an input's
name attribute with the record attribute whose value is typed into it.
The order of the list is the order fields are typed.
"""

import logging
from typing import List, Tuple

from .models import FormField, Resident, Visitor
from .validators import get_field_value

logger = logging.getLogger(__name__)

# (input name, resident attribute)
RESIDENT_FORM_FIELDS: List[Tuple[str, str]] = [
    ("property-name", "property_name"),
    ("first-name-of-resident", "first_name"),
    ("last-name-of-resident", "last_name"),
    ("resident-address", "street_address"),
    ("resident-apartment", "apartment_number"),
    ("resident-city", "city"),
    ("resident-state", "state"),
    ("resident-zip", "zipcode"),
]

# (input name, visitor attribute path)
VISITOR_FORM_FIELDS: List[Tuple[str, str]] = [
    ("visitor-first-name", "first_name"),
    ("visitor-last-name", "last_name"),
    ("visitor-email", "email_address"),
    ("visitor-phone", "phone_number"),
    ("visitor-address", "street_address"),
    ("visitor-apt-number", "apartment_number"),
    ("visitor-city", "city"),
    ("visitor-zip", "zipcode"),
    ("visitor-year", "vehicle.year"),
    ("visitor-make", "vehicle.make"),
    ("visitor-model", "vehicle.model"),
    ("visitor-color", "vehicle.color"),
    ("visitor-license-plate-number", "vehicle.licence_plate_number"),
    ("visitor-state-of-issuance", "vehicle.license_plate_state_issuer"),
]


def input_selector(name: str) -> str:
    """XPath for the <input> whose name attribute is exactly `name`."""
    return f'//input[@name="{name}"]'


def build_form_fields(resident: Resident, visitor: Visitor) -> List[FormField]:
    """
    Build the ordered field list for a validated resident and visitor.

    Resident fields come first, then visitor fields (vehicle last).
    """
    fields = []

    for name, attribute in RESIDENT_FORM_FIELDS:
        fields.append(FormField(
            name=name,
            selector=input_selector(name),
            value=get_field_value(resident, attribute)
        ))

    for name, attribute in VISITOR_FORM_FIELDS:
        fields.append(FormField(
            name=name,
            selector=input_selector(name),
            value=get_field_value(visitor, attribute)
        ))

    logger.debug(f"Mapped {len(fields)} form fields (input name → value)")
    return fields
