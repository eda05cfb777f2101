"""
Pydantic models for permit request records.

These models define the JSON structure of the resident and visitor files
and the declarative field list the form driver consumes.

Decoding follows the permit JSON conventions:
- Absent keys decode to "" so they surface as validation errors later
- JSON null decodes to ""
- Unknown keys are ignored
- Non-string values are a shape mismatch
"""

from pathlib import Path
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _null_to_empty(value: Any) -> Any:
    """Treat JSON null like an absent key."""
    return "" if value is None else value


class Vehicle(BaseModel):
    """The visitor's vehicle."""
    model_config = ConfigDict(extra="ignore")

    year: str = Field(default="", description="Model year")
    make: str = Field(default="", description="Manufacturer")
    model: str = Field(default="", description="Model name")
    color: str = Field(default="", description="Exterior color")
    licence_plate_number: str = Field(default="", description="License plate number")
    license_plate_state_issuer: str = Field(
        default="",
        description="State or region that issued the license plate"
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_strings(cls, v: Any) -> Any:
        return _null_to_empty(v)


class Resident(BaseModel):
    """The property tenant on whose behalf the permit is requested."""
    model_config = ConfigDict(extra="ignore")

    property_name: str = Field(default="", description="Name of the property")
    first_name: str = Field(default="", description="Resident first name")
    last_name: str = Field(default="", description="Resident last name")
    street_address: str = Field(default="", description="Resident street address")
    apartment_number: str = Field(default="", description="Apartment number (optional)")
    city: str = Field(default="", description="City")
    state: str = Field(default="", description="State")
    zipcode: str = Field(default="", description="Zip code")

    @field_validator("*", mode="before")
    @classmethod
    def null_strings(cls, v: Any) -> Any:
        return _null_to_empty(v)

    @classmethod
    def from_json_file(cls, filepath: Path) -> "Resident":
        """
        Load a resident from a JSON file.

        Args:
            filepath: Path to the JSON file

        Returns:
            Resident instance
        """
        with open(filepath, "r", encoding="utf-8") as f:
            data = f.read()

        return cls.model_validate_json(data)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)


class Visitor(BaseModel):
    """The guest being registered, including their vehicle."""
    model_config = ConfigDict(extra="ignore")

    first_name: str = Field(default="", description="Visitor first name")
    last_name: str = Field(default="", description="Visitor last name")
    email_address: str = Field(default="", description="Visitor email address")
    phone_number: str = Field(default="", description="Visitor phone number")
    street_address: str = Field(default="", description="Visitor street address")
    apartment_number: str = Field(default="", description="Apartment number (optional)")
    city: str = Field(default="", description="City")
    zipcode: str = Field(default="", description="Zip code")
    vehicle: Vehicle = Field(default_factory=Vehicle, description="Visitor vehicle")

    @field_validator(
        "first_name", "last_name", "email_address", "phone_number",
        "street_address", "apartment_number", "city", "zipcode",
        mode="before"
    )
    @classmethod
    def null_strings(cls, v: Any) -> Any:
        return _null_to_empty(v)

    @field_validator("vehicle", mode="before")
    @classmethod
    def null_vehicle(cls, v: Any) -> Any:
        """A null vehicle decodes like an absent one."""
        return {} if v is None else v

    @classmethod
    def from_json_file(cls, filepath: Path) -> "Visitor":
        """
        Load a visitor from a JSON file.

        Args:
            filepath: Path to the JSON file

        Returns:
            Visitor instance
        """
        with open(filepath, "r", encoding="utf-8") as f:
            data = f.read()

        return cls.model_validate_json(data)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)


class FormField(BaseModel):
    """A single value to type into a named input on the permit form."""
    name: str = Field(..., description="Value of the input's name attribute")
    selector: str = Field(..., description="XPath locating the input")
    value: str = Field(..., description="Text to type")

    @field_validator("selector")
    @classmethod
    def validate_selector(cls, v: str) -> str:
        """Ensure selector is not empty."""
        if not v or not v.strip():
            raise ValueError("Selector cannot be empty")
        return v.strip()
