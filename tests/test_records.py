"""
Tests for record decoding, loading and apartment-number normalization.
"""

import json

import pytest

from permitrunner.errors import RecordDecodeError, RecordIOError
from permitrunner.models import Resident, Visitor
from permitrunner.normalizers import APARTMENT_SENTINEL, normalize_apartment_number, normalize_record
from permitrunner.record_loader import load_record, load_resident, load_visitor


SAMPLE_RESIDENT = (
    '{"property_name":"P","first_name":"A","last_name":"B","street_address":"S",'
    '"apartment_number":"","city":"C","state":"ST","zipcode":"12345"}'
)


# ============================================================================
# Normalizer
# ============================================================================

def test_empty_apartment_number_becomes_sentinel():
    assert normalize_apartment_number("") == "N/A"
    assert APARTMENT_SENTINEL == "N/A"


@pytest.mark.parametrize("value", ["4B", "N/A", " ", "0"])
def test_non_empty_apartment_number_is_unchanged(value):
    assert normalize_apartment_number(value) == value


def test_normalize_record_returns_new_record():
    resident = Resident(first_name="A", apartment_number="")
    normalized = normalize_record(resident)

    assert normalized.apartment_number == "N/A"
    assert resident.apartment_number == ""
    assert normalized.first_name == "A"


# ============================================================================
# Loader
# ============================================================================

def test_load_resident_normalizes_apartment(write_json):
    path = write_json("resident.json", SAMPLE_RESIDENT)

    resident = load_resident(path)

    assert resident.property_name == "P"
    assert resident.zipcode == "12345"
    assert resident.apartment_number == "N/A"


def test_load_visitor_with_vehicle(write_json, visitor_data):
    path = write_json("visitor.json", visitor_data)

    visitor = load_visitor(path)

    assert visitor.apartment_number == "N/A"
    assert visitor.vehicle.make == "Honda"
    assert visitor.vehicle.licence_plate_number == "ABC1234"
    assert visitor.vehicle.license_plate_state_issuer == "TX"


def test_relative_path_resolves_against_cwd(write_json, resident_data, monkeypatch, tmp_path):
    write_json("resident.json", resident_data)
    monkeypatch.chdir(tmp_path)

    resident = load_resident("resident.json")

    assert resident.first_name == "Ana"


def test_missing_keys_decode_to_empty_strings(write_json):
    path = write_json("visitor.json", {"first_name": "Sam"})

    visitor = load_record(path, Visitor)

    assert visitor.first_name == "Sam"
    assert visitor.last_name == ""
    assert visitor.vehicle.year == ""


def test_null_values_decode_to_empty_strings(write_json):
    path = write_json("visitor.json", {"first_name": None, "vehicle": None})

    visitor = load_record(path, Visitor)

    assert visitor.first_name == ""
    assert visitor.vehicle.model == ""


def test_unknown_keys_are_ignored(write_json, resident_data):
    resident_data["parking_spot"] = "12"
    path = write_json("resident.json", resident_data)

    resident = load_resident(path)

    assert not hasattr(resident, "parking_spot")


def test_missing_file_is_io_error(tmp_path):
    with pytest.raises(RecordIOError) as exc_info:
        load_resident(tmp_path / "nope.json")

    assert "nope.json" in str(exc_info.value)


def test_directory_path_is_io_error(tmp_path):
    with pytest.raises(RecordIOError):
        load_visitor(tmp_path)


def test_malformed_json_is_decode_error(write_json):
    path = write_json("resident.json", '{"first_name": "A",')

    with pytest.raises(RecordDecodeError):
        load_resident(path)


def test_wrong_value_type_is_decode_error(write_json, resident_data):
    resident_data["zipcode"] = 78701
    path = write_json("resident.json", resident_data)

    with pytest.raises(RecordDecodeError):
        load_resident(path)


def test_top_level_array_is_decode_error(write_json):
    path = write_json("visitor.json", "[]")

    with pytest.raises(RecordDecodeError):
        load_visitor(path)


def test_vehicle_must_be_object(write_json, visitor_data):
    visitor_data["vehicle"] = "Honda Civic"
    path = write_json("visitor.json", visitor_data)

    with pytest.raises(RecordDecodeError):
        load_visitor(path)


# ============================================================================
# Re-encoding
# ============================================================================

def test_visitor_reencodes_to_same_values(write_json, visitor_data):
    visitor_data["apartment_number"] = "12"
    path = write_json("visitor.json", visitor_data)

    visitor = load_visitor(path)

    assert json.loads(visitor.to_json()) == visitor_data


def test_resident_reencodes_to_same_values(resident_data):
    resident = Resident.model_validate(resident_data)

    assert json.loads(resident.to_json()) == resident_data
