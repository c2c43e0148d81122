from __future__ import annotations

import pytest

from user_console.infrastructure.naming import (
    INTERNAL_TO_WIRE,
    WIRE_TO_INTERNAL,
    to_internal_form,
    to_internal_name,
    to_wire_form,
    to_wire_name,
)


@pytest.mark.parametrize("wire_name", sorted(WIRE_TO_INTERNAL))
def test_wire_names_round_trip(wire_name: str) -> None:
    assert to_wire_name(to_internal_name(wire_name)) == wire_name


@pytest.mark.parametrize("internal_name", sorted(INTERNAL_TO_WIRE))
def test_internal_names_round_trip(internal_name: str) -> None:
    assert to_internal_name(to_wire_name(internal_name)) == internal_name


def test_user_fields_use_expected_conventions() -> None:
    assert to_wire_name("firstName") == "first_name"
    assert to_wire_name("lastName") == "last_name"
    assert to_internal_name("total_pages") == "totalPages"
    assert to_internal_name("email") == "email"


def test_page_envelope_is_converted_including_nested_records() -> None:
    wire = {
        "content": [
            {"id": 1, "first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
            {"id": 2, "first_name": "Alan", "last_name": "Turing", "email": "alan@example.com"},
        ],
        "total_pages": 3,
    }

    internal = to_internal_form(wire)

    assert internal == {
        "content": [
            {"id": 1, "firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com"},
            {"id": 2, "firstName": "Alan", "lastName": "Turing", "email": "alan@example.com"},
        ],
        "totalPages": 3,
    }
    assert to_wire_form(internal) == wire


def test_unknown_keys_pass_through_unchanged() -> None:
    wire = {"total_elements": 12, "pageable": {"page_number": 0}, "first_name": "Ada"}

    assert to_internal_form(wire) == {
        "total_elements": 12,
        "pageable": {"page_number": 0},
        "firstName": "Ada",
    }


def test_scalars_are_returned_as_is() -> None:
    assert to_internal_form("Successful deleted user 3") == "Successful deleted user 3"
    assert to_wire_form(None) is None
