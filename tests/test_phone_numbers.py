"""
Tests for the phone number helpers.
"""

import pytest

from structured_mapper.core.exceptions import MappingFieldException
from structured_mapper.utils.phone_numbers import to_international


def test_to_international() -> None:
    assert to_international("0971143378", 1) == "+66971143378"
    assert to_international("07700900123", 2) == "+447700900123"


def test_to_international_unknown_country() -> None:
    with pytest.raises(MappingFieldException) as exc_info:
        to_international("0971143378", 3)
    assert exc_info.value.details == {"country_id": 3, "field": "phone_number"}


def test_to_international_empty_number() -> None:
    with pytest.raises(MappingFieldException):
        to_international("", 1)
