"""
Phone number helpers.
"""

from structured_mapper.core.exceptions import MappingFieldException

# country_id → international dialling code
_DIALLING_CODES: dict[int, str] = {
    1: "66",  # Thailand
    2: "44",  # United Kingdom
}


def to_international(local_phone_number: str, country_id: int) -> str:
    """
    Convert a local number with a trunk prefix into international format.

    Usage:
        to_international("0971143378", 1)  # "+66971143378"

    Raises:
        MappingFieldException: Unknown country or empty number.
    """
    code = _DIALLING_CODES.get(country_id)
    if code is None:
        raise MappingFieldException(
            field_name="phone_number",
            reason=f"No dialling code for country {country_id}.",
            details={"country_id": country_id},
        )
    if not local_phone_number:
        raise MappingFieldException(
            field_name="phone_number",
            reason="Empty phone number.",
        )
    return f"+{code}{local_phone_number[1:]}"
