"""
Conversion between string lists and a single delimited text column.

Used for the patient's symptoms, risk areas and pre-illnesses. An empty list
is stored as NULL so that a list holding one empty string ("") survives the
round trip as well.
"""
from typing import List, Optional

from sqlalchemy.types import Text, TypeDecorator

DELIMITER = ";"


def encode(values: Optional[List[str]]) -> Optional[str]:
    """Join the values with the delimiter, refusing values that contain it."""
    if not values:
        return None
    for value in values:
        if DELIMITER in value:
            raise ValueError(f"List element {value!r} contains the delimiter {DELIMITER!r}")
    return DELIMITER.join(values)


def decode(text: Optional[str]) -> List[str]:
    if text is None:
        return []
    return text.split(DELIMITER)


class StringList(TypeDecorator):
    """Column type storing a list of strings as delimited text."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return encode(value)

    def process_result_value(self, value, dialect):
        return decode(value)
