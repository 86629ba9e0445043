"""Shared presence rule for advisory checks and compliance scoring."""

from typing import Any, Mapping


def is_present(document: Any, field_name: str) -> bool:
    """
    Check whether a document populates a field.

    A field is missing when it is absent, None or an empty string. Empty
    lists and empty dicts count as present.
    """
    if not isinstance(document, Mapping) or field_name not in document:
        return False

    value = document[field_name]
    if value is None:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True
