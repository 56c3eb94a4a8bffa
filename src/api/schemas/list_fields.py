"""Parsing of list-valued request fields

Form posts and older clients send lists as comma-joined strings
("A-49, A-50"); JSON clients send arrays. Both are normalized here so the
use cases only ever see lists.
"""

from typing import Any, List


def split_list(value: Any) -> List[Any]:
    """
    Normalize a list field

    Strings are split on commas and stripped; empty parts are dropped. A list
    may itself contain comma-joined strings (repeated form keys).
    """
    if value is None:
        return []
    items = value if isinstance(value, (list, tuple)) else [value]
    result = []
    for item in items:
        if isinstance(item, str):
            result.extend(part.strip() for part in item.split(",") if part.strip())
        elif item is not None:
            result.append(item)
    return result


def split_optional_list(value: Any):
    """Like split_list, but None stays None so the field is left unchanged."""
    if value is None:
        return None
    return split_list(value)
