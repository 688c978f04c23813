"""Wire helpers shared by the encoders."""

from __future__ import annotations

from typing import Any


def delete_none_values(value: Any) -> Any:
    """Recursively drop ``None`` values from mappings, in place.

    ``None`` items inside lists are kept: only keyed optional fields are
    elided on the wire.

    Returns:
        The same object, for chaining.

    Example:
        >>> delete_none_values({"a": 1, "b": None, "c": [1, None]})
        {'a': 1, 'c': [1, None]}
    """
    if isinstance(value, dict):
        for key in [k for k, v in value.items() if v is None]:
            del value[key]
        for item in value.values():
            delete_none_values(item)
    elif isinstance(value, list):
        for item in value:
            delete_none_values(item)
    return value


__all__ = ["delete_none_values"]
