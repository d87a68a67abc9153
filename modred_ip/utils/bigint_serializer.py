"""
JSON transport helpers

uint256 values do not fit in a JavaScript number, so every integer
leaving the API is sent as a decimal string.
"""

from typing import Any


def convert_bigints_to_strings(obj: Any) -> Any:
    """Recursively replace ints (not bools) with their decimal string form"""
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, int):
        return str(obj)
    if isinstance(obj, dict):
        return {key: convert_bigints_to_strings(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [convert_bigints_to_strings(item) for item in obj]
    return obj
