"""Helpers for YAML parsing quirks."""

from typing import Any, Dict, TypeVar

V = TypeVar("V")


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Return ``data`` with every key converted to a string.

    YAML 1.1 turns keys such as ``yes``/``no``/``on``/``off`` into booleans and
    bare numbers into ints. Converting them back to strings lets callers
    report them as unknown keys instead of failing on a non-string key.

    Examples:
        >>> normalize_yaml_dict_keys({True: 1, 3: 2, "sort_output": 3})
        {'True': 1, '3': 2, 'sort_output': 3}
    """
    return {str(key): value for key, value in data.items()}
