"""Merge helpers for generated values.yaml content.

Every dependency contributes a small values fragment (its ``enabled`` flag
at the condition path). The fragments, then user ``--set`` overrides, are
combined here into the final values dictionary.

Example:
    >>> from helm_chartgen.helm.merger import deep_merge
    >>> base = {"app": {"postgresql": {"enabled": True}}}
    >>> override = {"app": {"redis": {"enabled": False}}}
    >>> deep_merge(base, override)
    {'app': {'postgresql': {'enabled': True}, 'redis': {'enabled': False}}}
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two dictionaries.

    Nested dictionaries are merged; any other value in ``override``
    (lists included) replaces the value in ``base``.

    Args:
        base: Lower priority dictionary
        override: Higher priority dictionary

    Returns:
        New merged dictionary (inputs are not modified)

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result = deepcopy(base)

    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = deepcopy(value)

    return result


def conflicting_paths(
    base: dict[str, Any],
    override: dict[str, Any],
    sep: str = ".",
) -> list[str]:
    """List the paths where ``deep_merge(base, override)`` discards a value.

    A path conflicts when ``override`` replaces an existing value in
    ``base`` with a different one, or when a mapping and a non-mapping
    meet at the same key.

    Args:
        base: Lower priority dictionary
        override: Higher priority dictionary
        sep: Separator used in the returned paths

    Returns:
        Dotted paths in ``override`` order

    Example:
        >>> conflicting_paths({"app": {"db": True}}, {"app": {"db": {"enabled": False}}})
        ['app.db']
    """
    conflicts: list[str] = []

    for key, value in override.items():
        if key not in base:
            continue
        current = base[key]
        if isinstance(current, dict) and isinstance(value, dict):
            conflicts.extend(
                f"{key}{sep}{path}" for path in conflicting_paths(current, value, sep)
            )
        elif current != value:
            conflicts.append(str(key))

    return conflicts


def merge_all(*dicts: dict[str, Any]) -> dict[str, Any]:
    """Merge dictionaries in order, later ones winning.

    Example:
        >>> merge_all({"a": 1, "b": 2}, {"b": 3}, {"c": 4})
        {'a': 1, 'b': 3, 'c': 4}
    """
    result: dict[str, Any] = {}
    for d in dicts:
        result = deep_merge(result, d)
    return result


def set_value(
    values: dict[str, Any],
    path: str,
    value: Any,
    sep: str = ".",
) -> dict[str, Any]:
    """Return a copy of ``values`` with ``value`` stored at a dotted path.

    Intermediate mappings are created as needed. A non-dict value sitting
    on the path is replaced by a mapping.

    Args:
        values: Values dictionary
        path: Dotted key path (e.g. "app.postgresql.enabled")
        value: Value to store
        sep: Path separator

    Returns:
        New dictionary containing the value

    Example:
        >>> set_value({}, "app.postgresql.enabled", True)
        {'app': {'postgresql': {'enabled': True}}}
    """
    return deep_merge(values, unflatten_dict({path: value}, sep=sep))


def unflatten_dict(d: dict[str, Any], sep: str = ".") -> dict[str, Any]:
    """Convert dotted keys into a nested dictionary.

    Args:
        d: Dictionary with dotted keys
        sep: Separator used in keys

    Returns:
        Nested dictionary

    Example:
        >>> unflatten_dict({"app.redis.enabled": False, "app.name": "demo"})
        {'app': {'redis': {'enabled': False}, 'name': 'demo'}}
    """
    result: dict[str, Any] = {}

    for key, value in d.items():
        parts = [part for part in key.split(sep) if part]
        if not parts:
            continue

        current = result
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = value

    return result


__all__: list[str] = [
    "conflicting_paths",
    "deep_merge",
    "merge_all",
    "set_value",
    "unflatten_dict",
]
