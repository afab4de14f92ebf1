"""Helm ``--set`` style value overrides.

``chartgen helm generate --set`` accepts the same syntax as ``helm install
--set``, so overrides can be written once and reused:

- ``app.replicas=3`` sets a nested key
- ``a=1,b=2`` sets several keys in one argument
- ``app.tags={db,cache}`` sets a list
- ``\\,`` escapes a comma inside a value

Example:
    >>> from helm_chartgen.helm.parsing import parse_set_values
    >>> parse_set_values(("app.postgresql.enabled=false,app.replicas=2",))
    {'app': {'postgresql': {'enabled': False}, 'replicas': 2}}
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from helm_chartgen.helm.merger import unflatten_dict

ScalarValue = str | int | float | bool | None


def split_assignments(argument: str) -> list[str]:
    """Split one ``--set`` argument into ``key=value`` assignments.

    Commas separate assignments unless escaped with a backslash or
    enclosed in ``{...}``.

    Example:
        >>> split_assignments("a=1,b={x,y},c=p\\\\,q")
        ['a=1', 'b={x,y}', 'c=p,q']
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    chars = iter(argument)

    for char in chars:
        if char == "\\":
            current.append(next(chars, ""))
        elif char == "{":
            depth += 1
            current.append(char)
        elif char == "}":
            depth = max(depth - 1, 0)
            current.append(char)
        elif char == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)

    parts.append("".join(current))
    return [part for part in parts if part]


def parse_set_values(
    set_values: tuple[str, ...],
    *,
    warn_fn: Callable[[str], None] | None = None,
) -> dict[str, Any]:
    """Parse ``--set`` arguments into a nested values dictionary.

    Args:
        set_values: Raw ``--set`` arguments.
        warn_fn: Called with a message for every assignment without ``=``.
            When None, such assignments are skipped silently.

    Returns:
        Nested dictionary, later assignments winning.
    """
    flat: dict[str, Any] = {}

    for argument in set_values:
        for assignment in split_assignments(argument):
            key, separator, raw = assignment.partition("=")
            if not separator or not key:
                if warn_fn is not None:
                    warn_fn(f"Ignoring invalid --set value (expected key=value): {assignment}")
                continue
            flat[key.strip()] = parse_value(raw)

    return unflatten_dict(flat)


def parse_value(value: str) -> ScalarValue | list[ScalarValue]:
    """Convert a ``--set`` value to its Python type.

    Order follows Helm: list literal, null, booleans, integers, floats,
    then plain string.

    Example:
        >>> parse_value("{a,1,true}")
        ['a', 1, True]
        >>> parse_value("1.2.3")
        '1.2.3'
    """
    if value.startswith("{") and value.endswith("}"):
        inner = value[1:-1]
        if not inner:
            return []
        return [_parse_scalar(item.strip()) for item in inner.split(",")]

    return _parse_scalar(value)


def _parse_scalar(value: str) -> ScalarValue:
    lowered = value.lower()
    if lowered == "null":
        return None
    if lowered in ("true", "false"):
        return lowered == "true"

    try:
        return int(value)
    except ValueError:
        pass

    # float() also accepts "nan" and "inf", which Helm keeps as strings
    if any(char.isdigit() for char in value):
        try:
            return float(value)
        except ValueError:
            pass

    return value


__all__: list[str] = [
    "parse_set_values",
    "parse_value",
    "split_assignments",
]
