from __future__ import annotations

from typing import Any, Dict

from pygame.math import Vector3


def as_vector3(value: Any, default: Vector3) -> Vector3:
    """Parse a value into a Vector3.

    Args:
        value: A list/tuple with 3 numbers, or a dict with x/y/z keys.
        default: The vector to return if parsing fails.

    Returns:
        A new Vector3.
    """
    try:
        if isinstance(value, (list, tuple)) and len(value) >= 3:
            return Vector3(float(value[0]), float(value[1]), float(value[2]))
        if isinstance(value, dict):
            return Vector3(
                float(value.get("x", 0.0)),
                float(value.get("y", 0.0)),
                float(value.get("z", 0.0)),
            )
    except (TypeError, ValueError):
        pass
    return Vector3(default)


def deep_get(d: Dict[str, Any], path: str, default: Any) -> Any:
    """Get a nested value from a dict using a dotted path.

    Args:
        d: Source dictionary.
        path: Dot-separated key path (e.g. "builder.levels").
        default: Value to return if any path segment is missing.

    Returns:
        The found value or default.
    """
    cur: Any = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur
