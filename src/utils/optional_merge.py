from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


def merge_optional(new_value: T | None, current_value: T | None) -> T | None:
    """Return ``new_value`` unless it is falsy, in which case keep ``current_value``.

    Falsy covers ``None`` and empty strings but also legitimate values such as
    ``0`` or ``0.0``: a zero kit count or weight cannot overwrite a stored value
    through this merge.
    """
    if new_value:
        return new_value
    return current_value
