from __future__ import annotations

import re
from typing import Any, TypeAlias

Identifier: TypeAlias = str
"""Opaque, case-sensitive entry key. Class identifiers are dotted type names."""

IdentifierLike: TypeAlias = str | type[Any]
"""Anything accepted where an identifier is expected."""

_DIGITS = re.compile(r"(\d+)")


def class_identifier(cls: type[Any]) -> Identifier:
    """Return the fully-qualified identifier of a class.

    Args:
        cls: Class whose identifier is computed.

    """
    return f"{cls.__module__}.{cls.__qualname__}"


def normalize_identifier(key: IdentifierLike) -> Identifier:
    """Turn a class or a string key into an identifier string.

    Args:
        key: Identifier string or class object.

    """
    if isinstance(key, str):
        return key
    if isinstance(key, type):
        return class_identifier(key)
    msg = f"Identifiers must be strings or classes, got {type(key).__name__}"
    raise TypeError(msg)


def natural_sort_key(identifier: Identifier) -> tuple[tuple[int, int | str], ...]:
    """Case-insensitive natural ordering key ("item2" sorts before "item10")."""
    return tuple(
        (0, int(part)) if part.isdigit() else (1, part)
        for part in _DIGITS.split(identifier.casefold())
        if part
    )


def sorted_identifiers(identifiers: set[Identifier]) -> list[Identifier]:
    # ties on the folded key fall back to the raw string for a stable order
    return sorted(identifiers, key=lambda identifier: (natural_sort_key(identifier), identifier))


__all__ = [
    "Identifier",
    "IdentifierLike",
    "class_identifier",
    "normalize_identifier",
    "natural_sort_key",
    "sorted_identifiers",
]
