from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from wirebox._internal.type_checks import is_runtime_class, unwrap_annotated
from wirebox.defaults import DEFAULT_IGNORED_TYPES


@dataclass(frozen=True, slots=True)
class DeclaredTypePolicy:
    """Decide which parameter annotations take part in by-type lookup."""

    ignored_types: frozenset[type[Any]] = field(default=DEFAULT_IGNORED_TYPES)

    @classmethod
    def from_types(cls, ignored_types: Iterable[type[Any]]) -> DeclaredTypePolicy:
        return cls(ignored_types=frozenset(ignored_types))

    def declared_class(self, annotation: Any) -> type[Any] | None:
        """Return the class a parameter should be resolved by, if any.

        Unions, optionals, generic aliases, string annotations and primitive
        types yield ``None``: such parameters are bound by name or default.

        Args:
            annotation: Resolved parameter annotation.

        """
        annotation = unwrap_annotated(annotation)
        if annotation is Any or not is_runtime_class(annotation):
            return None
        if annotation.__module__ == "builtins":
            return None
        if annotation in self.ignored_types:
            return None
        return annotation
