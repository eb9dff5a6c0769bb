from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import FunctionType, MethodType
from typing import TYPE_CHECKING, Any, TypeAlias

from wirebox.identifiers import Identifier

if TYPE_CHECKING:
    from wirebox.container_interface import IContainer

CompiledFactory: TypeAlias = "Callable[[IContainer, Mapping[str, Any]], Any]"
"""A factory with its binding plan closed over: ``(container, overrides) -> value``."""

_FACTORY_TYPES = (FunctionType, MethodType, functools.partial)


@dataclass(frozen=True, slots=True)
class Value:
    """Store ``value`` as-is, even when it is callable."""

    value: Any


@dataclass(frozen=True, slots=True)
class Factory:
    """Build the entry by calling ``factory`` with resolved arguments.

    Plain functions, lambdas, bound methods and ``functools.partial`` objects
    are wrapped automatically; use this to declare a class or a callable
    instance as a factory.
    """

    factory: Callable[..., Any]

    def __post_init__(self) -> None:
        if not callable(self.factory):
            msg = f"Factory must be callable, got {type(self.factory).__name__}"
            raise TypeError(msg)


Entry: TypeAlias = Value | Factory


def as_entry(obj: Any) -> Entry:
    """Classify a definition as a value or a factory."""
    if isinstance(obj, (Value, Factory)):
        return obj
    if isinstance(obj, _FACTORY_TYPES):
        return Factory(obj)
    return Value(obj)


class EntryStore:
    """Map identifiers to resolved values, declared factories and compiled factories.

    Seeded identifiers hold values installed by the container itself; they
    resolve like any other value but are not enumerated.
    """

    def __init__(self) -> None:
        self._values: dict[Identifier, Any] = {}
        self._factories: dict[Identifier, Callable[..., Any]] = {}
        self._compiled: dict[Identifier, CompiledFactory] = {}
        self._seeded: set[Identifier] = set()

    def copy(self) -> EntryStore:
        clone = EntryStore()
        clone._values = dict(self._values)
        clone._factories = dict(self._factories)
        clone._compiled = dict(self._compiled)
        clone._seeded = set(self._seeded)
        return clone

    def set(self, identifier: Identifier, entry: Entry) -> None:
        """Replace whatever is stored under ``identifier``."""
        self._values.pop(identifier, None)
        self._factories.pop(identifier, None)
        self._compiled.pop(identifier, None)
        self._seeded.discard(identifier)

        if isinstance(entry, Factory):
            self._factories[identifier] = entry.factory
        else:
            self._values[identifier] = entry.value

    def seed(self, identifier: Identifier, value: Any) -> None:
        # user declarations win over seeded values
        if identifier in self._seeded or not self.has(identifier):
            self.set(identifier, Value(value))
            self._seeded.add(identifier)

    def has(self, identifier: Identifier) -> bool:
        return (
            identifier in self._values
            or identifier in self._factories
            or identifier in self._compiled
        )

    def has_value(self, identifier: Identifier) -> bool:
        return identifier in self._values

    def value(self, identifier: Identifier) -> Any:
        return self._values[identifier]

    def store_value(self, identifier: Identifier, value: Any) -> None:
        self._values[identifier] = value

    def has_factory(self, identifier: Identifier) -> bool:
        return identifier in self._factories

    def factory(self, identifier: Identifier) -> Callable[..., Any]:
        return self._factories[identifier]

    def compiled(self, identifier: Identifier) -> CompiledFactory | None:
        return self._compiled.get(identifier)

    def set_compiled(self, identifier: Identifier, compiled: CompiledFactory) -> None:
        self._compiled[identifier] = compiled

    def identifiers(self) -> set[Identifier]:
        """Return declared and compiled identifiers, without seeded ones."""
        known = set(self._values) | set(self._factories) | set(self._compiled)
        return known - self._seeded


__all__ = ["CompiledFactory", "Entry", "EntryStore", "Factory", "Value", "as_entry"]
