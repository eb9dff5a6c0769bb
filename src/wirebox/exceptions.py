from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class WireboxError(Exception):
    """Represent a base class for all wirebox-specific failures.

    Catch this type when you want to handle any container error path without
    matching each concrete exception class individually.
    """


class WireboxNotFoundError(WireboxError):
    """Signal that an identifier cannot be resolved by any strategy.

    Raised by ``Container.get`` and ``Container.create`` when the identifier
    has no entry, no compiled factory, no delegate that knows it, and either
    autowiring is disabled or the identifier does not name a class.

    Typical fixes include declaring the entry, enabling autowiring, or passing
    a class object instead of a misspelled dotted name.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Entry for <{identifier}> could not be resolved")


class WireboxNotInstantiableError(WireboxError):
    """Signal that a class was found but cannot be constructed.

    Raised before any constructor parameter is bound when the class is
    abstract, a ``typing.Protocol`` or a metaclass.

    Typical fix is declaring an entry that maps the identifier to a concrete
    implementation or a factory.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Unable to create <{identifier}>, not instantiable")


class WireboxParameterResolveError(WireboxError):
    """Signal that a constructor or factory parameter has no source.

    The parameter had no override, no resolvable declared type, no entry
    matching its name and no default value. ``owners`` lists the classes being
    constructed when the failure happened, innermost first, so the message
    reads as a dependency path.
    """

    def __init__(self, parameter: str, function: str, owners: Sequence[str] = ()) -> None:
        self.parameter = parameter
        self.function = function
        self.owners = tuple(owners)
        message = f"Unable to resolve <{parameter}> for <{function}>"
        for owner in self.owners:
            message += f" of <{owner}>"
        super().__init__(message)

    def with_owner(self, owner: str) -> WireboxParameterResolveError:
        return WireboxParameterResolveError(self.parameter, self.function, (*self.owners, owner))


class WireboxCircularReferenceError(WireboxError):
    """Signal that an identifier re-entered its own resolution path.

    ``path`` starts at the first occurrence of the re-entered identifier and
    ends with the identifier again, e.g. ``["a", "b", "a"]``.

    Typical fix is breaking the cycle with an explicit factory that defers one
    side of the dependency.
    """

    def __init__(self, identifier: str, path: Sequence[str]) -> None:
        self.identifier = identifier
        self.path = list(path)
        chain = " -> ".join(self.path)
        super().__init__(f"Circular reference detected for <{identifier}>: {chain}")


class WireboxIntrospectionError(WireboxError):
    """Signal that the interpreter cannot describe a callable's parameters.

    This points at host misconfiguration (for example a builtin without a
    signature registered as a factory), not at container misuse.
    """

    def __init__(self, target: Any, cause: Exception) -> None:
        self.target = target
        self.cause = cause
        name = getattr(target, "__qualname__", repr(target))
        super().__init__(f"Unable to introspect <{name}>: {cause}")
