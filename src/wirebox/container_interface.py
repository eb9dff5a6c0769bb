from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, TypeVar, overload

T = TypeVar("T")


class IContainer(ABC):
    """Interface for container-like objects.

    Anything implementing ``get`` and ``has`` can serve as a delegate of a
    ``Container``.
    """

    @overload
    @abstractmethod
    def get(self, key: type[T], /) -> T: ...

    @overload
    @abstractmethod
    def get(self, key: str, /) -> Any: ...

    @abstractmethod
    def get(self, key: Any, /) -> Any:
        """Return the entry for ``key``, building it on first access.

        Args:
            key: Identifier string or class.

        """

    @abstractmethod
    def has(self, key: str | type[Any], /) -> bool:
        """Return whether ``get(key)`` has a way to produce a value.

        Args:
            key: Identifier string or class.

        """


class IFactory(ABC):
    """Interface for objects that build fresh instances on demand."""

    @overload
    @abstractmethod
    def create(self, key: type[T], /, overrides: Mapping[str, Any] | None = None) -> T: ...

    @overload
    @abstractmethod
    def create(self, key: str, /, overrides: Mapping[str, Any] | None = None) -> Any: ...

    @abstractmethod
    def create(self, key: Any, /, overrides: Mapping[str, Any] | None = None) -> Any:
        """Build a new instance for ``key``; the result is never cached.

        Args:
            key: Identifier string or class.
            overrides: Values for constructor or factory parameters, by name.

        """
