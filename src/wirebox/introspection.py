from __future__ import annotations

import inspect
import logging
import pkgutil
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, get_type_hints

from wirebox._internal.policies import DeclaredTypePolicy
from wirebox._internal.type_checks import is_runtime_class
from wirebox.exceptions import WireboxIntrospectionError
from wirebox.identifiers import Identifier, class_identifier

logger = logging.getLogger(__name__)

_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Information about a constructor/function parameter."""

    name: str
    declared_type: type[Any] | None
    is_optional: bool
    default: Any = None
    keyword_only: bool = False


def describe_callable(target: Any) -> str:
    """Return a short human-readable name for error messages."""
    if isinstance(target, type):
        return "__init__"
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", None)
    if name is None:
        func = getattr(target, "func", None)
        if func is not None:
            return describe_callable(func)
        return type(target).__qualname__
    return name


class TypeIntrospector:
    """Describe the parameters of classes and callables.

    Also keeps track of the classes a container has seen, so that class
    identifiers can be mapped back to classes even when the class is not
    importable by its dotted name.
    """

    def __init__(self, policy: DeclaredTypePolicy | None = None) -> None:
        self._policy = policy if policy is not None else DeclaredTypePolicy()
        self._known_types: dict[Identifier, type[Any]] = {}

    def copy(self) -> TypeIntrospector:
        clone = TypeIntrospector(self._policy)
        clone._known_types = dict(self._known_types)
        return clone

    def remember(self, cls: type[Any]) -> Identifier:
        identifier = class_identifier(cls)
        self._known_types.setdefault(identifier, cls)
        return identifier

    def locate(self, identifier: Identifier) -> type[Any] | None:
        """Map a class identifier to a class, importing it by dotted name if needed.

        Modules that fail to import are treated as naming no class.

        Args:
            identifier: Candidate class identifier.

        Returns:
            The class, or ``None`` when the identifier does not name one.

        """
        cls = self._known_types.get(identifier)
        if cls is not None:
            return cls
        if "." not in identifier or "<locals>" in identifier:
            return None

        try:
            candidate = pkgutil.resolve_name(identifier)
        except (ImportError, AttributeError, ValueError):
            return None
        except Exception as exc:  # noqa: BLE001
            # importing runs module code, which may fail in arbitrary ways
            logger.debug("Import of <%s> failed: %r", identifier, exc)
            return None
        if not is_runtime_class(candidate):
            return None

        logger.debug("Located class %r for identifier <%s>", candidate, identifier)
        self._known_types[identifier] = candidate
        return candidate

    def parameters_of(self, target: type[Any] | Callable[..., Any]) -> tuple[ParameterDescriptor, ...]:
        """Return the ordered parameter descriptors of a class constructor or callable.

        Variadic parameters are left out. Primitive, union and unresolved
        annotations are reported without a declared type.

        Args:
            target: Class or callable to describe.

        Raises:
            WireboxIntrospectionError: The interpreter cannot provide a signature.

        """
        if isinstance(target, type) and not _has_explicit_constructor(target):
            return ()

        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError) as error:
            raise WireboxIntrospectionError(target, error) from error

        hints = self._type_hints(target)
        descriptors: list[ParameterDescriptor] = []
        for name, parameter in signature.parameters.items():
            if parameter.kind in _VARIADIC_KINDS:
                continue

            annotation = hints.get(name, parameter.annotation)
            declared_type = None
            if annotation is not inspect.Parameter.empty:
                declared_type = self._policy.declared_class(annotation)

            is_optional = parameter.default is not inspect.Parameter.empty
            descriptors.append(
                ParameterDescriptor(
                    name=name,
                    declared_type=declared_type,
                    is_optional=is_optional,
                    default=parameter.default if is_optional else None,
                    keyword_only=parameter.kind is inspect.Parameter.KEYWORD_ONLY,
                ),
            )
        return tuple(descriptors)

    def _type_hints(self, target: Any) -> dict[str, Any]:
        source = target
        if isinstance(target, type):
            source = target.__init__ if target.__init__ is not object.__init__ else target.__new__
        elif not (inspect.isfunction(target) or inspect.ismethod(target)):
            source = getattr(target, "func", None) or getattr(type(target), "__call__", target)  # noqa: B004

        try:
            hints = get_type_hints(source, include_extras=True)
        except TypeError:
            hints = {}
        except NameError as exc:
            logger.warning(
                "Name error retrieving %s type hints (%s), binding by name instead",
                describe_callable(target),
                exc,
            )
            hints = {}

        return hints


def _has_explicit_constructor(cls: type[Any]) -> bool:
    return cls.__init__ is not object.__init__ or cls.__new__ is not object.__new__


__all__ = ["ParameterDescriptor", "TypeIntrospector", "describe_callable"]
