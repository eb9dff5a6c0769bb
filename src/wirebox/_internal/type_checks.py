from __future__ import annotations

import inspect
import types
import typing
from typing import Annotated, Any, TypeGuard, get_args, get_origin


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def unwrap_annotated(annotation: Any) -> Any:
    """Strip ``Annotated[...]`` metadata and return the inner type."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def is_protocol_class(candidate: type[Any]) -> bool:
    if hasattr(typing, "is_protocol"):
        return typing.is_protocol(candidate)
    return bool(getattr(candidate, "_is_protocol", False)) and typing.Protocol in candidate.__mro__


def is_instantiable(candidate: type[Any]) -> bool:
    """Return true when the container may call the class to build an instance.

    Abstract classes, protocols and metaclasses are rejected.

    Args:
        candidate: Class about to be constructed.

    """
    if inspect.isabstract(candidate):
        return False
    if is_protocol_class(candidate):
        return False
    return not issubclass(candidate, type)


__all__ = ["is_instantiable", "is_protocol_class", "is_runtime_class", "unwrap_annotated"]
