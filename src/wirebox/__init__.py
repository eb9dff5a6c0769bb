from wirebox.container import Container
from wirebox.container_interface import IContainer, IFactory
from wirebox.entries import Factory, Value
from wirebox.exceptions import (
    WireboxCircularReferenceError,
    WireboxError,
    WireboxIntrospectionError,
    WireboxNotFoundError,
    WireboxNotInstantiableError,
    WireboxParameterResolveError,
)
from wirebox.lock_mode import LockMode

__all__ = [
    "Container",
    "Factory",
    "IContainer",
    "IFactory",
    "LockMode",
    "Value",
    "WireboxCircularReferenceError",
    "WireboxError",
    "WireboxIntrospectionError",
    "WireboxNotFoundError",
    "WireboxNotInstantiableError",
    "WireboxParameterResolveError",
]
