"""Errors: diagnose misconfigured containers.

Every failure is a ``WireboxError`` subclass carrying the identifiers or the
parameter involved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wirebox import (
    Container,
    WireboxCircularReferenceError,
    WireboxNotFoundError,
    WireboxNotInstantiableError,
    WireboxParameterResolveError,
)


class Storage(ABC):
    @abstractmethod
    def save(self) -> None: ...


class Mailer:
    def __init__(self, host: str) -> None:
        self.host = host


def loop(container: Container) -> object:
    return container.get("loop")


def main() -> None:
    container = Container({"loop": loop})

    try:
        container.get("missing")
    except WireboxNotFoundError as error:
        print(f"not_found={error.identifier}")  # => not_found=missing

    try:
        container.get(Storage)
    except WireboxNotInstantiableError as error:
        print(f"not_instantiable={error.identifier.rsplit('.', 1)[-1]}")  # => not_instantiable=Storage

    try:
        container.get(Mailer)
    except WireboxParameterResolveError as error:
        print(f"parameter={error.parameter}")  # => parameter=host

    try:
        container.get("loop")
    except WireboxCircularReferenceError as error:
        print(f"cycle={' -> '.join(error.path)}")  # => cycle=loop -> loop


if __name__ == "__main__":
    main()
