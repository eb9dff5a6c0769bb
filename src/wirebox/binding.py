from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from wirebox.exceptions import WireboxParameterResolveError

if TYPE_CHECKING:
    from wirebox.container_interface import IContainer
    from wirebox.introspection import ParameterDescriptor


class ParameterBinder:
    """Turn parameter descriptors into call arguments.

    Each parameter is bound from the first source that applies:

    1. an override keyed by the parameter name (``None`` included),
    2. the container entry for its declared class,
    3. the container entry named like the parameter,
    4. the parameter default.

    A parameter with a declared class is only ever bound by override or by
    that class, so scalar entries never land in class-typed parameters.
    Otherwise a parameter with no source fails with
    ``WireboxParameterResolveError``.
    """

    def bind(
        self,
        container: IContainer,
        parameters: Sequence[ParameterDescriptor],
        overrides: Mapping[str, Any],
        function: str,
    ) -> tuple[list[Any], dict[str, Any]]:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in parameters:
            value = self._resolve(container, parameter, overrides, function)
            if parameter.keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return args, kwargs

    def _resolve(
        self,
        container: IContainer,
        parameter: ParameterDescriptor,
        overrides: Mapping[str, Any],
        function: str,
    ) -> Any:
        if parameter.name in overrides:
            return overrides[parameter.name]

        if parameter.declared_type is not None:
            return container.get(parameter.declared_type)

        if container.has(parameter.name):
            return container.get(parameter.name)

        if parameter.is_optional:
            return parameter.default

        raise WireboxParameterResolveError(parameter.name, function)


__all__ = ["ParameterBinder"]
