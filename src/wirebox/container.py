from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar, overload

if TYPE_CHECKING:
    from typing_extensions import Self

from wirebox._internal.policies import DeclaredTypePolicy
from wirebox._internal.type_checks import is_instantiable
from wirebox.binding import ParameterBinder
from wirebox.container_interface import IContainer, IFactory
from wirebox.defaults import DEFAULT_IGNORED_TYPES
from wirebox.entries import CompiledFactory, EntryStore, as_entry
from wirebox.exceptions import (
    WireboxCircularReferenceError,
    WireboxNotFoundError,
    WireboxNotInstantiableError,
    WireboxParameterResolveError,
)
from wirebox.identifiers import (
    Identifier,
    IdentifierLike,
    normalize_identifier,
    sorted_identifiers,
)
from wirebox.introspection import TypeIntrospector, describe_callable
from wirebox.lock_mode import LockMode
from wirebox.resolution_stack import resolving

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NO_OVERRIDES: Mapping[str, Any] = {}


class Container(IContainer, IFactory):
    """Dependency container resolving identifiers to values built once.

    Entries are declared as plain values or as factories. Factories, and
    classes constructed through autowiring, have their parameters bound from
    overrides, declared classes, same-named entries and defaults.

    Args:
        definitions: Initial entries, as a mapping or as ``(key, entry)`` pairs.
            Keys are identifier strings or classes.
        autowire: Construct classes that have no entry by introspecting their
            constructor.
        delegate: Container consulted for identifiers this container has no
            entry for, before autowiring.
        lock_mode: Locking used around first construction of cached values.
        ignored_types: Parameter annotations never resolved by type.
        register_self: Make the container resolvable under the ``Container``
            and ``IContainer`` class identifiers.

    Example:
        >>> container = Container({"count": 5, "double": lambda count: count * 2})
        >>> container.get("double")
        10

    """

    def __init__(
        self,
        definitions: Mapping[IdentifierLike, Any] | Iterable[tuple[IdentifierLike, Any]] | None = None,
        *,
        autowire: bool = True,
        delegate: IContainer | None = None,
        lock_mode: LockMode = LockMode.THREAD,
        ignored_types: Iterable[type[Any]] = DEFAULT_IGNORED_TYPES,
        register_self: bool = True,
    ) -> None:
        self._autowire = autowire
        self._delegate = delegate
        self._lock_mode = lock_mode
        self._register_self = register_self
        self._store = EntryStore()
        self._introspector = TypeIntrospector(DeclaredTypePolicy.from_types(ignored_types))
        self._binder = ParameterBinder()
        self._value_locks: dict[Identifier, threading.Lock] = {}
        self._value_locks_lock = threading.Lock()
        self._lock_owners: dict[Identifier, int] = {}
        self._waiting_threads: dict[int, Identifier] = {}
        self._seed_self()

        if definitions is not None:
            items = definitions.items() if isinstance(definitions, Mapping) else definitions
            for key, entry in items:
                self.set(key, entry)

    @property
    def autowire(self) -> bool:
        return self._autowire

    @property
    def delegate(self) -> IContainer | None:
        return self._delegate

    def set(self, key: IdentifierLike, entry: Any) -> None:
        """Declare ``entry`` under ``key``, replacing any value or factory stored there.

        Plain functions, lambdas, bound methods and ``functools.partial``
        objects are stored as factories; wrap them in ``Value`` to store them
        as-is. Wrap a class or callable instance in ``Factory`` to have it
        called with resolved arguments.

        Args:
            key: Identifier string or class.
            entry: Value, factory, ``Value`` or ``Factory``.

        """
        identifier = self._identify(key)
        self._store.set(identifier, as_entry(entry))
        logger.debug("Declared entry <%s>", identifier)

    def with_entry(self, key: IdentifierLike, entry: Any) -> Self:
        """Return a copy of this container with ``entry`` declared under ``key``.

        The receiver is left untouched and the copy shares no mutable state
        with it.
        """
        clone = self._copy()
        clone.set(key, entry)
        return clone

    def with_autowiring(self, autowire: bool) -> Self:  # noqa: FBT001
        clone = self._copy()
        clone._autowire = autowire
        return clone

    def with_delegate(self, delegate: IContainer | None) -> Self:
        clone = self._copy()
        clone._delegate = delegate
        return clone

    @overload
    def get(self, key: type[T], /) -> T: ...

    @overload
    def get(self, key: str, /) -> Any: ...

    def get(self, key: Any, /) -> Any:
        """Return the value for ``key``, building and caching it on first access.

        Lookup order: cached value, declared or compiled factory, delegate,
        autowired class construction.

        Args:
            key: Identifier string or class.

        Raises:
            WireboxNotFoundError: No strategy can produce a value.
            WireboxNotInstantiableError: The class is abstract or a protocol.
            WireboxParameterResolveError: A parameter has no source.
            WireboxCircularReferenceError: ``key`` depends on itself.

        """
        identifier = self._identify(key)
        if self._store.has_value(identifier):
            return self._store.value(identifier)

        compiled = self._local_factory(identifier)
        if compiled is None:
            if self._delegate is not None and self._delegate.has(key):
                logger.debug("Delegating <%s>", identifier)
                return self._delegate.get(key)

            cls = self._introspector.locate(identifier) if self._autowire else None
            if cls is None:
                raise WireboxNotFoundError(identifier)
            compiled = self._compile_class(identifier, cls)

        return self._resolve_shared(identifier, compiled)

    def has(self, key: str | type[Any], /) -> bool:
        """Return whether ``key`` has an entry, a compiled factory, a delegate or a class to build.

        Abstract classes and protocols are not buildable. This never constructs
        anything.
        """
        identifier = self._identify(key)
        if self._store.has(identifier):
            return True
        if self._delegate is not None and self._delegate.has(key):
            return True
        if not self._autowire:
            return False
        cls = self._introspector.locate(identifier)
        return cls is not None and is_instantiable(cls)

    @overload
    def create(self, key: type[T], /, overrides: Mapping[str, Any] | None = None) -> T: ...

    @overload
    def create(self, key: str, /, overrides: Mapping[str, Any] | None = None) -> Any: ...

    def create(self, key: Any, /, overrides: Mapping[str, Any] | None = None) -> Any:
        """Build a new instance for ``key`` without caching it.

        The compiled factory is cached, so repeated calls skip introspection.
        ``overrides`` take precedence over every other parameter source.

        Args:
            key: Identifier string or class.
            overrides: Values for constructor or factory parameters, by name.

        Raises:
            WireboxNotFoundError: ``key`` is neither a factory nor a class.

        """
        identifier = self._identify(key)
        compiled = self._local_factory(identifier)
        if compiled is None:
            cls = self._introspector.locate(identifier)
            if cls is None:
                if isinstance(self._delegate, IFactory) and self._delegate.has(key):
                    logger.debug("Delegating creation of <%s>", identifier)
                    return self._delegate.create(key, overrides)
                raise WireboxNotFoundError(identifier)
            compiled = self._compile_class(identifier, cls)

        with resolving(self, identifier):
            return compiled(self, overrides if overrides is not None else _NO_OVERRIDES)

    def entries(self) -> list[Identifier]:
        """Return declared and compiled identifiers in case-insensitive natural order."""
        return sorted_identifiers(self._store.identifiers())

    def _identify(self, key: IdentifierLike) -> Identifier:
        if isinstance(key, type):
            return self._introspector.remember(key)
        return normalize_identifier(key)

    def _local_factory(self, identifier: Identifier) -> CompiledFactory | None:
        compiled = self._store.compiled(identifier)
        if compiled is None and self._store.has_factory(identifier):
            compiled = self._compile_factory(identifier)
        return compiled

    def _compile_factory(self, identifier: Identifier) -> CompiledFactory:
        factory = self._store.factory(identifier)
        parameters = self._introspector.parameters_of(factory)
        function = describe_callable(factory)
        binder = self._binder

        def compiled(container: IContainer, overrides: Mapping[str, Any]) -> Any:
            args, kwargs = binder.bind(container, parameters, overrides, function)
            return factory(*args, **kwargs)

        self._store.set_compiled(identifier, compiled)
        logger.debug("Compiled factory <%s> with %d parameter(s)", identifier, len(parameters))
        return compiled

    def _compile_class(self, identifier: Identifier, cls: type[Any]) -> CompiledFactory:
        if not is_instantiable(cls):
            raise WireboxNotInstantiableError(identifier)

        parameters = self._introspector.parameters_of(cls)
        binder = self._binder

        def compiled(container: IContainer, overrides: Mapping[str, Any]) -> Any:
            try:
                args, kwargs = binder.bind(container, parameters, overrides, "__init__")
            except WireboxParameterResolveError as error:
                raise error.with_owner(identifier) from error
            return cls(*args, **kwargs)

        self._store.set_compiled(identifier, compiled)
        logger.debug("Autowired class <%s> with %d parameter(s)", identifier, len(parameters))
        return compiled

    def _resolve_shared(self, identifier: Identifier, compiled: CompiledFactory) -> Any:
        # the cycle check runs before the lock so self-reentry raises instead of blocking
        with resolving(self, identifier):
            lock = self._value_lock(identifier)
            if lock is None:
                return self._build_value(identifier, compiled)
            self._acquire_value_lock(identifier, lock)
            try:
                if self._store.has_value(identifier):
                    return self._store.value(identifier)
                return self._build_value(identifier, compiled)
            finally:
                self._release_value_lock(identifier, lock)

    def _acquire_value_lock(self, identifier: Identifier, lock: threading.Lock) -> None:
        """Acquire ``lock``, refusing to wait on a cycle spanning several threads.

        Each thread only sees its own resolution stack, so a cycle whose halves
        are first resolved by different threads shows up as threads waiting on
        each other's locks instead.

        Raises:
            WireboxCircularReferenceError: Waiting would close a cycle of
                threads holding the locks of each other's identifiers.

        """
        thread_id = threading.get_ident()
        if not lock.acquire(blocking=False):
            with self._value_locks_lock:
                path = self._wait_cycle(identifier, thread_id)
                if path is not None:
                    raise WireboxCircularReferenceError(identifier, path)
                self._waiting_threads[thread_id] = identifier
            try:
                lock.acquire()
            finally:
                with self._value_locks_lock:
                    del self._waiting_threads[thread_id]

        with self._value_locks_lock:
            self._lock_owners[identifier] = thread_id

    def _release_value_lock(self, identifier: Identifier, lock: threading.Lock) -> None:
        with self._value_locks_lock:
            del self._lock_owners[identifier]
        lock.release()

    def _wait_cycle(self, identifier: Identifier, thread_id: int) -> list[Identifier] | None:
        """Follow lock owners and what they wait on, starting at ``identifier``.

        Returns the identifiers on the way back to ``thread_id`` with
        ``identifier`` repeated last, or ``None`` when the chain ends elsewhere.
        Must be called with ``_value_locks_lock`` held.
        """
        path = [identifier]
        current = identifier
        while True:
            owner = self._lock_owners.get(current)
            if owner is None:
                return None
            if owner == thread_id:
                return [*path, identifier]
            current = self._waiting_threads.get(owner)
            if current is None or current in path:
                return None
            path.append(current)

    def _build_value(self, identifier: Identifier, compiled: CompiledFactory) -> Any:
        value = compiled(self, _NO_OVERRIDES)
        self._store.store_value(identifier, value)
        logger.debug("Cached value for <%s>", identifier)
        return value

    def _value_lock(self, identifier: Identifier) -> threading.Lock | None:
        """Get or create the lock guarding first construction of ``identifier``.

        Uses double-checked locking to minimize lock contention.
        """
        if self._lock_mode is LockMode.NONE:
            return None
        lock = self._value_locks.get(identifier)
        if lock is None:
            with self._value_locks_lock:
                lock = self._value_locks.setdefault(identifier, threading.Lock())
        return lock

    def _seed_self(self) -> None:
        if not self._register_self:
            return
        for cls in {Container, IContainer, IFactory, type(self)}:
            self._store.seed(self._introspector.remember(cls), self)

    def _copy(self) -> Self:
        clone = copy.copy(self)
        clone._store = self._store.copy()
        clone._introspector = self._introspector.copy()
        clone._value_locks = {}
        clone._value_locks_lock = threading.Lock()
        clone._lock_owners = {}
        clone._waiting_threads = {}
        clone._seed_self()
        return clone


__all__ = ["Container"]
