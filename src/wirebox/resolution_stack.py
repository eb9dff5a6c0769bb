"""Track identifiers in flight so that self-dependencies fail fast.

Every ``get``/``create`` pushes ``(id(container), identifier)`` for the
duration of the build. Finding the same pair again on the current call path
means the identifier depends on itself.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from wirebox.exceptions import WireboxCircularReferenceError
from wirebox.identifiers import Identifier

StackItem = tuple[int, Identifier]

# (asyncio task id or None, in-flight items); the task id tells a child task apart
# from the parent whose context it inherited
_in_flight: ContextVar[tuple[int | None, list[StackItem]] | None] = ContextVar(
    "wirebox_resolution_stack",
    default=None,
)


def _current_task_id() -> int | None:
    try:
        task = asyncio.current_task()
    except RuntimeError:
        return None
    return id(task) if task is not None else None


def _stack_for_current_context() -> list[StackItem]:
    """Return the in-flight list owned by the running thread or task.

    A task inherits its parent's context, so the first access from a new task
    copies the parent's items into a list of its own. Sibling tasks building
    the same identifier concurrently are then not mistaken for a cycle.
    """
    task_id = _current_task_id()
    stored = _in_flight.get()
    if stored is not None:
        stored_task_id, stack = stored
        if task_id is None or stored_task_id == task_id:
            return stack
        stack = list(stack)
    else:
        stack = []
    _in_flight.set((task_id, stack))
    return stack


def cycle_path(stack: list[StackItem], owner: int, identifier: Identifier) -> list[Identifier]:
    """Return the identifiers from the first ``identifier`` on the stack to the top, plus it again."""
    path = [item for item_owner, item in stack if item_owner == owner]
    return [*path[path.index(identifier) :], identifier]


@contextmanager
def resolving(owner: object, identifier: Identifier) -> Iterator[None]:
    """Mark ``identifier`` as being resolved by ``owner`` for the duration of the block.

    Items are tagged with their owner: a container delegating to another one does not
    share its in-flight identifiers with it.

    Raises:
        WireboxCircularReferenceError: ``identifier`` is already in flight for
            ``owner`` on the current call path.

    """
    stack = _stack_for_current_context()
    item = (id(owner), identifier)
    if item in stack:
        raise WireboxCircularReferenceError(identifier, cycle_path(stack, id(owner), identifier))

    stack.append(item)
    try:
        yield
    finally:
        stack.pop()


__all__ = ["cycle_path", "resolving"]
