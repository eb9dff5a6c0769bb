"""Shared pytest fixtures for wirebox tests."""

import pytest

from wirebox.container import Container
from wirebox.introspection import TypeIntrospector
from wirebox.lock_mode import LockMode


@pytest.fixture()
def container() -> Container:
    """Default container with autowiring enabled."""
    return Container()


@pytest.fixture()
def container_no_autowire() -> Container:
    """Container with autowire=False."""
    return Container(autowire=False)


@pytest.fixture()
def container_unlocked() -> Container:
    """Container without locks around cached values."""
    return Container(lock_mode=LockMode.NONE)


@pytest.fixture()
def introspector() -> TypeIntrospector:
    """TypeIntrospector instance."""
    return TypeIntrospector()
