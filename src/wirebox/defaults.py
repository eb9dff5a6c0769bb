import datetime
import decimal
import pathlib
import uuid
from typing import Any

DEFAULT_IGNORED_TYPES: frozenset[type[Any]] = frozenset(
    {
        int,
        str,
        float,
        complex,
        bool,
        bytes,
        bytearray,
        list,
        dict,
        set,
        frozenset,
        tuple,
        pathlib.PurePath,
        pathlib.PurePosixPath,
        pathlib.PureWindowsPath,
        pathlib.Path,
        pathlib.PosixPath,
        pathlib.WindowsPath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
    },
)
"""Declared parameter types never looked up in the container by type.

Matched exactly: user subclasses of these (``NamedTuple`` classes, ``IntEnum``
classes, ``dict`` subclasses) are resolved by type like any other class.
"""
