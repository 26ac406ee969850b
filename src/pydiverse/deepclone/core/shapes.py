# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
from __future__ import annotations

import array
import asyncio
import dataclasses
import datetime
import functools
import queue
import re
import threading
import types
import uuid
import weakref
from collections import deque
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Any

import attrs

from pydiverse.deepclone.container import Ref, Variant
from pydiverse.deepclone.core.records import slot_names


class Shape(Enum):
    """Structural category of a runtime value.

    The shape decides which strategy :py:class:`Cloner` uses to copy a value.
    """

    NOTHING = 0
    SCALAR = 1
    OPAQUE = 2
    REFERENCE = 3
    SEQUENCE = 4
    FIXED_SEQUENCE = 5
    MAPPING = 6
    SET = 7
    RECORD = 8
    POLYMORPHIC = 9
    CHANNEL = 10


# Immutable values without any mutable state reachable through them
_SCALAR_TYPES = (
    int,
    float,
    complex,
    str,
    bytes,
    Enum,
    Decimal,
    Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    range,
    slice,
    type(Ellipsis),
    type(NotImplemented),
    PurePath,
    re.Pattern,
)

# Values that get shared by identity on purpose
_PASSTHROUGH_TYPES = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.WrapperDescriptorType,
    types.MethodWrapperType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
    types.GetSetDescriptorType,
    types.MemberDescriptorType,
    types.CodeType,
    types.ModuleType,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    types.FrameType,
    types.TracebackType,
    property,
    classmethod,
    staticmethod,
    functools.partial,
    weakref.ref,
    weakref.ProxyType,
    weakref.CallableProxyType,
    type(threading.Lock()),
    type(threading.RLock()),
)

_SEQUENCE_TYPES = (list, bytearray, deque, array.array)
_MAPPING_TYPES = (dict, types.MappingProxyType)
_SET_TYPES = (set, frozenset)
_CHANNEL_TYPES = (queue.Queue, queue.SimpleQueue, asyncio.Queue)


def shape_of(value: Any) -> Shape:
    """Classify a value by its structure.

    >>> shape_of([1, 2])
    <Shape.SEQUENCE: 4>
    >>> shape_of(Ref(int))
    <Shape.REFERENCE: 3>
    """
    if value is None:
        return Shape.NOTHING
    if isinstance(value, _SCALAR_TYPES):
        return Shape.SCALAR
    if isinstance(value, _PASSTHROUGH_TYPES):
        return Shape.OPAQUE
    if isinstance(value, Ref):
        return Shape.REFERENCE
    if isinstance(value, Variant):
        return Shape.POLYMORPHIC
    if isinstance(value, _MAPPING_TYPES):
        return Shape.MAPPING
    if isinstance(value, _SEQUENCE_TYPES):
        return Shape.SEQUENCE
    if isinstance(value, tuple):
        return Shape.FIXED_SEQUENCE
    if isinstance(value, _SET_TYPES):
        return Shape.SET
    if isinstance(value, _CHANNEL_TYPES):
        return Shape.CHANNEL
    if is_record(value):
        return Shape.RECORD
    return Shape.OPAQUE


def is_passthrough(value: Any) -> bool:
    """Check whether `value` is an executable or otherwise non-data value
    (function, class, module, lock, ...) that is shared instead of copied."""
    return isinstance(value, _PASSTHROUGH_TYPES)


def is_record(value: Any) -> bool:
    """Check whether `value` is an object made up of named fields.

    This is the case for dataclass and attrs instances, for any object that
    stores its state in ``__dict__`` (e.g. ``types.SimpleNamespace``), and for
    objects created by ``object.__new__`` that store their state in
    ``__slots__``. Exceptions keep their arguments outside of ``__dict__`` and
    are never records.
    """
    cls = type(value)
    if dataclasses.is_dataclass(cls) or attrs.has(cls):
        return True
    if isinstance(value, BaseException):
        return False
    if hasattr(value, "__dict__"):
        return True
    if cls.__new__ is not object.__new__:
        return False
    return bool(slot_names(cls))
