# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

import array
import asyncio
import datetime
import enum
import queue
import threading
import types
import uuid
from collections import OrderedDict, deque, namedtuple
from decimal import Decimal
from pathlib import Path

import attrs
import pytest

from pydiverse.deepclone import Ref, Shape, Variant, shape_of
from pydiverse.deepclone.core.records import iter_fields, slot_names
from pydiverse.deepclone.core.shapes import is_passthrough, is_record
from tests.util import Address


class Color(enum.Enum):
    RED = 1


@attrs.define
class AttrsPoint:
    x: int
    y: int


class Plain:
    def __init__(self):
        self.a = 1


class Base:
    __slots__ = ("__hidden", "shown")


class Derived(Base):
    __slots__ = "own"


def _gen():
    yield 1


@pytest.mark.parametrize(
    "value, shape",
    [
        (None, Shape.NOTHING),
        (1, Shape.SCALAR),
        (True, Shape.SCALAR),
        (1.5, Shape.SCALAR),
        ("s", Shape.SCALAR),
        (b"b", Shape.SCALAR),
        (Color.RED, Shape.SCALAR),
        (Decimal("1.5"), Shape.SCALAR),
        (datetime.datetime(2024, 1, 1), Shape.SCALAR),
        (uuid.UUID(int=0), Shape.SCALAR),
        (Path("a"), Shape.SCALAR),
        (range(3), Shape.SCALAR),
        (len, Shape.OPAQUE),
        (lambda: 1, Shape.OPAQUE),
        (Address, Shape.OPAQUE),
        (asyncio, Shape.OPAQUE),
        (_gen(), Shape.OPAQUE),
        (threading.Lock(), Shape.OPAQUE),
        (memoryview(b"x"), Shape.OPAQUE),
        (object(), Shape.OPAQUE),
        (Ref(Address), Shape.REFERENCE),
        (Variant(object), Shape.POLYMORPHIC),
        ([], Shape.SEQUENCE),
        (deque(), Shape.SEQUENCE),
        (bytearray(), Shape.SEQUENCE),
        (array.array("b"), Shape.SEQUENCE),
        ((), Shape.FIXED_SEQUENCE),
        (namedtuple("P", "x")(1), Shape.FIXED_SEQUENCE),
        ({}, Shape.MAPPING),
        (OrderedDict(), Shape.MAPPING),
        (set(), Shape.SET),
        (frozenset(), Shape.SET),
        (queue.Queue(), Shape.CHANNEL),
        (queue.SimpleQueue(), Shape.CHANNEL),
        (asyncio.Queue(), Shape.CHANNEL),
        (Address("a", "b"), Shape.RECORD),
        (AttrsPoint(1, 2), Shape.RECORD),
        (Plain(), Shape.RECORD),
        (Derived(), Shape.RECORD),
        (types.SimpleNamespace(a=1), Shape.RECORD),
        (ValueError("x"), Shape.OPAQUE),
    ],
)
def test_shape_of(value, shape):
    assert shape_of(value) is shape


def test_exceptions_are_not_records():
    assert not is_record(ValueError("x"))
    assert not is_passthrough(ValueError("x"))


def test_slot_names():
    assert slot_names(Derived) == ("own", "_Base__hidden", "shown")
    assert slot_names(Plain) == ()


def test_iter_fields():
    obj = Derived()
    obj.own = 1
    obj._Base__hidden = 2
    assert list(iter_fields(obj)) == [("own", 1), ("_Base__hidden", 2)]

    assert list(iter_fields(Plain())) == [("a", 1)]
