# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

import array

import pytest

from pydiverse.deepclone import Cloner, CloneConfig, Ref, clone
from tests.util import Address, Node


def test_shared_objects_are_duplicated_by_default():
    address = Address("Jl. Braga", "Bandung")
    data = {"home": address, "work": address}

    cloned = clone(data)
    assert cloned["home"] == cloned["work"]
    assert cloned["home"] is not cloned["work"]


def test_shared_objects_stay_shared_with_memo():
    address = Address("Jl. Braga", "Bandung")
    data = {"home": address, "work": address}

    cloned = clone(data, memoize=True)
    assert cloned["home"] is cloned["work"]
    assert cloned["home"] is not address


def test_shared_buffers_stay_shared_with_memo():
    buffer = bytearray(b"abc")
    numbers = array.array("i", [1, 2])
    data = {"a": buffer, "b": buffer, "c": numbers, "d": [numbers]}

    cloned = clone(data, memoize=True)
    assert cloned["a"] is cloned["b"]
    assert cloned["a"] is not buffer
    assert cloned["c"] is cloned["d"][0]
    assert cloned["c"] is not numbers


def test_cycles_recurse_without_memo():
    data = []
    data.append(data)

    with pytest.raises(RecursionError):
        clone(data)


def test_cyclic_list():
    data = [1]
    data.append(data)

    cloned = clone(data, memoize=True)
    assert cloned is not data
    assert cloned[1] is cloned
    assert cloned[0] == 1


def test_cyclic_records():
    a = Node("a")
    b = Node("b", next=a)
    a.next = b
    a.children.append(b)

    cloned = clone(a, memoize=True)
    assert cloned.name == "a"
    assert cloned.next.next is cloned
    assert cloned.children[0] is cloned.next
    assert cloned.next is not b


def test_cyclic_reference():
    ref = Ref(list)
    ref.set([ref])

    cloned = clone(ref, memoize=True)
    assert cloned.get()[0] is cloned
    assert cloned.get() is not ref.get()


def test_tuple_in_cycle():
    data = []
    pair = (data, 1)
    data.append(pair)

    cloned = clone(pair, memoize=True)
    assert type(cloned) is tuple
    assert cloned[0][0] is cloned
    assert cloned[0] is not data


def test_memo_does_not_survive_calls():
    address = Address("Jl. Braga", "Bandung")
    cloner = Cloner(CloneConfig(memoize=True))

    first = cloner.clone(address)
    second = cloner.clone(address)
    assert first is not second
