# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
from __future__ import annotations

from collections.abc import Iterator
from typing import Any


def slot_names(cls: type) -> tuple[str, ...]:
    """Names of all slots declared by `cls` and its base classes.

    Private slot names get mangled the same way the interpreter does it, so
    the result can be used with ``getattr`` / ``setattr`` directly.
    """
    names = {}
    for base in cls.__mro__:
        slots = base.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            names[_mangle(base, name)] = None
    return tuple(names)


def iter_fields(obj: Any) -> Iterator[tuple[str, Any]]:
    """Yields the (name, value) pairs that make up the state of an object.

    Entries of the instance ``__dict__`` come first, followed by all slots
    that are currently set. Slots without a value are skipped.
    """
    state = getattr(obj, "__dict__", None)
    if isinstance(state, dict):
        yield from list(state.items())

    for name in slot_names(type(obj)):
        try:
            value = object.__getattribute__(obj, name)
        except AttributeError:
            continue
        yield name, value


def _mangle(cls: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{cls.__name__.lstrip('_')}{name}"
    return name
