# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
from __future__ import annotations

import threading
from contextvars import ContextVar, Token
from enum import Enum
from threading import Lock
from typing import ClassVar

from attrs import evolve, field, frozen


class BaseContext:
    _context_var: ClassVar[ContextVar]
    _lock: ClassVar[Lock] = Lock()
    _thread_state: ClassVar[dict[int, list[Token]]] = {}

    def __enter__(self):
        with self._lock:
            _id = id(self) + (threading.get_ident() << 64)
            _tokens = self._thread_state.setdefault(_id, [])
            _tokens.append(self._context_var.set(self))
        return self

    def __exit__(self, *_):
        with self._lock:
            _id = id(self) + (threading.get_ident() << 64)
            _tokens = self._thread_state[_id]
            self._context_var.reset(_tokens.pop())
            if len(_tokens) == 0:
                del self._thread_state[_id]

    @classmethod
    def get(cls):
        """Returns the current, innermost context instance.

        :raises LookupError: If no such context has been entered yet.
        """
        return cls._context_var.get()


class UnwritableFieldPolicy(Enum):
    """
    What to do with a record field that can't be assigned on the copy.

    - SKIP: Leave the field unset on the copy. No error, no log message.
    - WARN: Like SKIP, but log a warning for each skipped field.
    - RAISE: Abort cloning with an :py:class:`UnwritableFieldError`.
    """

    SKIP = "skip"
    WARN = "warn"
    RAISE = "raise"


class UnknownShapePolicy(Enum):
    """
    What to do with objects that aren't callables, classes or modules but still
    have no structure the cloner can rebuild (e.g. objects implemented in C
    with a custom ``__new__``).

    - PASSTHROUGH: Return the object itself, like any other opaque value.
    - RAISE: Abort cloning with an :py:class:`UnsupportedShapeError`.
    """

    PASSTHROUGH = "passthrough"
    RAISE = "raise"


@frozen(slots=False)
class CloneConfig(BaseContext):
    """Options controlling a single clone operation.

    A config can either be passed to :py:func:`clone` explicitly or be
    activated for a block of code by using it as a context manager::

        with CloneConfig(memoize=True):
            copy = clone(graph)

    Attributes
    ----------
    unwritable_fields :
        Policy for record fields that can't be set on the copy.
    unknown_shapes :
        Policy for objects without a known structure.
    memoize :
        If True, every object is copied at most once per clone operation.
        Objects that are reachable along several paths stay shared in the copy
        and cyclic object graphs can be cloned. If False (the default), every
        path gets its own copy and cyclic input recurses until a
        ``RecursionError`` is raised.
    """

    unwritable_fields: UnwritableFieldPolicy = field(
        default=UnwritableFieldPolicy.SKIP, converter=UnwritableFieldPolicy
    )
    unknown_shapes: UnknownShapePolicy = field(
        default=UnknownShapePolicy.PASSTHROUGH, converter=UnknownShapePolicy
    )
    memoize: bool = False

    _context_var = ContextVar("clone_config")

    @classmethod
    def get(cls) -> CloneConfig:
        """Returns the innermost active config, or the default config if no
        config has been entered."""
        try:
            return super().get()
        except LookupError:
            return _DEFAULT_CONFIG

    def evolve(self, **changes) -> CloneConfig:
        """Returns a copy of this config with the given attributes replaced."""
        return evolve(self, **changes)


_DEFAULT_CONFIG = CloneConfig()
