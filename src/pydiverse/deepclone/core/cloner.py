# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
"""Recursive structural copy of arbitrary values.

Loosely modelled on the builtin copy module of python:
https://github.com/python/cpython/blob/main/Lib/copy.py

Contrary to :py:func:`copy.deepcopy`, objects can't customize how they get
copied (``__deepcopy__``, ``__reduce_ex__`` and ``copyreg`` are ignored).
Every value is copied by the same algorithm based on its :py:class:`Shape`.
"""
from __future__ import annotations

import array
import asyncio
import queue
import types
from collections import OrderedDict, defaultdict, deque
from collections.abc import Callable
from typing import Any

import structlog
from attrs import evolve

from pydiverse.deepclone._typing import T
from pydiverse.deepclone.container import Ref, Variant
from pydiverse.deepclone.context import (
    CloneConfig,
    UnknownShapePolicy,
    UnwritableFieldPolicy,
)
from pydiverse.deepclone.core.records import iter_fields
from pydiverse.deepclone.core.shapes import Shape, is_passthrough, shape_of
from pydiverse.deepclone.errors import (
    CloneError,
    UnsupportedShapeError,
    UnwritableFieldError,
)

_nil = []


class Cloner:
    """Creates independent copies of values.

    A cloner walks the value graph depth first and rebuilds every value it
    encounters according to its shape. The copy always has exactly the same
    type as the original and shares no mutable storage with it, with two
    exceptions: opaque values (functions, classes, modules, locks, ...) are
    shared by identity, and channels (queues) are replaced by new, empty
    queues of the same type and capacity.

    :param config: Options for this cloner. Defaults to the currently
        active :py:class:`CloneConfig`.
    """

    def __init__(self, config: CloneConfig | None = None):
        self.config = config if config is not None else CloneConfig.get()
        self.logger = structlog.get_logger(logger_name=type(self).__name__)

        self._memo: dict[int, Any] | None = None
        self._path: list[tuple[str, Any]] = []
        self._dispatch: dict[Shape, Callable[[Any], Any]] = {
            Shape.NOTHING: self._clone_atomic,
            Shape.SCALAR: self._clone_atomic,
            Shape.OPAQUE: self._clone_opaque,
            Shape.REFERENCE: self._clone_reference,
            Shape.SEQUENCE: self._clone_sequence,
            Shape.FIXED_SEQUENCE: self._clone_fixed_sequence,
            Shape.MAPPING: self._clone_mapping,
            Shape.SET: self._clone_set,
            Shape.RECORD: self._clone_record,
            Shape.POLYMORPHIC: self._clone_polymorphic,
            Shape.CHANNEL: self._clone_channel,
        }

    def clone(self, x: T) -> T:
        """Return an independent copy of `x`.

        :raises CloneError: If any value reachable from `x` can't be cloned.
            Nothing is returned in that case.
        :raises RecursionError: If `x` is nested too deeply, or contains a
            reference cycle and memoization is disabled.
        """
        self._memo = {} if self.config.memoize else None
        self._path = []

        self.logger.debug(
            "Cloning value",
            value_type=type(x).__qualname__,
            shape=shape_of(x).name,
            memoize=self.config.memoize,
        )
        try:
            return self._clone(x)
        finally:
            self._memo = None

    def _clone(self, x):
        memo = self._memo
        if memo is not None:
            y = memo.get(id(x), _nil)
            if y is not _nil:
                return y

        try:
            y = self._dispatch[shape_of(x)](x)
        except (CloneError, RecursionError):
            raise
        except Exception as e:
            raise CloneError(
                f"Failed to clone value of type {type(x).__qualname__}: {e}",
                value_type=type(x),
                path=self._location(),
            ) from e

        # If is its own copy, don't memoize.
        if memo is not None and y is not x and id(x) not in memo:
            self._remember(x, y)
        return y

    def _clone_at(self, x, fmt: str, step):
        self._path.append((fmt, step))
        try:
            return self._clone(x)
        finally:
            self._path.pop()

    def _location(self) -> list[str]:
        return [fmt.format(step) for fmt, step in self._path]

    def _remember(self, x, y):
        if self._memo is None:
            return
        self._memo[id(x)] = y
        self._keep_alive(x)

    def _keep_alive(self, x):
        """Keeps a reference to the object x in the memo.
        Because we remember objects by their id, we have
        to assure that possibly temporary objects are kept
        alive by referencing them.
        """
        try:
            self._memo[id(self._memo)].append(x)
        except KeyError:
            self._memo[id(self._memo)] = [x]

    # Shapes

    def _clone_atomic(self, x):
        return x

    def _clone_opaque(self, x):
        if (
            self.config.unknown_shapes is UnknownShapePolicy.RAISE
            and not is_passthrough(x)
        ):
            raise UnsupportedShapeError(
                f"Don't know how to clone value of type {type(x).__qualname__}",
                value_type=type(x),
                path=self._location(),
            )
        return x

    def _clone_reference(self, x: Ref) -> Ref:
        # An absent reference has value None, which clones to None. The copy
        # therefore is an absent reference to the same target type.
        cls = type(x)
        y = cls.__new__(cls)
        self._remember(x, y)
        self._clone_fields(x, y)
        return y

    def _clone_polymorphic(self, x: Variant) -> Variant:
        if x.is_empty:
            return evolve(x)
        return evolve(x, value=self._clone_at(x.value, ".{}", "value"))

    def _clone_sequence(self, x):
        cls = type(x)
        if isinstance(x, deque):
            y = cls.__new__(cls)
            deque.__init__(y, (), x.maxlen)
            self._remember(x, y)
            deque.extend(y, self._clone_items(x))
        elif isinstance(x, array.array):
            # Arrays only hold numbers and characters
            y = array.array.__new__(cls, x.typecode)
            self._remember(x, y)
            array.array.extend(y, x)
        elif isinstance(x, bytearray):
            y = cls.__new__(cls)
            self._remember(x, y)
            bytearray.extend(y, x)
        else:
            y = cls.__new__(cls)
            self._remember(x, y)
            list.extend(y, self._clone_items(x))

        self._clone_fields(x, y)
        return y

    def _clone_fixed_sequence(self, x: tuple) -> tuple:
        items = self._clone_items(x)

        # We're not going to put the tuple in the memo, but it's still important we
        # check for it, in case the tuple contains recursive mutable structures.
        if self._memo is not None:
            y = self._memo.get(id(x), _nil)
            if y is not _nil:
                return y

        cls = type(x)
        if cls is tuple:
            if all(a is b for a, b in zip(x, items)):
                return x
            return tuple(items)

        if hasattr(cls, "_make"):
            # namedtuple
            y = cls._make(items)
        else:
            y = tuple.__new__(cls, items)
        self._clone_fields(x, y)
        return y

    def _clone_mapping(self, x):
        cls = type(x)
        if cls is types.MappingProxyType:
            return types.MappingProxyType(dict(self._clone_entries(x)))

        y = cls.__new__(cls)
        setitem = dict.__setitem__
        if isinstance(x, defaultdict):
            defaultdict.__init__(y, x.default_factory)
        elif isinstance(x, OrderedDict):
            OrderedDict.__init__(y)
            setitem = OrderedDict.__setitem__
        self._remember(x, y)
        # Bypass __setitem__ overrides of subclasses
        for key, value in self._clone_entries(x):
            setitem(y, key, value)

        self._clone_fields(x, y)
        return y

    def _clone_set(self, x):
        cls = type(x)
        if isinstance(x, frozenset):
            items = self._clone_elements(x)
            if cls is frozenset and all(a is b for a, b in zip(x, items)):
                return x
            y = frozenset.__new__(cls, items)
        else:
            y = cls.__new__(cls)
            self._remember(x, y)
            set.update(y, self._clone_elements(x))

        self._clone_fields(x, y)
        return y

    def _clone_record(self, x):
        cls = type(x)
        y = cls.__new__(cls)
        self._remember(x, y)
        self._clone_fields(x, y)
        return y

    def _clone_channel(self, x):
        # Queued items are not transferred to the new channel.
        cls = type(x)
        y = cls.__new__(cls)
        if isinstance(x, asyncio.Queue):
            asyncio.Queue.__init__(y, x.maxsize)
        elif isinstance(x, queue.Queue):
            queue.Queue.__init__(y, x.maxsize)
        return y

    # Constituents

    def _clone_items(self, x) -> list:
        return [self._clone_at(a, "[{}]", i) for i, a in enumerate(x)]

    def _clone_elements(self, x) -> list:
        return [self._clone_at(a, "{{{!r}}}", a) for a in x]

    def _clone_entries(self, x) -> list[tuple[Any, Any]]:
        entries = []
        for key, value in x.items():
            entries.append(
                (
                    self._clone_at(key, ".keys()[{!r}]", key),
                    self._clone_at(value, "[{!r}]", key),
                )
            )
        return entries

    def _clone_fields(self, x, y):
        for name, value in iter_fields(x):
            self._assign_field(y, name, self._clone_at(value, ".{}", name))

    def _assign_field(self, y, name: str, value):
        try:
            object.__setattr__(y, name, value)
        except (AttributeError, TypeError) as e:
            policy = self.config.unwritable_fields
            if policy is UnwritableFieldPolicy.RAISE:
                raise UnwritableFieldError(
                    f"Can't set field '{name}' on copy of {type(y).__qualname__}",
                    field_name=name,
                    value_type=type(y),
                    path=self._location(),
                ) from e
            if policy is UnwritableFieldPolicy.WARN:
                self.logger.warning(
                    "Skipping unwritable field",
                    field=name,
                    record_type=type(y).__qualname__,
                    path="".join(self._location()),
                )


def clone(value: T, config: CloneConfig | None = None, **options) -> T:
    """Return an independent deep copy of `value`.

    The copy has exactly the same type as `value`. Mutating anything reachable
    from the copy never affects the original and vice versa.

    :param config: Options to use. Defaults to the currently active
        :py:class:`CloneConfig`.
    :param options: Overrides for individual :py:class:`CloneConfig` attributes,
        e.g. ``clone(graph, memoize=True)``.
    :raises CloneError: If any part of `value` can't be cloned.
    """
    if config is None:
        config = CloneConfig.get()
    if options:
        config = config.evolve(**options)
    return Cloner(config).clone(value)


def try_clone(
    value: T, config: CloneConfig | None = None, **options
) -> tuple[T | None, CloneError | None]:
    """Like :py:func:`clone`, but returns a ``(copy, error)`` pair instead of
    raising a :py:class:`CloneError`.

    On failure the copy is None and must not be used.
    """
    try:
        return clone(value, config, **options), None
    except CloneError as e:
        return None, e
