# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
from __future__ import annotations

from collections.abc import Iterable


class CloneError(Exception):
    """
    Exception raised when a value (or one of the values reachable from it)
    can't be cloned.

    :param value_type: Type of the value that failed to clone.
    :param path: Location of the failing value relative to the value passed to
        :py:func:`clone`, as a sequence of accessor strings
        (e.g. ``(".friends", "[0]", "['city']")``).
    """

    def __init__(
        self,
        message: str,
        value_type: type | None = None,
        path: Iterable[str] = (),
    ):
        super().__init__(message)
        self.value_type = value_type
        self.path = tuple(path)

    def __str__(self):
        message = super().__str__()
        if self.path:
            return f"{message} (at <root>{''.join(self.path)})"
        return message


class UnwritableFieldError(CloneError):
    """
    Exception raised if a record field can't be assigned on the copy and
    the configured policy is :py:attr:`UnwritableFieldPolicy.RAISE`.
    """

    def __init__(self, message: str, field_name: str, **kwargs):
        super().__init__(message, **kwargs)
        self.field_name = field_name


class UnsupportedShapeError(CloneError):
    """
    Exception raised for objects that have no structure the cloner knows how
    to rebuild, if the configured policy is :py:attr:`UnknownShapePolicy.RAISE`.
    """


class AbsentReferenceError(CloneError):
    """
    Exception raised when dereferencing a :py:class:`Ref` that doesn't point
    to anything.
    """


__all__ = [
    "CloneError",
    "UnwritableFieldError",
    "UnsupportedShapeError",
    "AbsentReferenceError",
]
