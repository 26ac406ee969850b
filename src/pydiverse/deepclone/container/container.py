# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
from __future__ import annotations

from typing import Any, Generic

from attrs import define, field, frozen

from pydiverse.deepclone._typing import InterfaceT, T
from pydiverse.deepclone.errors import AbsentReferenceError


def _check_instance(declared_type: Any, value: Any, what: str):
    if value is None or declared_type in (Any, object):
        return
    if not isinstance(declared_type, type):
        return
    if not isinstance(value, declared_type):
        raise TypeError(
            f"{what} of type {declared_type.__qualname__} can't hold a value of type"
            f" {type(value).__qualname__}"
        )


def _validate_ref_value(ref: Ref, attribute, value):
    _check_instance(ref.target_type, value, "Ref")


def _validate_variant_value(variant: Variant, attribute, value):
    _check_instance(variant.interface, value, "Variant")


@define(eq=True)
class Ref(Generic[T]):
    """Mutable reference cell

    Holds a reference to a single value of type `target_type`. A reference
    without a value is *absent*: unlike a bare ``None`` it still knows which
    type it would point to, and cloning it yields another absent reference
    to the same type.

    ::

        ref = Ref(Person, Person("Dewi"))
        ref.get().name = "Budi"

        nobody = Ref(Person)
        assert nobody.is_absent

    :param target_type: The type of value this reference points to. Assigned
        values are checked against it if it is a class.
    :param value: The value pointed to, or None for an absent reference.
    """

    target_type: type[T] | Any
    value: T | None = field(default=None, validator=_validate_ref_value)

    @property
    def is_absent(self) -> bool:
        return self.value is None

    def get(self) -> T:
        """Return the referenced value.

        :raises AbsentReferenceError: If the reference doesn't point to anything.
        """
        if self.value is None:
            raise AbsentReferenceError(
                f"Absent reference to {_type_name(self.target_type)}",
                value_type=type(self),
            )
        return self.value

    def set(self, value: T | None):
        self.value = value

    def clear(self):
        self.value = None

    def __repr__(self):
        target = _type_name(self.target_type)
        if self.value is None:
            return f"<Ref[{target}]: absent>"
        return f"<Ref[{target}]: {self.value!r}>"


@frozen
class Variant(Generic[InterfaceT]):
    """Polymorphic container

    Wraps a value whose concrete type is only known at runtime, but which is
    declared to satisfy `interface`. A variant can also be empty. Variants are
    immutable; to change the held value create a new variant.

    :param interface: The declared type of the held value. If it is a class,
        the held value must be an instance of it.
    :param value: The held value, or None for an empty variant.
    """

    interface: type[InterfaceT] | Any
    value: InterfaceT | None = field(default=None, validator=_validate_variant_value)

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def unwrap(self) -> InterfaceT | None:
        return self.value

    def holds(self, cls: type) -> bool:
        """Check whether the held value is an instance of `cls`."""
        return isinstance(self.value, cls)

    def __repr__(self):
        interface = _type_name(self.interface)
        if self.value is None:
            return f"<Variant[{interface}]: empty>"
        return f"<Variant[{interface}]: {type(self.value).__qualname__}>"


def _type_name(t: Any) -> str:
    return getattr(t, "__qualname__", None) or repr(t)
