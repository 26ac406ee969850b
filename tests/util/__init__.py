# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from tests.util.models import Address, Node, Person, Sealed, make_person

__all__ = [
    "Address",
    "Node",
    "Person",
    "Sealed",
    "make_person",
]
