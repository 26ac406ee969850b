# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from typing import TypeVar

T = TypeVar("T")
InterfaceT = TypeVar("InterfaceT")
