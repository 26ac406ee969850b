# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
from __future__ import annotations

from pydiverse.deepclone.container.container import Ref, Variant

__all__ = [
    "Ref",
    "Variant",
]
