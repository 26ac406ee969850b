# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from pydiverse.deepclone.context.context import (
    BaseContext,
    CloneConfig,
    UnknownShapePolicy,
    UnwritableFieldPolicy,
)

__all__ = [
    "BaseContext",
    "CloneConfig",
    "UnknownShapePolicy",
    "UnwritableFieldPolicy",
]
