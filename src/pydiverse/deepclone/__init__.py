# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

# In order to avoid circular dependencies, we use the following import order:
# - Errors
# - Containers (need errors)
# - Context
# - Core (needs all of the above)

# isort: skip_file
from .errors import (
    AbsentReferenceError,
    CloneError,
    UnsupportedShapeError,
    UnwritableFieldError,
)
from .container import Ref, Variant
from .context import CloneConfig, UnknownShapePolicy, UnwritableFieldPolicy
from .core import Cloner, Shape, clone, shape_of, try_clone

__version__ = "0.1.0"

__all__ = [
    "clone",
    "try_clone",
    "Cloner",
    "Shape",
    "shape_of",
    "Ref",
    "Variant",
    "CloneConfig",
    "UnwritableFieldPolicy",
    "UnknownShapePolicy",
    "CloneError",
    "UnwritableFieldError",
    "UnsupportedShapeError",
    "AbsentReferenceError",
]
