# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from .cloner import Cloner, clone, try_clone
from .shapes import Shape, shape_of

__all__ = [
    "Cloner",
    "clone",
    "try_clone",
    "Shape",
    "shape_of",
]
