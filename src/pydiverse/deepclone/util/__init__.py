# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from pydiverse.deepclone.util.structlog import setup_logging

__all__ = [
    "setup_logging",
]
