"""Utilities package for werror.

Holds the final-class helper used by the wire schemas, runtime version lookup
and logging setup. Import :mod:`werror.utilities.logger_manager` directly; it
depends on the error model, which itself depends on this package.
"""

from __future__ import annotations

from .final import final_class
from .version import get_runtime_version

__all__ = ["final_class", "get_runtime_version"]
