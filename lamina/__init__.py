"""\
Lamina
======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

Layered errors for Python

This package (lamina) composes structured, layered errors out of plain
exceptions, sentinel markers and key-value metadata. Errors are built
with `new_error`, enriched with `with_error`, joined with `combine` and
read back with `error_metadata`, `error_children`, `is_error` and
`find_error`.

Every operation takes and returns ordinary exceptions, so the results
can be raised, chained and grouped like any other exception.
"""

from __future__ import annotations

from .core import *
from .utils import *


__all__: tuple[str, ...] = ("__version__",)
__all__ += core.__all__
__all__ += utils.__all__

__version__: str = "18.10.2026"
