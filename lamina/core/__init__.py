"""\
Core
====

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module acts as an entry point for combining the error engine
objects and the configurations used throughout this package.
"""

from __future__ import annotations

from .config import *
from .entry import *
from .error import *
from .extract import *
from .kv import *
from .merge import *


__all__: tuple[str, ...] = (
    config.__all__
    + entry.__all__
    + error.__all__
    + extract.__all__
    + kv.__all__
    + merge.__all__
)
