"""\
Utilities
=========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module acts as an entry point for combining various utilities used
throughout the package. The `OpenTelemetry` integration is not imported
here, it lives in `lamina.utils.opentelemetry`.
"""

from __future__ import annotations

from .logging import *


__all__: tuple[str, ...] = tuple(logging.__all__)
