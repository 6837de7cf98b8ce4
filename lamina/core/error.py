"""\
Error and sentinels
===================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides the error classes used by the package itself and
the sentinel type along with the built-in sentinels reported by the
argument validator and the merge engine.

Sentinels are compared by identity, never by their message. They are
declared once, at module level, and reused by every call site that
reports the same class of failure.
"""

from __future__ import annotations

import typing as t

__all__: tuple[str, ...] = (
    "BaseError",
    "ConfigValidationError",
    "CrossPackageError",
    "InvalidArgumentType",
    "MissingSentinel",
    "MisplacedError",
    "OddKeyValueCount",
    "Sentinel",
    "TrailingKey",
)

Error = Exception


class BaseError(Error):
    """Base error class for all exceptions."""


class ConfigValidationError(BaseError):
    """Errors related to configuration validation failure."""


class Sentinel(BaseError):
    """Stable error identity for a class or layer of failure.

    Instances are meant to be created once and shared. Two sentinels
    with the same message are still different identities.

    .. code-block:: python

        NotFound = Sentinel("not found")
        Repository = Sentinel("repository")

    :param message: Human readable name of the sentinel.
    """

    def __init__(self, message: str) -> None:
        """Initialise the sentinel with a message."""
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        """Return a string representation of the sentinel."""
        return f"<{type(self).__name__}({self.message!r})>"


MissingSentinel: t.Final[Sentinel] = Sentinel("missing sentinel")
TrailingKey: t.Final[Sentinel] = Sentinel("trailing key without value")
MisplacedError: t.Final[Sentinel] = Sentinel("misplaced error argument")
InvalidArgumentType: t.Final[Sentinel] = Sentinel("invalid argument type")
OddKeyValueCount: t.Final[Sentinel] = Sentinel("odd key-value count")
CrossPackageError: t.Final[Sentinel] = Sentinel("cross-package error")
