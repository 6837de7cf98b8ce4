"""\
Base Tools
==========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides the observable mixin shared by the structured
error nodes. It offers consistent, size-limited formatting of values so
that rendering a deeply layered error never produces runaway output.
"""

from __future__ import annotations

import typing as t
from collections.abc import Iterator

__all__: tuple[str, ...] = (
    "Observable",
    "describe",
)

_AttributeStream = Iterator[tuple[str, t.Any]]

# NOTE(xames3): These limits are used to prevent excessive output when
# metadata carries large payloads. They are not meant to be changed by
# users and as such are defined as final constants.
_SEQUENCE_LIMIT: t.Final[int] = 5
_DICTIONARY_LIMIT: t.Final[int] = 3
_STRING_LIMIT: t.Final[int] = 60


def describe(error: BaseException) -> str:
    """Return the message of an error, or its type name if empty."""
    return str(error) or type(error).__name__


class Observable:
    """Provide observable behaviour for derived classes.

    This class serves as a mixin for objects that need to expose their
    internal state in a consistent and controlled manner. It handles
    different data types and presents them as proper key-value pairs
    with sensible limits to prevent excessive output.

    .. note::

        This class declares empty `__slots__` so that it can be mixed
        into exception classes without changing their layout.
    """

    __slots__: tuple[str, ...] = ()

    def __inspect_attrs__(self) -> _AttributeStream:
        """Inspect and yield public attributes of the instance.

        :yield: An iterator yielding tuples of attribute names and their
            corresponding values.
        """
        for attr, value in getattr(self, "__dict__", {}).items():
            if not attr.startswith("_") and value is not None:
                yield attr, value

    def _format(self, value: t.Any) -> str:
        """Format value for string representation.

        Circular references are replaced with type indicators, long
        strings are truncated, and large sequences and dictionaries show
        their type and length rather than their full contents.

        :param value: The value to format.
        :return: A formatted string representation of the value.
        """
        if value is self:
            return f"<circular-{type(self).__name__}>"
        elif isinstance(value, str) and len(value) > _STRING_LIMIT:
            return repr(f"{value[:_STRING_LIMIT - 3]}...")
        elif (
            isinstance(value, (list, tuple, set))
            and len(value) > _SEQUENCE_LIMIT
        ):
            return f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict) and len(value) > _DICTIONARY_LIMIT:
            return f"dict({len(value)} items)"
        elif isinstance(value, BaseException):
            return repr(describe(value))
        return repr(value)

    def __repr__(self) -> str:
        """Return a string representation of the instance.

        :return: Class name followed by the formatted non-private
            attributes.
        """
        attrs = [
            f"{name}={self._format(value)}"
            for name, value in self.__inspect_attrs__()
        ]
        extra = ", ".join(attrs) if attrs else ""
        return f"{type(self).__name__}({extra})"
