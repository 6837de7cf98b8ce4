"""\
Key-value pairs
===============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Saturday, October 17 2026

This module provides the key-value pair carried as metadata by the
structured error nodes.
"""

from __future__ import annotations

import typing as t

__all__: tuple[str, ...] = ("KV",)


class KV(t.NamedTuple):
    """Immutable metadata pair.

    Keys need not be unique within a node. The order in which pairs are
    attached is preserved, the most recent one being the last.

    :param key: Name of the metadata field.
    :param value: Value of the metadata field, of any type.
    """

    key: str
    value: t.Any
