"""\
Extraction helpers
==================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides the helpers reading structured errors back out.

Metadata and children are read from the first entry found at the top
or one level down. Matching a sentinel or searching for a type walks
the whole tree instead, following the children of structured nodes, the
exceptions of native exception groups and explicit `__cause__` chains.
"""

from __future__ import annotations

import typing as t

from lamina.core.entry import MultiError
from lamina.core.entry import is_own

if t.TYPE_CHECKING:
    from collections.abc import Iterator

    from lamina.core.entry import Entry
    from lamina.core.kv import KV

__all__: tuple[str, ...] = (
    "error_children",
    "error_metadata",
    "find_error",
    "is_error",
    "unwrap",
    "walk",
)

T = t.TypeVar("T", bound=BaseException)


def unwrap(error: BaseException | None) -> tuple[BaseException, ...]:
    """Return the direct children of `error`, one level only.

    :param error: Error to unwrap.
    :return: Children exposed through the `MultiError` capability or by
        a native exception group, otherwise an empty tuple.
    """
    if isinstance(error, BaseExceptionGroup):
        return tuple(error.exceptions)
    if isinstance(error, BaseException) and isinstance(error, MultiError):
        return tuple(error.children)
    return ()


def walk(error: BaseException | None) -> Iterator[BaseException]:
    """Walk every error reachable from `error`, depth first.

    The walk is pre-order, children before the explicit cause, and
    never yields the same object twice.

    :param error: Root of the walk.
    :yield: Each reachable error, starting with `error` itself.
    """
    if not isinstance(error, BaseException):
        return
    seen: set[int] = set()
    stack: list[BaseException] = [error]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node
        following = list(unwrap(node))
        if node.__cause__ is not None:
            following.append(node.__cause__)
        stack.extend(reversed(following))


def is_error(
    error: BaseException | None,
    target: BaseException | type[BaseException],
) -> bool:
    """Check if `target` is present anywhere in `error`.

    :param error: Error to search.
    :param target: Sentinel instance, matched by identity or equality,
        or an exception class, matched with `isinstance`.
    :return: `True` if a match was found, otherwise `False`.
    """
    for node in walk(error):
        if isinstance(target, type):
            if isinstance(node, target):
                return True
        elif node is target or node == target:
            return True
    return False


def find_error(
    error: BaseException | None,
    kind: type[T],
) -> tuple[T | None, bool]:
    """Find the first error of type `kind` anywhere in `error`.

    .. code-block:: python

        found, ok = find_error(error, OSError)
        if ok:
            print(found.filename)

    :param error: Error to search.
    :param kind: Exception class to look for.
    :return: The first match and `True`, or `None` and `False`.
    """
    for node in walk(error):
        if isinstance(node, kind):
            return node, True
    return None, False


def _locate(error: BaseException | None) -> Entry | None:
    if is_own(error):
        return error
    for child in unwrap(error):
        if is_own(child):
            return child
    return None


def error_metadata(error: BaseException | None) -> list[KV]:
    """Return the metadata of the first entry in `error`.

    :param error: Error to read.
    :return: Metadata pairs in insertion order, possibly empty.
    """
    entry = _locate(error)
    return list(entry.metadata) if entry is not None else []


def error_children(error: BaseException | None) -> list[BaseException]:
    """Return the sentinels and cause of the first entry in `error`.

    :param error: Error to read.
    :return: Child errors in order, possibly empty.
    """
    entry = _locate(error)
    return list(entry.children) if entry is not None else []
