"""\
Enrichment
==========

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides `with_error`, which adds metadata to an existing
error without introducing a new sentinel or a new cause.

The metadata is merged into the most recent entry built by this module
copy which is reachable from the top: the error itself, or one of the
direct children of a join (`Combined` or an exception group) scanned
from right to left. Other errors exposing children are left untouched
and the merge never descends further than one level. When no such
entry exists, a bare metadata node is joined alongside the error
instead, so nothing is ever discarded.

Entries built by another copy of this package are never merged into.
They are flagged with `CrossPackageError` and left intact.
"""

from __future__ import annotations

import typing as t

from lamina.core.entry import ORIGIN_ID
from lamina.core.entry import Combined
from lamina.core.entry import Entry
from lamina.core.entry import combine
from lamina.core.entry import copy_state
from lamina.core.entry import is_foreign
from lamina.core.entry import is_own
from lamina.core.entry import reject
from lamina.core.error import CrossPackageError
from lamina.core.extract import unwrap
from lamina.core.kv import KV
from lamina.core.parser import parse
from lamina.utils.logging import emit
from lamina.utils.logging import get_logger

if t.TYPE_CHECKING:
    from collections.abc import Sequence

__all__: tuple[str, ...] = ("with_error",)

logger = get_logger(__name__)


def flag_foreign(error: BaseException) -> Entry:
    """Wrap an entry built by another module copy.

    :param error: The foreign entry.
    :return: An entry led by `CrossPackageError` whose cause is the
        untouched foreign entry.
    """
    origin_id = getattr(error, "origin_id", None)
    emit(
        logger,
        "cross_package_detected",
        origin_id=origin_id,
        expected_id=ORIGIN_ID,
    )
    return Entry(
        (CrossPackageError,),
        (KV("origin_id", origin_id), KV("expected_id", ORIGIN_ID)),
        error,
    )


def _rebuild(
    error: Combined | BaseExceptionGroup,
    children: Sequence[BaseException],
) -> BaseException:
    if isinstance(error, BaseExceptionGroup):
        group = error.derive(children)
        copy_state(error, group)
        return group
    combined = Combined(children)
    copy_state(error, combined)
    return combined


def _merge(error: BaseException, metadata: tuple[KV, ...]) -> BaseException:
    if is_own(error):
        emit(logger, "metadata_merged", node=error)
        return error.extend(metadata)
    if is_foreign(error):
        return combine(flag_foreign(error), Entry(metadata=metadata))
    # NOTE(xames3): Only joins built here or by the interpreter are
    # rebuilt, any other error with children is kept as it is.
    if not isinstance(error, Combined | BaseExceptionGroup):
        emit(logger, "metadata_appended", node=error)
        return combine(error, Entry(metadata=metadata))
    children = list(unwrap(error))
    for index in reversed(range(len(children))):
        child = children[index]
        if is_own(child):
            emit(logger, "metadata_merged", node=child)
            children[index] = child.extend(metadata)
            return _rebuild(error, children)
    for index in reversed(range(len(children))):
        if is_foreign(children[index]):
            children[index] = flag_foreign(children[index])
            break
    emit(logger, "metadata_appended", node=error)
    return _rebuild(error, (*children, Entry(metadata=metadata)))


def with_error(
    error: BaseException | None,
    /,
    *parts: t.Any,
    **metadata: t.Any,
) -> BaseException | None:
    """Enrich an error with metadata.

    Parts are key-value pairs only. An error value where a key is
    expected is reported with `MisplacedError`, enrichment never takes a
    new cause. If `error` is not an exception at all, it is read as the
    first part and there is nothing to enrich.

    .. code-block:: python

        try:
            row = fetch(user_id)
        except Exception as error:
            raise with_error(error, "user_id", user_id) from None

    :param error: Error to enrich, may be `None`.
    :param parts: Key-value pairs to add.
    :param metadata: Extra metadata pairs given as keywords.
    :return: The enriched error, a bare metadata node if there was no
        error, or `None` if there was nothing at all.
    """
    if error is not None and not isinstance(error, BaseException):
        parts = (error, *parts)
        error = None
    plan = parse(parts, metadata=metadata, head=False, trailing_cause=False)
    if plan.failure is not None:
        return reject(plan, error)
    if error is None:
        return Entry(metadata=plan.metadata) if plan.metadata else None
    if not plan.metadata:
        return error
    return _merge(error, plan.metadata)
