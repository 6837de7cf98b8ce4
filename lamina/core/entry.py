"""\
Structured errors
=================

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides the two structured error nodes built by this
package, `Entry` and `Combined`, along with the construction and
combination operations that create them.

An `Entry` holds an ordered tuple of sentinels, an ordered tuple of
metadata pairs and at most one trailing cause. A `Combined` joins
independent errors without adding anything of its own. Both expose
their direct children through the `MultiError` capability, which is
the single interface the rest of the package is built on.

Neither node is ever mutated after construction. Every enrichment
returns a new node, so published errors are safe to share.
"""

from __future__ import annotations

import typing as t
from collections.abc import Iterable
from uuid import uuid4

from lamina.core.base import Observable
from lamina.core.base import describe
from lamina.core.kv import KV
from lamina.core.parser import Plan
from lamina.core.parser import parse
from lamina.utils.logging import emit
from lamina.utils.logging import get_logger

if t.TYPE_CHECKING:
    from collections.abc import Iterator

__all__: tuple[str, ...] = (
    "ORIGIN_ID",
    "MultiError",
    "combine",
    "new_error",
)

# NOTE(xames3): Every copy of this module gets its own identifier when
# it is first imported. Vendored copies of the package therefore never
# mistake each other's nodes for their own.
ORIGIN_ID: t.Final[str] = uuid4().hex

logger = get_logger(__name__)


@t.runtime_checkable
class MultiError(t.Protocol):
    """Capability of an error exposing its ordered direct children."""

    @property
    def children(self) -> tuple[BaseException, ...]: ...


def copy_state(source: BaseException, target: BaseException) -> None:
    """Carry the chaining state of `source` over to `target`.

    This mirrors what `BaseExceptionGroup.split` does for the groups it
    derives, so a rebuilt node keeps its traceback, explicit cause,
    implicit context and notes.

    :param source: The error being replaced.
    :param target: The freshly built replacement.
    """
    target.__cause__ = source.__cause__
    target.__context__ = source.__context__
    target.__traceback__ = source.__traceback__
    if hasattr(source, "__notes__"):
        target.__notes__ = list(source.__notes__)


class Entry(Observable, Exception):
    """Structured error node.

    Entries are produced by `new_error` and `with_error`. They are not
    meant to be instantiated directly by callers, the constructor is
    kept simple so that the package can rebuild nodes cheaply.

    :param sentinels: Ordered sentinel errors of this layer.
    :param metadata: Ordered metadata pairs of this layer.
    :param cause: Optional trailing cause, defaults to `None`.
    :param origin_id: Identifier of the module copy which built this
        node, defaults to `ORIGIN_ID`.
    """

    def __init__(
        self,
        sentinels: Iterable[BaseException] = (),
        metadata: Iterable[KV] = (),
        cause: BaseException | None = None,
        *,
        origin_id: str = ORIGIN_ID,
    ) -> None:
        """Initialise a structured error node."""
        super().__init__()
        self._sentinels = tuple(sentinels)
        self._metadata = tuple(KV(*pair) for pair in metadata)
        self._cause = cause
        self._origin_id = origin_id

    def __inspect_attrs__(self) -> Iterator[tuple[str, t.Any]]:
        """Yield entry's attributes for introspection."""
        if self._sentinels:
            yield "sentinels", self._sentinels
        if self._metadata:
            yield "metadata", self._metadata
        if self._cause is not None:
            yield "cause", self._cause

    @property
    def sentinels(self) -> tuple[BaseException, ...]:
        """Get the sentinels of this node."""
        return self._sentinels

    @property
    def metadata(self) -> tuple[KV, ...]:
        """Get the metadata pairs of this node."""
        return self._metadata

    @property
    def cause(self) -> BaseException | None:
        """Get the trailing cause of this node."""
        return self._cause

    @property
    def origin_id(self) -> str:
        """Get the identifier of the module copy which built this node."""
        return self._origin_id

    @property
    def children(self) -> tuple[BaseException, ...]:
        """Get the sentinels followed by the cause, if any."""
        if self._cause is None:
            return self._sentinels
        return (*self._sentinels, self._cause)

    @property
    def message(self) -> str:
        """Get the rendered summary of this node."""
        return str(self)

    def extend(self, metadata: Iterable[KV]) -> Entry:
        """Return a copy of this node with `metadata` appended.

        :param metadata: Pairs to append after the existing ones.
        :return: A new entry, this one is left untouched.
        """
        entry = Entry(
            self._sentinels,
            (*self._metadata, *metadata),
            self._cause,
            origin_id=self._origin_id,
        )
        copy_state(self, entry)
        return entry

    def __str__(self) -> str:
        """Render sentinels, metadata and cause in construction order."""
        text = "; ".join(describe(sentinel) for sentinel in self._sentinels)
        if self._metadata:
            pairs = ", ".join(
                f"{key}={self._format(value)}" for key, value in self._metadata
            )
            text = f"{text} [{pairs}]" if text else f"[{pairs}]"
        if self._cause is not None:
            cause = describe(self._cause)
            text = f"{text}: {cause}" if text else cause
        return text


class Combined(Observable, Exception):
    """Composite joining independent errors.

    It carries no sentinels and no metadata of its own, only the
    ordered errors it was built from.

    :param errors: Errors to join, in order.
    """

    def __init__(self, errors: Iterable[BaseException]) -> None:
        """Initialise a composite error."""
        super().__init__()
        self._errors = tuple(errors)

    def __inspect_attrs__(self) -> Iterator[tuple[str, t.Any]]:
        """Yield composite's attributes for introspection."""
        yield "errors", self._errors

    @property
    def children(self) -> tuple[BaseException, ...]:
        """Get the joined errors."""
        return self._errors

    def __str__(self) -> str:
        """Render each joined error on its own line."""
        return "\n".join(describe(error) for error in self._errors)


def is_entry_like(error: t.Any) -> bool:
    """Check if `error` looks like an entry built by any module copy."""
    return (
        isinstance(error, BaseException)
        and isinstance(getattr(error, "origin_id", None), str)
        and hasattr(error, "metadata")
    )


def is_own(error: t.Any) -> bool:
    """Check if `error` is an entry built by this module copy."""
    return isinstance(error, Entry) and error.origin_id == ORIGIN_ID


def is_foreign(error: t.Any) -> bool:
    """Check if `error` is an entry built by another module copy."""
    return is_entry_like(error) and error.origin_id != ORIGIN_ID


def combine(*errors: BaseException | None) -> BaseException | None:
    """Join independent errors into one composite.

    Absent errors are dropped. Order is kept and nothing is
    deduplicated. A single remaining error is still wrapped, so the
    shape of the result only depends on whether anything is left.

    :param errors: Errors to join, any of which may be `None`.
    :return: A composite error or `None` if nothing is left.
    """
    present = tuple(error for error in errors if error is not None)
    if not present:
        return None
    return Combined(present)


def reject(
    plan: Plan,
    prior: BaseException | None = None,
) -> Entry:
    """Build the error reporting a rejected argument list.

    Nothing the caller supplied is dropped: the parsed sentinels and
    metadata are kept, and the prior error and the rejected error value
    (if any) become the cause.

    :param plan: The failed parse result.
    :param prior: Error being enriched when the failure happened,
        defaults to `None`.
    :return: An entry led by the validation sentinel.
    """
    emit(
        logger,
        "arguments_rejected",
        sentinel=plan.failure,
        diagnostics=plan.diagnostics,
    )
    causes = [error for error in (prior, plan.rejected) if error is not None]
    cause = causes[0] if len(causes) == 1 else combine(*causes)
    return Entry(
        (plan.failure, *plan.sentinels),
        (*plan.metadata, *plan.diagnostics),
        cause,
    )


def new_error(*args: t.Any, **metadata: t.Any) -> BaseException:
    """Construct a structured error.

    The arguments are one or more leading sentinels, then key-value
    pairs, then optionally a single trailing cause. Keyword arguments
    are appended as metadata after the positional pairs.

    A malformed argument list never raises. The returned error then
    carries the validation sentinel describing the problem, so it can
    be inspected like any other error.

    .. code-block:: python

        NotFound = Sentinel("not found")

        error = new_error(NotFound, "table", "users", "id", 42, cause)
        assert is_error(error, NotFound)
        assert is_error(error, cause)

    :param args: Sentinels, key-value pairs and an optional cause.
    :param metadata: Extra metadata pairs given as keywords.
    :return: The constructed error.
    """
    plan = parse(args, metadata=metadata)
    if plan.failure is not None:
        return reject(plan)
    return Entry(plan.sentinels, plan.metadata, plan.cause)
