"""\
Argument parser
===============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides the classifier which turns the heterogeneous
argument list given to `new_error` and `with_error` into a plan for
building a structured error.

The grammar is kept in one place, as a small state machine walking the
arguments strictly left to right::

    HEAD   -- error ----------> HEAD     (sentinel)
    HEAD   -- anything else --> KEY      (re-read in KEY)
    KEY    -- str ------------> VALUE    (key)
    KEY    -- KV / 2-tuple ---> KEY      (complete pair)
    KEY    -- error, last ----> KEY      (trailing cause)
    VALUE  -- anything -------> KEY      (value)

Every other transition is a validation failure reported through one of
the built-in sentinels. Type checks take precedence over arity checks.
"""

from __future__ import annotations

import enum
import typing as t

from lamina.core.error import InvalidArgumentType
from lamina.core.error import MisplacedError
from lamina.core.error import MissingSentinel
from lamina.core.error import OddKeyValueCount
from lamina.core.error import Sentinel
from lamina.core.error import TrailingKey
from lamina.core.kv import KV

if t.TYPE_CHECKING:
    from collections.abc import Iterator
    from collections.abc import Mapping
    from collections.abc import Sequence

__all__: tuple[str, ...] = (
    "Part",
    "PartKind",
    "Plan",
    "parse",
)


class PartKind(enum.StrEnum):
    """Classification of a single argument."""

    SENTINEL = "sentinel"
    KEY = "key"
    VALUE = "value"
    PAIR = "pair"
    CAUSE = "cause"
    INVALID = "invalid"


class _State(enum.Enum):
    HEAD = enum.auto()
    KEY = enum.auto()
    VALUE = enum.auto()


class Part(t.NamedTuple):
    """Tagged argument produced by the classifier."""

    kind: PartKind
    position: int
    value: t.Any
    failure: Sentinel | None = None


class Plan(t.NamedTuple):
    """Outcome of parsing an argument list.

    :param sentinels: Leading sentinel errors. When `MissingSentinel`
        wins over a later failure, that failure sentinel instead.
    :param metadata: Pairs collected, complete up to any failure.
    :param cause: Trailing cause, if any.
    :param failure: Validation sentinel, `None` on success.
    :param diagnostics: Pairs describing the failure.
    :param rejected: Error value refused by the grammar, if any.
    """

    sentinels: tuple[BaseException, ...] = ()
    metadata: tuple[KV, ...] = ()
    cause: BaseException | None = None
    failure: Sentinel | None = None
    diagnostics: tuple[KV, ...] = ()
    rejected: BaseException | None = None


def _type_name(value: t.Any) -> str:
    return type(value).__name__


def classify(
    args: Sequence[t.Any],
    *,
    head: bool = True,
    trailing_cause: bool = True,
) -> Iterator[Part]:
    """Classify arguments into tagged parts.

    Classification stops right after the first invalid part. A `VALUE`
    part carries the complete pair, joined with the key before it.

    :param args: Arguments to classify.
    :param head: Whether leading errors are sentinels, defaults to
        `True`.
    :param trailing_cause: Whether an error in the last key position is
        the cause, defaults to `True`.
    :yield: Tagged parts in argument order.
    """
    state = _State.HEAD if head else _State.KEY
    last = len(args) - 1
    key = ""
    for position, arg in enumerate(args):
        if state is _State.HEAD:
            if isinstance(arg, BaseException):
                yield Part(PartKind.SENTINEL, position, arg)
                continue
            state = _State.KEY
        if state is _State.VALUE:
            yield Part(PartKind.VALUE, position, KV(key, arg))
            state = _State.KEY
        elif isinstance(arg, str):
            yield Part(PartKind.KEY, position, arg)
            key = arg
            state = _State.VALUE
        elif isinstance(arg, tuple):
            if len(arg) != 2:
                yield Part(PartKind.INVALID, position, arg, OddKeyValueCount)
                return
            if not isinstance(arg[0], str):
                yield Part(
                    PartKind.INVALID, position, arg, InvalidArgumentType
                )
                return
            yield Part(PartKind.PAIR, position, KV(*arg))
        elif isinstance(arg, BaseException):
            if trailing_cause and position == last:
                yield Part(PartKind.CAUSE, position, arg)
            else:
                yield Part(PartKind.INVALID, position, arg, MisplacedError)
                return
        else:
            yield Part(PartKind.INVALID, position, arg, InvalidArgumentType)
            return


def _diagnose(part: Part) -> tuple[KV, ...]:
    if part.failure is OddKeyValueCount:
        return KV("position", part.position), KV("length", len(part.value))
    if isinstance(part.value, tuple):
        return KV("position", part.position), KV(
            "type", _type_name(part.value[0])
        )
    return KV("position", part.position), KV("type", _type_name(part.value))


def parse(
    args: Sequence[t.Any],
    *,
    metadata: Mapping[str, t.Any] | None = None,
    head: bool = True,
    trailing_cause: bool = True,
) -> Plan:
    """Parse an argument list into a construction plan.

    With `head` enabled at least one leading sentinel is required. That
    check wins over any later failure, which is then kept as a secondary
    sentinel along with its diagnostics. Keyword metadata is kept on
    every path, failed or not.

    :param args: Sentinels, key-value pairs and an optional cause.
    :param metadata: Keyword metadata appended after the positional
        pairs, defaults to `None`.
    :param head: Whether leading sentinels are expected, defaults to
        `True`.
    :param trailing_cause: Whether a trailing cause is accepted,
        defaults to `True`.
    :return: The plan, with `failure` set when the list is invalid.
    """
    keywords = tuple(KV(key, value) for key, value in (metadata or {}).items())
    missing = head
    sentinels: list[BaseException] = []
    pairs: list[KV] = []
    cause: BaseException | None = None
    pending: Part | None = None
    for part in classify(args, head=head, trailing_cause=trailing_cause):
        match part.kind:
            case PartKind.SENTINEL:
                sentinels.append(part.value)
                missing = False
            case PartKind.KEY:
                pending = part
            case PartKind.VALUE | PartKind.PAIR:
                pairs.append(part.value)
                pending = None
            case PartKind.CAUSE:
                cause = part.value
            case PartKind.INVALID:
                rejected = part.value
                return _failed(
                    missing,
                    sentinels,
                    (*pairs, *keywords),
                    part.failure,
                    _diagnose(part),
                    rejected if isinstance(rejected, BaseException) else None,
                )
    if pending is not None:
        return _failed(
            missing,
            sentinels,
            (*pairs, *keywords),
            TrailingKey,
            (KV("key", pending.value), KV("position", pending.position)),
        )
    pairs.extend(keywords)
    if missing:
        return Plan(metadata=tuple(pairs), failure=MissingSentinel)
    return Plan(tuple(sentinels), tuple(pairs), cause)


def _failed(
    missing: bool,
    sentinels: list[BaseException],
    pairs: tuple[KV, ...],
    failure: Sentinel | None,
    diagnostics: tuple[KV, ...],
    rejected: BaseException | None = None,
) -> Plan:
    if missing:
        # NOTE(xames3): The later failure trails the missing sentinel.
        return Plan(
            (failure,) if failure is not None else (),
            pairs,
            failure=MissingSentinel,
            diagnostics=diagnostics,
            rejected=rejected,
        )
    return Plan(
        tuple(sentinels),
        pairs,
        failure=failure,
        diagnostics=diagnostics,
        rejected=rejected,
    )
