import pytest

from lamina.core.error import InvalidArgumentType
from lamina.core.error import MisplacedError
from lamina.core.error import MissingSentinel
from lamina.core.error import OddKeyValueCount
from lamina.core.error import Sentinel
from lamina.core.error import TrailingKey
from lamina.core.kv import KV
from lamina.core.parser import PartKind
from lamina.core.parser import classify
from lamina.core.parser import parse

Driver = Sentinel("driver")
Repository = Sentinel("repository")


@pytest.fixture
def cause():
    return ConnectionError("connection refused")


@pytest.mark.unit
class TestClassify:
    def test_tags_every_argument(self, cause):
        parts = list(classify([Driver, "host", "db", ("port", 5432), cause]))
        assert [part.kind for part in parts] == [
            PartKind.SENTINEL,
            PartKind.KEY,
            PartKind.VALUE,
            PartKind.PAIR,
            PartKind.CAUSE,
        ]
        assert [part.position for part in parts] == [0, 1, 2, 3, 4]

    def test_stops_after_first_invalid_part(self):
        parts = list(classify([Driver, 3.14, "key", "value"]))
        assert parts[-1].kind is PartKind.INVALID
        assert parts[-1].failure is InvalidArgumentType
        assert len(parts) == 2

    def test_head_disabled_starts_with_keys(self, cause):
        parts = list(classify([cause], head=False, trailing_cause=False))
        assert parts[0].kind is PartKind.INVALID
        assert parts[0].failure is MisplacedError


@pytest.mark.unit
class TestParse:
    @pytest.mark.parametrize(
        "args, sentinels, metadata",
        [
            ([Driver], (Driver,), ()),
            ([Driver, Repository], (Driver, Repository), ()),
            ([Driver, "key", "value"], (Driver,), (KV("key", "value"),)),
            (
                [Driver, Repository, "a", 1, "b", None],
                (Driver, Repository),
                (KV("a", 1), KV("b", None)),
            ),
            ([Driver, KV("a", 1), ("b", 2)], (Driver,), (("a", 1), ("b", 2))),
        ],
    )
    def test_valid(self, args, sentinels, metadata):
        plan = parse(args)
        assert plan.failure is None
        assert plan.sentinels == sentinels
        assert plan.metadata == metadata
        assert plan.cause is None

    def test_trailing_error_is_cause(self, cause):
        plan = parse([Driver, "key", "value", cause])
        assert plan.failure is None
        assert plan.sentinels == (Driver,)
        assert plan.cause is cause

    def test_error_as_value_is_metadata(self, cause):
        value = ValueError("this is a value")
        plan = parse([Driver, "cause", value, cause])
        assert plan.metadata == (KV("cause", value),)
        assert plan.cause is cause

    def test_errors_at_head_are_all_sentinels(self, cause):
        plan = parse([Driver, cause])
        assert plan.sentinels == (Driver, cause)
        assert plan.cause is None

    def test_keyword_metadata_is_appended(self):
        plan = parse([Driver, "a", 1], metadata={"b": 2, "c": 3})
        assert plan.metadata == (KV("a", 1), KV("b", 2), KV("c", 3))

    @pytest.mark.parametrize("args", [[], ["key", "value"], ["key"]])
    def test_missing_sentinel(self, args):
        assert parse(args).failure is MissingSentinel

    def test_missing_sentinel_keeps_metadata(self):
        plan = parse(["key", "value"])
        assert plan.metadata == (KV("key", "value"),)

    def test_trailing_key(self):
        plan = parse([Driver, "key", "value", "orphan"])
        assert plan.failure is TrailingKey
        assert plan.metadata == (KV("key", "value"),)
        assert plan.diagnostics == (KV("key", "orphan"), KV("position", 3))

    @pytest.mark.parametrize(
        "value, name",
        [(123, "int"), (4.5, "float"), (None, "NoneType"), ([], "list")],
    )
    def test_invalid_argument_type(self, value, name):
        plan = parse([Driver, "key", "value", value])
        assert plan.failure is InvalidArgumentType
        assert KV("type", name) in plan.diagnostics
        assert KV("position", 3) in plan.diagnostics

    def test_pair_with_non_string_key(self):
        plan = parse([Driver, (1, "value")])
        assert plan.failure is InvalidArgumentType
        assert KV("type", "int") in plan.diagnostics

    @pytest.mark.parametrize("pair", [(), ("a",), ("a", 1, 2)])
    def test_odd_key_value_count(self, pair):
        plan = parse([Driver, pair])
        assert plan.failure is OddKeyValueCount
        assert plan.diagnostics == (KV("position", 1), KV("length", len(pair)))

    def test_misplaced_error(self, cause):
        plan = parse([Driver, "key", "value", cause, "other", 1])
        assert plan.failure is MisplacedError
        assert plan.rejected is cause
        assert plan.diagnostics == (
            KV("position", 3),
            KV("type", "ConnectionError"),
        )

    def test_type_check_wins_over_arity(self):
        plan = parse([Driver, "a", 1, 2])
        assert plan.failure is InvalidArgumentType

    def test_missing_sentinel_wins_over_later_failures(self):
        plan = parse(["key", "value", 42])
        assert plan.failure is MissingSentinel
        assert plan.sentinels == (InvalidArgumentType,)
        assert plan.metadata == (KV("key", "value"),)
        assert plan.diagnostics == (KV("position", 2), KV("type", "int"))

    def test_missing_sentinel_keeps_orphan_key(self):
        plan = parse(["a", 1, "orphan"])
        assert plan.failure is MissingSentinel
        assert plan.sentinels == (TrailingKey,)
        assert plan.diagnostics == (KV("key", "orphan"), KV("position", 2))

    @pytest.mark.parametrize(
        "args, failure",
        [
            ([Driver, "k", 1, 2.5], InvalidArgumentType),
            ([Driver, "k", 1, "orphan"], TrailingKey),
            ([Driver, "k", 1, ("a",)], OddKeyValueCount),
            (["k", 1, 2.5], MissingSentinel),
        ],
    )
    def test_keyword_metadata_survives_failures(self, args, failure):
        plan = parse(args, metadata={"user": "eren"})
        assert plan.failure is failure
        assert plan.metadata == (KV("k", 1), KV("user", "eren"))

    def test_value_parts_carry_their_pair(self):
        parts = list(classify([Driver, "host", "db"]))
        assert parts[-1].value == KV("host", "db")

    def test_enrichment_grammar_refuses_any_error(self, cause):
        plan = parse(["key", "value", cause], head=False, trailing_cause=False)
        assert plan.failure is MisplacedError
        assert plan.rejected is cause
