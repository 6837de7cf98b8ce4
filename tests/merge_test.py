import pytest

from lamina import ORIGIN_ID
from lamina import CrossPackageError
from lamina import KV
from lamina import MisplacedError
from lamina import Sentinel
from lamina import TrailingKey
from lamina import combine
from lamina import error_children
from lamina import error_metadata
from lamina import find_error
from lamina import is_error
from lamina import new_error
from lamina import unwrap
from lamina import with_error
from lamina.core.entry import Combined
from lamina.core.entry import Entry

Driver = Sentinel("driver")
Repository = Sentinel("repository")


class Batch(Exception):
    def __init__(self, *children):
        super().__init__("batch")
        self.children = children


class Unprintable(Exception):
    def __str__(self):
        raise RuntimeError("cannot render")


@pytest.fixture
def cause():
    return ConnectionError("connection refused")


@pytest.fixture
def foreign(cause):
    return Entry((Driver,), (KV("host", "db"),), cause, origin_id="f" * 32)


@pytest.mark.unit
class TestWithError:
    def test_no_parts_is_a_no_op(self):
        base = new_error(Repository, "a", 1)
        enriched = with_error(base)
        assert enriched is base
        assert error_metadata(enriched) == [KV("a", 1)]

    def test_enriches_and_keeps_cause(self, cause):
        base = new_error(Repository, "a", 1, cause)
        enriched = with_error(base, "b", 2)
        assert is_error(enriched, cause)
        assert is_error(enriched, Repository)
        assert error_metadata(enriched) == [KV("a", 1), KV("b", 2)]

    def test_does_not_mutate_the_original(self):
        base = new_error(Repository, "a", 1)
        with_error(base, "b", 2)
        assert error_metadata(base) == [KV("a", 1)]

    def test_keyword_metadata(self):
        enriched = with_error(new_error(Repository), user="eren", id=7)
        assert error_metadata(enriched) == [KV("user", "eren"), KV("id", 7)]

    def test_no_prior_builds_bare_node(self):
        enriched = with_error(None, "k", 1)
        assert error_metadata(enriched) == [KV("k", 1)]
        assert error_children(enriched) == []

    def test_no_prior_and_no_parts(self):
        assert with_error(None) is None

    def test_non_error_first_argument_is_a_part(self):
        enriched = with_error("k", 1)
        assert error_metadata(enriched) == [KV("k", 1)]

    def test_plain_error_gets_bare_node_joined(self, cause):
        enriched = with_error(cause, "k", 1)
        assert isinstance(enriched, Combined)
        assert enriched.children[0] is cause
        assert error_metadata(enriched) == [KV("k", 1)]

    def test_merges_into_rightmost_own_entry(self, cause):
        left = new_error(Driver, "side", "left")
        right = new_error(Repository, "side", "right")
        enriched = with_error(combine(left, cause, right), "k", 1)
        children = unwrap(enriched)
        assert children[0] is left
        assert children[1] is cause
        assert children[2].metadata == (KV("side", "right"), KV("k", 1))
        assert len(children) == 3

    def test_skips_plain_errors_when_scanning(self, cause):
        entry = new_error(Driver, "side", "left")
        enriched = with_error(combine(entry, cause), "k", 1)
        assert unwrap(enriched)[0].metadata == (KV("side", "left"), KV("k", 1))
        assert unwrap(enriched)[1] is cause

    def test_appends_bare_node_when_no_entry(self, cause):
        other = KeyError("other")
        enriched = with_error(combine(cause, other), "k", 1)
        children = unwrap(enriched)
        assert children[:2] == (cause, other)
        assert children[2].metadata == (KV("k", 1),)

    def test_never_descends_below_one_level(self):
        inner = new_error(Driver, "depth", 2)
        outer = combine(combine(inner))
        enriched = with_error(outer, "k", 1)
        assert unwrap(unwrap(enriched)[0])[0] is inner
        assert unwrap(enriched)[1].metadata == (KV("k", 1),)

    def test_exception_group_is_rebuilt(self, cause):
        entry = new_error(Driver, "a", 1)
        group = ExceptionGroup("batch failed", [cause, entry])
        enriched = with_error(group, "k", 1)
        assert isinstance(enriched, ExceptionGroup)
        assert enriched.message == "batch failed"
        assert enriched.exceptions[0] is cause
        assert error_metadata(enriched) == [KV("a", 1), KV("k", 1)]
        assert group.exceptions[1] is entry

    def test_exception_group_without_entry(self, cause):
        group = ExceptionGroup("batch failed", [cause])
        enriched = with_error(group, "k", 1)
        assert len(enriched.exceptions) == 2
        assert error_metadata(enriched) == [KV("k", 1)]

    def test_misplaced_error_in_parts(self, cause):
        base = new_error(Repository, "a", 1)
        enriched = with_error(base, "k", 1, cause)
        assert is_error(enriched, MisplacedError)
        assert is_error(enriched, Repository)
        assert is_error(enriched, cause)

    def test_misplaced_error_without_prior(self, cause):
        enriched = with_error(None, "k", 1, cause)
        assert is_error(enriched, MisplacedError)
        assert is_error(enriched, cause)

    def test_trailing_key_keeps_prior(self):
        base = new_error(Repository, "a", 1)
        enriched = with_error(base, "orphan")
        assert is_error(enriched, TrailingKey)
        assert is_error(enriched, Repository)

    def test_local_entry_is_not_flagged(self):
        enriched = with_error(new_error(Repository, "local", "data"), "x", 1)
        assert not is_error(enriched, CrossPackageError)

    def test_custom_multi_error_is_kept_intact(self):
        entry = new_error(Driver, "a", 1)
        multi = Batch(ValueError("x"), entry)
        enriched = with_error(multi, "k", 2)
        assert isinstance(enriched, Combined)
        assert enriched.children[0] is multi
        assert multi.children[1] is entry
        assert find_error(enriched, Batch) == (multi, True)
        assert unwrap(enriched)[1].metadata == (KV("k", 2),)

    def test_unprintable_error_is_enriched(self):
        enriched = with_error(Unprintable(), "k", 1)
        assert error_metadata(enriched) == [KV("k", 1)]


@pytest.mark.unit
class TestCrossPackage:
    def test_foreign_prior_is_flagged(self, foreign, cause):
        enriched = with_error(foreign, "k", 1)
        assert is_error(enriched, CrossPackageError)
        assert is_error(enriched, Driver)
        assert is_error(enriched, cause)
        assert foreign.metadata == (KV("host", "db"),)

    def test_flag_carries_both_identifiers(self, foreign):
        enriched = with_error(foreign, "k", 1)
        assert error_metadata(enriched) == [
            KV("origin_id", "f" * 32),
            KV("expected_id", ORIGIN_ID),
        ]

    def test_new_metadata_is_joined_alongside(self, foreign):
        enriched = with_error(foreign, "k", 1)
        flagged, bare = unwrap(enriched)
        assert flagged.cause is foreign
        assert bare.metadata == (KV("k", 1),)

    def test_foreign_child_is_flagged_in_place(self, foreign, cause):
        enriched = with_error(combine(cause, foreign), "k", 1)
        children = unwrap(enriched)
        assert children[0] is cause
        assert children[1].sentinels == (CrossPackageError,)
        assert children[1].cause is foreign
        assert children[2].metadata == (KV("k", 1),)

    def test_own_entry_wins_over_foreign_child(self, foreign):
        own = new_error(Repository, "a", 1)
        enriched = with_error(combine(own, foreign), "k", 1)
        assert not is_error(enriched, CrossPackageError)
        assert unwrap(enriched)[0].metadata == (KV("a", 1), KV("k", 1))
        assert unwrap(enriched)[1] is foreign
