"""Tests for src/statem/catalog.py: command records, registration and weights."""

import pytest

from src.statem.catalog import Catalog, Command
from src.statem.errors import CatalogError, DuplicateCommandError, UnknownCommandError


def _noop(*args):
    return None


class TestCommandDefaults:
    def test_defaults(self):
        c = Command("find", impl=_noop)
        assert c.args("any state") == []
        assert c.pre("any state", []) is True
        assert c.next("state", [1], "result") == "state"
        assert c.post("state", [1], "result") is True

    def test_rejects_empty_name(self):
        with pytest.raises(CatalogError):
            Command("", impl=_noop)

    def test_rejects_non_callable_impl(self):
        with pytest.raises(CatalogError):
            Command("x", impl=42)  # type: ignore[arg-type]


class TestRegistration:
    def test_constructor_commands(self):
        cat = Catalog(initial_state=list, commands=[Command("a", _noop), Command("b", _noop)])
        assert cat.names == ("a", "b")
        assert len(cat) == 2
        assert "a" in cat
        assert "z" not in cat
        assert [c.name for c in cat] == ["a", "b"]

    def test_duplicate_rejected(self):
        cat = Catalog(initial_state=list, commands=[Command("a", _noop)])
        with pytest.raises(DuplicateCommandError):
            cat.add(Command("a", _noop))

    def test_decorator_registers_impl(self):
        cat = Catalog(initial_state=list)

        @cat.command(pre=lambda s, args: False)
        def launch(x):
            return x * 2

        assert launch(2) == 4  # decorator returns the function unchanged
        cmd = cat.lookup("launch")
        assert cmd.impl is launch
        assert cmd.pre([], [1]) is False
        assert cmd.post([], [1], 2) is True

    def test_decorator_explicit_name(self):
        cat = Catalog(initial_state=list)

        @cat.command("remove")
        def _delete(key):
            return key

        assert cat.names == ("remove",)

    def test_unknown_lookup(self):
        cat = Catalog(initial_state=list)
        with pytest.raises(UnknownCommandError) as exc:
            cat.lookup("nope")
        assert exc.value.name == "nope"

    def test_initial_state_must_be_callable(self):
        with pytest.raises(CatalogError):
            Catalog(initial_state=[])  # type: ignore[arg-type]

    def test_initial_state_is_fresh(self):
        cat = Catalog(initial_state=list)
        assert cat.initial_state() == []
        assert cat.initial_state() is not cat.initial_state()

    def test_invoke(self):
        cat = Catalog(initial_state=list, commands=[Command("add", lambda a, b: a + b)])
        assert cat.invoke("add", (2, 3)) == 5


class TestEligible:
    def test_uniform_without_weight(self):
        cat = Catalog(initial_state=list, commands=[Command("a", _noop), Command("b", _noop)])
        assert [(w, c.name) for w, c in cat.eligible([])] == [(1, "a"), (1, "b")]

    def test_weight_filters_and_biases(self):
        cat = Catalog(
            initial_state=list,
            commands=[Command("find", _noop), Command("cache", _noop), Command("flush", _noop)],
            weight=lambda s: {"find": 3, "cache": 1} if s else {"cache": 1},
        )
        assert [(w, c.name) for w, c in cat.eligible([])] == [(1, "cache")]
        assert [(w, c.name) for w, c in cat.eligible([1])] == [(3, "find"), (1, "cache")]

    def test_weight_naming_unknown_command_fails_fast(self):
        cat = Catalog(
            initial_state=list,
            commands=[Command("a", _noop)],
            weight=lambda s: {"a": 1, "ghost": 2},
        )
        with pytest.raises(UnknownCommandError):
            cat.eligible([])

    @pytest.mark.parametrize("bad", [0, -2, 1.5, True])
    def test_weight_must_be_positive_int(self, bad):
        cat = Catalog(initial_state=list, commands=[Command("a", _noop)], weight=lambda s: {"a": bad})
        with pytest.raises(CatalogError):
            cat.eligible([])
