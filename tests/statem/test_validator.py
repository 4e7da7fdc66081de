"""Tests for src/statem/validator.py: shrink candidate validity."""

import itertools

from src.statem.catalog import Catalog, Command
from src.statem.types import Call, SymbolicCommand, Var
from src.statem.validator import first_invalid, is_valid
from tests.statem.models import CounterHarness, StackHarness


def _seq(*calls):
    return [SymbolicCommand(Var(i), c) for i, c in enumerate(calls, start=1)]


class TestIsValid:
    def test_empty_is_valid(self):
        cat = StackHarness().catalog
        assert is_valid(cat, [], [])

    def test_pop_from_empty_is_invalid(self):
        cat = StackHarness().catalog
        assert not is_valid(cat, [], _seq(Call("pop")))

    def test_push_then_pop_is_valid(self):
        cat = StackHarness().catalog
        assert is_valid(cat, [], _seq(Call("push", (1,)), Call("pop")))

    def test_dropping_push_invalidates_pop(self):
        cat = StackHarness().catalog
        full = _seq(Call("push", (1,)), Call("pop"), Call("push", (2,)))
        shrunk = full[1:]
        assert is_valid(cat, [], full)
        assert not is_valid(cat, [], shrunk)

    def test_initial_state_mismatch(self):
        cat = StackHarness().catalog
        assert not is_valid(cat, [7], _seq(Call("push", (1,))))

    def test_nondeterministic_initial_state_rejected(self):
        counter = itertools.count()
        cat = Catalog(initial_state=lambda: next(counter), commands=[Command("noop", lambda: None)])
        generated_from = cat.initial_state()
        assert not is_valid(cat, generated_from, _seq(Call("noop")))

    def test_unknown_command_is_invalid(self):
        cat = StackHarness().catalog
        assert not is_valid(cat, [], _seq(Call("peek")))

    def test_state_never_reused_between_checks(self):
        # initial_state() is re-derived, so a mutated list from a previous
        # walk cannot leak into the next one.
        cat = StackHarness().catalog
        seq = _seq(Call("push", (1,)), Call("pop"))
        assert is_valid(cat, [], seq)
        assert is_valid(cat, [], seq)


class TestSymbolicReferences:
    def test_var_used_after_binding_is_valid(self):
        cat = CounterHarness().catalog
        assert is_valid(cat, (), _seq(Call("create"), Call("incr", (Var(1),))))

    def test_reference_to_deleted_command_is_invalid(self):
        cat = CounterHarness().catalog
        # Var(1) is never bound once `create` has been shrunk away.
        seq = [
            SymbolicCommand(Var(2), Call("create")),
            SymbolicCommand(Var(3), Call("incr", (Var(1),))),
        ]
        assert not is_valid(cat, (), seq)

    def test_gaps_in_variable_numbering_are_allowed(self):
        cat = CounterHarness().catalog
        seq = [
            SymbolicCommand(Var(2), Call("create")),
            SymbolicCommand(Var(5), Call("incr", (Var(2),))),
        ]
        assert is_valid(cat, (), seq)

    def test_rebinding_a_var_is_invalid(self):
        cat = StackHarness().catalog
        seq = [
            SymbolicCommand(Var(1), Call("push", (1,))),
            SymbolicCommand(Var(1), Call("push", (2,))),
        ]
        assert not is_valid(cat, [], seq)


class TestFirstInvalid:
    def test_none_when_valid(self):
        cat = StackHarness().catalog
        assert first_invalid(cat, [], _seq(Call("push", (1,)), Call("pop"))) is None

    def test_index_of_failure(self):
        cat = StackHarness().catalog
        seq = _seq(Call("push", (1,)), Call("pop"), Call("pop"), Call("push", (3,)))
        assert first_invalid(cat, [], seq) == 2

    def test_from_intermediate_state(self):
        cat = StackHarness().catalog
        assert first_invalid(cat, [5], _seq(Call("pop"))) is None
