"""Validity oracle for candidate command sequences.

A shrinker proposes reductions of a generated sequence (commands dropped,
argument values simplified). Because preconditions depend on the state built
up by earlier commands, a reduction is only legal if it still replays from the
model's initial state. ``is_valid`` re-derives that state from scratch and
walks the candidate, using each command's ``Var`` as its stand-in result.

A candidate is rejected when:
- the catalog's initial state differs from the one it was generated from,
- a precondition fails, or
- a call references a ``Var`` that no earlier command binds,
- a ``Var`` is bound twice, or a command is not in the catalog.
"""

from __future__ import annotations

from typing import Any, Sequence

from .catalog import Catalog
from .symbolic import referenced_vars
from .types import SymbolicCommand, Var


def first_invalid(
    catalog: Catalog, state: Any, commands: Sequence[SymbolicCommand]
) -> int | None:
    """Replay ``commands`` symbolically from ``state``.

    Returns the 0-based index of the first offending command, or None if the
    whole sequence replays.
    """
    bound: set[Var] = set()
    for index, cmd in enumerate(commands):
        call = cmd.call
        if cmd.var in bound or not referenced_vars(call.args) <= bound:
            return index
        if call.command not in catalog:
            return index
        command = catalog.lookup(call.command)
        if not command.pre(state, call.args):
            return index
        state = command.next(state, call.args, cmd.var)
        bound.add(cmd.var)
    return None


def is_valid(
    catalog: Catalog, initial_state: Any, commands: Sequence[SymbolicCommand]
) -> bool:
    if not commands:
        return True
    state = catalog.initial_state()
    if state != initial_state:
        return False
    return first_invalid(catalog, state, commands) is None
