"""Hypothesis strategies for precondition-respecting command sequences.

Generation is a left-to-right fold over the model state. At each position:

1. the eligible commands are read from the catalog (``weight`` or uniform),
2. a command is chosen by weight and its arguments are drawn as a fixed-arity
   tuple from ``args(state)``,
3. the draw is repeated until ``pre(state, args)`` holds (bounded by
   ``EngineConfig.max_precondition_retries``),
4. the command's result is bound to ``Var(position)`` and the state advances
   via ``next(state, args, Var(position))``.

No command is executed during generation; ``Var``s stand in for results.

``commands()`` draws the sequence length, then filters the sequence through
``is_valid`` so that every shrink Hypothesis tries is re-checked against the
model before it is used.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Sequence

import hypothesis.strategies as st
from hypothesis import reject

from .catalog import Catalog, Command
from .config import EngineConfig
from .errors import GenerationError
from .types import Call, SymbolicCommand, Var
from .validator import is_valid

LOGGER = logging.getLogger(__name__)

_DEFAULT_CONFIG = EngineConfig()
_INITIAL: Any = object()


def _as_strategy(gen: Any) -> st.SearchStrategy[Any]:
    if isinstance(gen, st.SearchStrategy):
        return gen
    return st.just(gen)


def args_strategy(command: Command, state: Any) -> st.SearchStrategy[tuple[Any, ...]]:
    """Arguments of ``command`` in ``state``. Shrinks values, never arity."""
    return st.tuples(*(_as_strategy(g) for g in command.args(state)))


def _choose(draw: Any, weighted: Sequence[tuple[int, Command]]) -> Command:
    total = sum(w for w, _ in weighted)
    ticket = draw(st.integers(min_value=0, max_value=total - 1))
    for w, command in weighted:
        if ticket < w:
            return command
        ticket -= w
    raise AssertionError("unreachable: ticket exceeds total weight")


@st.composite
def calls(draw: Any, catalog: Catalog, state: Any, config: EngineConfig | None = None) -> Call:
    """One call whose precondition holds in ``state``."""
    config = config or _DEFAULT_CONFIG
    weighted = catalog.eligible(state)
    if not weighted:
        raise GenerationError(f"no command is eligible in state {state!r}")

    for _ in range(config.max_precondition_retries):
        command = _choose(draw, weighted)
        args = draw(args_strategy(command, state))
        if command.pre(state, args):
            return Call(command.name, args)

    LOGGER.warning(
        "no precondition held after %d draws in state %r",
        config.max_precondition_retries,
        state,
    )
    reject()


@st.composite
def command_list(
    draw: Any,
    catalog: Catalog,
    size: int,
    *,
    state: Any = _INITIAL,
    config: EngineConfig | None = None,
) -> list[SymbolicCommand]:
    """Exactly ``size`` commands, starting from ``state`` (default: initial state)."""
    if state is _INITIAL:
        state = catalog.initial_state()
    sequence: list[SymbolicCommand] = []
    for position in range(1, size + 1):
        call = draw(calls(catalog, state, config))
        var = Var(position)
        state = catalog.lookup(call.command).next(state, call.args, var)
        sequence.append(SymbolicCommand(var, call))
    return sequence


@st.composite
def _sequences(draw: Any, catalog: Catalog, config: EngineConfig) -> list[SymbolicCommand]:
    initial_state = catalog.initial_state()
    size = draw(st.integers(min_value=config.min_commands, max_value=config.max_commands))
    return draw(
        command_list(catalog, size, state=initial_state, config=config).filter(
            partial(is_valid, catalog, initial_state)
        )
    )


def commands(
    catalog: Catalog, config: EngineConfig | None = None
) -> st.SearchStrategy[list[SymbolicCommand]]:
    """Strategy of command sequences for ``catalog``.

    The weight map of the initial state is evaluated here, so a ``weight``
    callback naming an undeclared command fails before any example runs.
    """
    config = config or _DEFAULT_CONFIG
    catalog.eligible(catalog.initial_state())
    return _sequences(catalog, config)
