"""Sequential executor: runs a command sequence against the live SUT.

``run_commands(catalog, commands)`` folds the sequence into a ``RunResult``.
For each command it:

1. substitutes ``Var``s in the call with values observed so far,
2. checks the precondition against the current model state,
3. invokes the SUT, capturing any raised failure as data,
4. checks the postcondition on the real result,
5. advances the model state via ``next`` (ok outcomes only),
6. records a ``HistoryEvent`` and binds the command's ``Var``.

The first non-ok outcome ends the run; later commands are never invoked.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any, Sequence

from .catalog import Catalog, Command
from .errors import CommandFailure
from .symbolic import substitute
from .types import (
    Call,
    HistoryEvent,
    Ok,
    Outcome,
    PostconditionViolation,
    PreconditionViolation,
    RunResult,
    RuntimeFailure,
    SymbolicCommand,
)

LOGGER = logging.getLogger(__name__)

_INITIAL: Any = object()


def _invoke(command: Command, state: Any, call: Call) -> Outcome:
    try:
        result = command.impl(*call.args)
        if command.post(state, call.args, result):
            return Ok(result)
        return PostconditionViolation(result)
    except (Exception, SystemExit) as exc:
        LOGGER.error("command %r raised %r", call, exc, exc_info=True)
        return RuntimeFailure.from_exception(exc, traceback.format_exc())


def execute_command(catalog: Catalog, run: RunResult, cmd: SymbolicCommand) -> HistoryEvent:
    """Execute one command in the context of ``run`` (which must be ok)."""
    state = run.state
    call = substitute(cmd.call, run.env)
    command = catalog.lookup(call.command)

    if not command.pre(state, call.args):
        LOGGER.debug("%r: precondition failed", cmd.var)
        return HistoryEvent(state, call, cmd.var, PreconditionViolation(state))

    outcome = _invoke(command, state, call)
    if isinstance(outcome, Ok):
        state = command.next(state, call.args, outcome.value)
    LOGGER.debug("%r = %r -> %s", cmd.var, call, outcome.tag)
    return HistoryEvent(state, call, cmd.var, outcome)


def run_commands(
    catalog: Catalog,
    commands: Sequence[SymbolicCommand],
    *,
    initial_state: Any = _INITIAL,
) -> RunResult:
    """Run ``commands`` against the SUT. Check ``result.ok`` for success."""
    if initial_state is _INITIAL:
        initial_state = catalog.initial_state()
    run = RunResult.initial(initial_state)
    for cmd in commands:
        if not run.ok:
            break
        run = run.record(execute_command(catalog, run, cmd))
    return run


def run_or_raise(
    catalog: Catalog,
    commands: Sequence[SymbolicCommand],
    *,
    initial_state: Any = _INITIAL,
) -> RunResult:
    """Like ``run_commands()`` but raises ``CommandFailure`` on a non-ok outcome."""
    run = run_commands(catalog, commands, initial_state=initial_state)
    if not run.ok:
        raise CommandFailure(run)
    return run
