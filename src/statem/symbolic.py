"""Symbolic variable substitution and sequence projections.

``substitute(value, env)`` walks a call (or any argument value) and replaces
every ``Var`` with its bound value from ``env``. Lists, tuples and dict
values are walked recursively; everything else passes through unchanged.

A ``Var`` missing from ``env`` means a call references a result that was never
produced. That is logged and the variable is left in place so that the run
keeps going and its history stays available for diagnosis.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .types import Call, SymbolicCommand, Var

LOGGER = logging.getLogger(__name__)


def substitute(value: Any, env: Mapping[Var, Any]) -> Any:
    if isinstance(value, Var):
        if value in env:
            return env[value]
        LOGGER.error("substitute: unbound %r (bound: %s)", value, sorted(env))
        return value
    if isinstance(value, Call):
        return Call(
            command=substitute(value.command, env),
            args=tuple(substitute(a, env) for a in value.args),
        )
    if isinstance(value, list):
        return [substitute(v, env) for v in value]
    if isinstance(value, tuple):
        items = [substitute(v, env) for v in value]
        if hasattr(value, "_fields"):
            return type(value)(*items)
        return tuple(items)
    if isinstance(value, dict):
        return {k: substitute(v, env) for k, v in value.items()}
    return value


def referenced_vars(value: Any) -> set[Var]:
    """Collect every ``Var`` that occurs anywhere inside ``value``."""
    found: set[Var] = set()
    stack = [value]
    while stack:
        item = stack.pop()
        if isinstance(item, Var):
            found.add(item)
        elif isinstance(item, Call):
            stack.extend(item.args)
        elif isinstance(item, (list, tuple)):
            stack.extend(item)
        elif isinstance(item, dict):
            stack.extend(item.values())
    return found


def command_names(commands: Iterable[SymbolicCommand]) -> list[tuple[str, int]]:
    """Project a sequence onto ``(command name, arity)`` pairs for aggregation."""
    return [(cmd.call.command, cmd.call.arity) for cmd in commands]


def variables(commands: Iterable[SymbolicCommand]) -> list[Var]:
    """Variables bound by a sequence, in sequence order."""
    return [cmd.var for cmd in commands]
