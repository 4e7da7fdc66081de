"""`statem`: model-based (stateful) property testing engine.

A model of the system under test is a ``Catalog`` of commands, each with an
argument generator, precondition, transition and postcondition over a model
state. The engine works in two phases:

- symbolic: ``commands(catalog)`` is a Hypothesis strategy producing
  precondition-respecting sequences, where ``Var(n)`` stands for the result
  of the n-th call; ``is_valid()`` re-checks shrink candidates,
- concrete: ``run_commands(catalog, cmds)`` executes a sequence against the
  SUT and returns a ``RunResult`` whose ``result`` is ``OK`` or the first
  divergence between model and SUT.

Public API:
- ``commands(catalog, config) -> SearchStrategy[list[SymbolicCommand]]``
- ``run_commands(catalog, cmds) -> RunResult``
- ``run_or_raise(catalog, cmds) -> RunResult`` (raises on divergence)
- ``is_valid(catalog, initial_state, cmds) -> bool``
- ``command_names(cmds) -> list[(name, arity)]``
"""

from .catalog import Catalog, Command
from .config import EngineConfig, load_config
from .errors import (
    CatalogError,
    CommandFailure,
    ConfigError,
    DuplicateCommandError,
    GenerationError,
    StatemError,
    UnknownCommandError,
)
from .executor import execute_command, run_commands, run_or_raise
from .generator import args_strategy, calls, command_list, commands
from .symbolic import command_names, referenced_vars, substitute, variables
from .types import (
    OK,
    Call,
    HistoryEvent,
    Ok,
    Outcome,
    PostconditionViolation,
    PreconditionViolation,
    RunResult,
    RuntimeFailure,
    SymbolicCommand,
    Var,
)
from .validator import first_invalid, is_valid

__all__ = [
    "Catalog",
    "Command",
    "EngineConfig",
    "load_config",
    "commands",
    "command_list",
    "calls",
    "args_strategy",
    "run_commands",
    "run_or_raise",
    "execute_command",
    "is_valid",
    "first_invalid",
    "substitute",
    "referenced_vars",
    "command_names",
    "variables",
    "Var",
    "Call",
    "SymbolicCommand",
    "HistoryEvent",
    "RunResult",
    "Outcome",
    "Ok",
    "OK",
    "PreconditionViolation",
    "PostconditionViolation",
    "RuntimeFailure",
    "StatemError",
    "CatalogError",
    "UnknownCommandError",
    "DuplicateCommandError",
    "GenerationError",
    "ConfigError",
    "CommandFailure",
]
