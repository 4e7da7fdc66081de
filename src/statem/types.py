"""Data types for the stateful testing engine.

All types are frozen dataclasses (immutable). A command sequence is plain
data: symbolic variables, symbolic calls and the (variable, call) pairs that
bind a call's result to a variable.

Conventions:
- ``Var(n)`` stands for the result of the n-th call of a sequence (1-based).
- Call arguments are tuples; their arity is fixed once generated.
- Model states are opaque to the engine. They are only handed to catalog
  callbacks and compared for equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping


@dataclass(frozen=True, order=True)
class Var:
    """Symbolic variable bound to the result of the ``n``-th call."""

    n: int

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n < 1:
            raise ValueError(f"symbolic variable index must be a positive int, got {self.n!r}")

    def __repr__(self) -> str:
        return f"Var({self.n})"


@dataclass(frozen=True)
class Call:
    """Symbolic call of a catalog command. Arguments may contain ``Var``s."""

    command: str
    args: tuple[Any, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.args)

    def __repr__(self) -> str:
        rendered = ", ".join(repr(a) for a in self.args)
        return f"{self.command}({rendered})"


@dataclass(frozen=True)
class SymbolicCommand:
    """One sequence entry: bind the result of ``call`` to ``var``."""

    var: Var
    call: Call

    def __repr__(self) -> str:
        return f"{self.var!r} = {self.call!r}"


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Outcome:
    """Result of executing one command. Exactly one non-ok outcome ends a run."""

    tag: ClassVar[str] = "outcome"

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Ok(Outcome):
    """The SUT matched the model for this command."""

    tag: ClassVar[str] = "ok"

    value: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class PreconditionViolation(Outcome):
    """The command was not allowed in ``state``; ``impl`` was not invoked."""

    tag: ClassVar[str] = "pre_condition"

    state: Any


@dataclass(frozen=True)
class PostconditionViolation(Outcome):
    """The SUT returned ``result``, which the model did not accept."""

    tag: ClassVar[str] = "post_condition"

    result: Any


@dataclass(frozen=True)
class RuntimeFailure(Outcome):
    """The SUT (or the postcondition) raised instead of returning."""

    tag: ClassVar[str] = "exception"

    detail: str
    error: BaseException | None = field(default=None, compare=False)
    traceback: str = field(default="", compare=False, repr=False)

    @classmethod
    def from_exception(cls, exc: BaseException, traceback: str = "") -> RuntimeFailure:
        return cls(detail=f"{type(exc).__name__}: {exc}", error=exc, traceback=traceback)


OK = Ok()


# ---------------------------------------------------------------------------
# History and run result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HistoryEvent:
    """Audit record of one executed command."""

    state: Any                # model state after the call
    call: Call                # the call as made, variables substituted
    var: Var
    outcome: Outcome          # raw outcome; ``Ok`` keeps the returned value


@dataclass(frozen=True)
class RunResult:
    """Accumulated record of a run.

    ``history`` is newest-first; ``trace`` gives it in execution order.
    ``result`` is ``OK`` until the first non-ok outcome, which then stays.
    """

    state: Any
    history: tuple[HistoryEvent, ...] = ()
    result: Outcome = OK
    env: Mapping[Var, Any] = field(default_factory=dict)

    @classmethod
    def initial(cls, state: Any) -> RunResult:
        return cls(state=state)

    @property
    def ok(self) -> bool:
        return self.result.ok

    @property
    def trace(self) -> tuple[HistoryEvent, ...]:
        return tuple(reversed(self.history))

    @property
    def failed_at(self) -> int | None:
        """1-based position of the failing command, or None for an ok run."""
        if self.result.ok:
            return None
        return len(self.history)

    def record(self, event: HistoryEvent) -> RunResult:
        """Return a new result with ``event`` appended and ``env`` extended.

        The variable is bound to the returned value for ``Ok`` outcomes and
        to the outcome itself otherwise.
        """
        outcome = event.outcome
        if isinstance(outcome, Ok):
            result: Outcome = OK
            value = outcome.value
        else:
            result = outcome
            value = outcome
        env = dict(self.env)
        env[event.var] = value
        return RunResult(
            state=event.state,
            history=(event,) + self.history,
            result=result,
            env=env,
        )
