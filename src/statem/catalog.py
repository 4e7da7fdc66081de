"""Command catalog: the model of the system under test.

A catalog maps command names to ``Command`` records. Each record bundles the
SUT invocation (``impl``) with four callbacks of the model state:

- ``args(state) -> list``: argument generators (Hypothesis strategies or
  plain values) for a call in ``state``. Default: no arguments.
- ``pre(state, args) -> bool``: is the call allowed in ``state``? Default: True.
- ``next(state, args, result) -> state``: model transition. ``result`` is a
  ``Var`` during generation and the real return value during execution.
  Default: identity.
- ``post(state, args, result) -> bool``: does the SUT's result match the
  model? Default: True.

An optional ``weight(state) -> {name: positive int}`` restricts and biases the
commands eligible in a state; names it omits are not generated in that state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Sequence

from .errors import CatalogError, DuplicateCommandError, UnknownCommandError

ArgsFn = Callable[[Any], Sequence[Any]]
PreFn = Callable[[Any, Sequence[Any]], bool]
NextFn = Callable[[Any, Sequence[Any], Any], Any]
PostFn = Callable[[Any, Sequence[Any], Any], bool]
WeightFn = Callable[[Any], Mapping[str, int]]


def no_args(state: Any) -> list[Any]:
    return []


def always(state: Any, args: Sequence[Any], result: Any = None) -> bool:
    return True


def same_state(state: Any, args: Sequence[Any], result: Any) -> Any:
    return state


@dataclass(frozen=True)
class Command:
    """A declared command: SUT invocation plus its model callbacks."""

    name: str
    impl: Callable[..., Any]
    args: ArgsFn = no_args
    pre: PreFn = always
    next: NextFn = same_state
    post: PostFn = always

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise CatalogError(f"command name must be a non-empty str, got {self.name!r}")
        if not callable(self.impl):
            raise CatalogError(f"command {self.name!r}: impl is not callable")


class Catalog:
    """Explicit registry of commands plus the model's initial state.

    Example:
        store = {}
        catalog = Catalog(initial_state=list)

        @catalog.command(args=lambda s: [st.integers(0, 9)], post=...)
        def get(key):
            return store.get(key)
    """

    def __init__(
        self,
        initial_state: Callable[[], Any],
        commands: Sequence[Command] = (),
        weight: WeightFn | None = None,
    ) -> None:
        if not callable(initial_state):
            raise CatalogError("initial_state must be a zero-argument callable")
        self._initial_state = initial_state
        self._commands: dict[str, Command] = {}
        self.weight = weight
        for command in commands:
            self.add(command)

    def initial_state(self) -> Any:
        return self._initial_state()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, command: Command) -> Command:
        if command.name in self._commands:
            raise DuplicateCommandError(f"command {command.name!r} is already declared")
        self._commands[command.name] = command
        return command

    def command(
        self,
        name: str | None = None,
        *,
        args: ArgsFn = no_args,
        pre: PreFn = always,
        next: NextFn = same_state,
        post: PostFn = always,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering the decorated function as a command's ``impl``."""

        def register(impl: Callable[..., Any]) -> Callable[..., Any]:
            self.add(
                Command(
                    name=name or impl.__name__,
                    impl=impl,
                    args=args,
                    pre=pre,
                    next=next,
                    post=post,
                )
            )
            return impl

        return register

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> Command:
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(name) from None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def eligible(self, state: Any) -> list[tuple[int, Command]]:
        """Return ``(weight, command)`` pairs allowed for generation in ``state``.

        Without a ``weight`` callback every command has weight 1.
        Raises UnknownCommandError / CatalogError on a bad weight map.
        """
        if self.weight is None:
            return [(1, command) for command in self]
        out: list[tuple[int, Command]] = []
        for name, w in self.weight(state).items():
            command = self.lookup(name)
            if isinstance(w, bool) or not isinstance(w, int) or w <= 0:
                raise CatalogError(f"weight of {name!r} must be a positive int, got {w!r}")
            out.append((w, command))
        return out

    def invoke(self, name: str, args: Sequence[Any]) -> Any:
        """Call the SUT. Exceptions propagate to the caller."""
        return self.lookup(name).impl(*args)
