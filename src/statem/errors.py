"""Exception types for the stateful testing engine.

Model and configuration mistakes are exceptions. Divergences between the
model and the SUT are not: they are ``Outcome`` values recorded in the
``RunResult`` and only become exceptions through ``run_or_raise()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import RunResult


class StatemError(Exception):
    """Base class for every error raised by the engine."""


class CatalogError(StatemError):
    """Raised when a command catalog is misconfigured."""


class UnknownCommandError(CatalogError):
    """Raised when a command name is not declared in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"command {name!r} is not declared in the catalog")


class DuplicateCommandError(CatalogError):
    """Raised when a command name is registered twice."""


class GenerationError(StatemError):
    """Raised when no command sequence can be generated from a model state."""


class ConfigError(StatemError):
    """Raised for invalid engine configuration values."""


class CommandFailure(StatemError):
    """Raised by ``run_or_raise()`` when a run ends with a non-ok outcome."""

    def __init__(self, run: RunResult) -> None:
        self.run = run
        super().__init__(
            f"command #{run.failed_at} failed: {run.result!r}"
        )
