"""Engine configuration.

``EngineConfig`` bounds sequence generation. It can be built directly, from
``STATEM_*`` environment variables, or from a YAML mapping:

    min_commands: 0
    max_commands: 50
    max_precondition_retries: 100
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError

DEFAULT_MAX_COMMANDS: int = 20
DEFAULT_MAX_PRECONDITION_RETRIES: int = 100

# Hard ceilings for environment overrides.
MAX_COMMANDS_LIMIT: int = 10_000
MAX_RETRIES_LIMIT: int = 1_000_000


@dataclass(frozen=True)
class EngineConfig:
    """Bounds for sequence generation."""

    min_commands: int = 0
    max_commands: int = DEFAULT_MAX_COMMANDS
    max_precondition_retries: int = DEFAULT_MAX_PRECONDITION_RETRIES

    def __post_init__(self) -> None:
        for f in fields(self):
            val = getattr(self, f.name)
            if isinstance(val, bool) or not isinstance(val, int):
                raise ConfigError(f"{f.name} must be an int, got {type(val).__name__}")
        if self.min_commands < 0:
            raise ConfigError("min_commands must be non-negative")
        if self.max_commands < self.min_commands:
            raise ConfigError("max_commands must be >= min_commands")
        if self.max_precondition_retries < 1:
            raise ConfigError("max_precondition_retries must be positive")

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config from ``STATEM_*`` variables; unset or garbled values use defaults."""
        min_commands = _env_int("STATEM_MIN_COMMANDS", 0, lo=0, hi=MAX_COMMANDS_LIMIT)
        max_commands = _env_int(
            "STATEM_MAX_COMMANDS", DEFAULT_MAX_COMMANDS, lo=0, hi=MAX_COMMANDS_LIMIT
        )
        return cls(
            min_commands=min_commands,
            max_commands=max(min_commands, max_commands),
            max_precondition_retries=_env_int(
                "STATEM_MAX_PRECONDITION_RETRIES",
                DEFAULT_MAX_PRECONDITION_RETRIES,
                lo=1,
                hi=MAX_RETRIES_LIMIT,
            ),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EngineConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(map(str, unknown))}")
        return cls(**dict(data))


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def load_config(path: str | Path) -> EngineConfig:
    """Load an ``EngineConfig`` from a YAML file. An empty file yields the defaults."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return EngineConfig()
    if not isinstance(obj, Mapping):
        raise ConfigError("config YAML must be a mapping")
    return EngineConfig.from_mapping(obj)
