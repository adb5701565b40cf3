"""Fixture configuration.

Configuration objects are immutable and passed explicitly into fixtures.
They can be built in code or loaded from a YAML document::

    project_name: MyApp
    document_name: Codeunit.al
    timeout: 10
    fail_on_input_errors: false
    references: [Base Application, System Application]
    compiler_options:
      runtime: "12.0"
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from altestkit.engine.components import DiagnosticAnalyzer
from altestkit.errors import ConfigError
from altestkit.markup.parser import DEFAULT_CLOSE_MARKER, DEFAULT_OPEN_MARKER


@dataclass(frozen=True)
class FixtureConfig:
    """Settings shared by every fixture kind."""

    project_name: str = "TestProject"
    document_name: str = "Test.al"
    language: str = "AL"
    open_marker: str = DEFAULT_OPEN_MARKER
    close_marker: str = DEFAULT_CLOSE_MARKER
    timeout: float | None = 30.0
    fail_on_input_errors: bool = True
    references: tuple[str, ...] = ()
    compiler_options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FixtureConfig:
        """Build a config from plain data, validating keys and types."""
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls) if f.name in _LOADABLE}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        values: dict[str, Any] = {}
        for key, raw in data.items():
            values[key] = _coerce(key, raw)
        return cls(**values)


@dataclass(frozen=True)
class CodeFixConfig(FixtureConfig):
    """Code-fix fixtures also run prerequisite analyzers next to the provider."""

    additional_analyzers: Sequence[DiagnosticAnalyzer] = field(default=(), hash=False)


# Keys that may appear in a configuration file, with their accepted types.
_LOADABLE: dict[str, tuple[type, ...]] = {
    "project_name": (str,),
    "document_name": (str,),
    "language": (str,),
    "open_marker": (str,),
    "close_marker": (str,),
    "timeout": (int, float, type(None)),
    "fail_on_input_errors": (bool,),
    "references": (list, tuple),
    "compiler_options": (dict,),
}


def _coerce(key: str, raw: Any) -> Any:
    expected = _LOADABLE[key]
    # bool is an int subclass; a timeout of ``true`` is a mistake.
    if not isinstance(raw, expected) or (key == "timeout" and isinstance(raw, bool)):
        names = " or ".join(t.__name__ for t in expected)
        raise ConfigError(f"Configuration key {key!r} must be {names}, got {type(raw).__name__}")
    if key == "timeout" and raw is not None:
        if raw <= 0:
            raise ConfigError("Configuration key 'timeout' must be positive")
        return float(raw)
    if key == "references":
        return tuple(str(r) for r in raw)
    return raw


def load_config(path: str | Path) -> FixtureConfig:
    """Load a ``FixtureConfig`` from a YAML file. An empty file gives defaults."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return FixtureConfig.from_mapping(data or {})
