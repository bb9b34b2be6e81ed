"""Run settings for the step-by-step trainer."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from ..core.errors import ConfigError


@dataclass(frozen=True)
class TrainSettings:
    lr: float = 0.01
    l1: float = 0.0
    steps: int = 50
    seed: int = 0
    noise: float = 0.05
    log_every: int = 10
    run_dir: str = "runs/circuitnet"
    enable_plots: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_FIELD_TYPES = {"float": (int, float), "int": (int,), "bool": (bool,), "str": (str,)}


def _coerce(name: str, kind: str, value: Any) -> Any:
    allowed = _FIELD_TYPES[kind]
    if isinstance(value, bool) and kind != "bool":
        allowed = ()
    if not isinstance(value, allowed):
        raise ConfigError(
            f"Setting {name!r} must be {kind}, got {type(value).__name__} {value!r}"
        )
    return float(value) if kind == "float" else value


def merge_settings(base: TrainSettings, override: Mapping[str, Any]) -> TrainSettings:
    """Return ``base`` with every non-``None`` entry of ``override`` applied.

    Values are checked against the field types; ints are accepted for float
    fields.
    """

    kinds = {f.name: f.type for f in fields(TrainSettings)}
    unknown = set(override) - set(kinds)
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")
    updates = {
        key: _coerce(key, kinds[key], value)
        for key, value in override.items()
        if value is not None
    }
    settings = replace(base, **updates)
    if settings.steps < 0:
        raise ConfigError(f"steps must be non-negative, got {settings.steps}")
    if settings.l1 < 0:
        raise ConfigError(f"l1 must be non-negative, got {settings.l1}")
    return settings


def load_settings(path: str | Path) -> Dict[str, Any]:
    """Read a JSON or YAML settings mapping."""

    path = Path(path)
    try:
        text = path.read_text()
    except OSError as exc:
        raise ConfigError(f"Cannot open settings file: {path}") from exc
    if path.suffix in {".yml", ".yaml"}:
        import yaml

        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return data


__all__ = ["TrainSettings", "load_settings", "merge_settings"]
