from __future__ import annotations

import argparse
import ast
import json
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Sequence

DEFAULT_WORDS = ["it", "was", "the", "best", "of", "times", "it", "was", "the", "worst"]


@dataclass
class BenchmarkConfig:
    size: int = 100_000
    seed: int = 42
    # Share of present indices whose key is changed before draining.
    change_fraction: float = 0.25
    delete_fraction: float = 0.1

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.size < 0:
            raise ValueError(f"benchmark.size must be non-negative, got {self.size}")
        for name in ("change_fraction", "delete_fraction"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"benchmark.{name} must be in [0, 1], got {value}")


@dataclass
class DemoConfig:
    words: list[str] = field(default_factory=lambda: list(DEFAULT_WORDS))
    # None sizes the queue to the word list.
    capacity: int | None = None
    log_level: str = "INFO"
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.capacity is not None and self.capacity < len(self.words):
            raise ValueError(
                f"capacity ({self.capacity}) is smaller than the number of words ({len(self.words)})"
            )
        self.benchmark.validate()

    @property
    def queue_capacity(self) -> int:
        return len(self.words) if self.capacity is None else self.capacity

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DemoConfig:
        cfg = cls()
        _dataclass_update(cfg, data)
        cfg.validate()
        return cfg

    @classmethod
    def load(cls, config_path: str | Path) -> DemoConfig:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return cls.from_dict(_load_config_file(path))


def parse_args(argv: Sequence[str] | None = None, description: str = "") -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--config", type=str, default=None, help="Path to .toml or .json config."
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override config key(s), e.g. --set benchmark.size=1000 --set log_level=DEBUG",
    )
    parser.add_argument(
        "--print-config", action="store_true", help="Print final config and exit."
    )
    return parser.parse_args(argv)


def load_demo_config(args: argparse.Namespace) -> DemoConfig:
    merged: dict[str, Any] = {}
    if args.config is not None:
        path = Path(args.config)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        merged = _load_config_file(path)
    for override in args.set:
        if "=" not in override:
            raise ValueError(f"Invalid --set expression: `{override}` (expected KEY=VALUE)")
        key, raw = override.split("=", 1)
        _deep_set(merged, key, parse_value(raw))
    return DemoConfig.from_dict(merged)


def parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    try:
        return ast.literal_eval(raw)
    except (ValueError, SyntaxError):
        return raw


def _deep_set(target: dict[str, Any], key: str, value: Any) -> None:
    parts = key.split(".")
    if any(not p for p in parts):
        raise ValueError(f"Invalid override key `{key}`.")
    cursor = target
    for p in parts[:-1]:
        cursor = cursor.setdefault(p, {})
        if not isinstance(cursor, dict):
            raise ValueError(f"Cannot set `{key}` because `{p}` is not a mapping.")
    cursor[parts[-1]] = value


def _dataclass_update(obj: Any, updates: dict[str, Any], prefix: str = "") -> None:
    known = {f.name for f in fields(obj)}
    unknown = sorted(prefix + key for key in updates if key not in known)
    if unknown:
        raise ValueError(f"Unknown config field(s): {', '.join(unknown)}")
    for f in fields(obj):
        if f.name not in updates:
            continue
        current = getattr(obj, f.name)
        incoming = updates[f.name]
        if is_dataclass(current):
            if not isinstance(incoming, dict):
                raise ValueError(f"Expected dict for nested config field `{prefix}{f.name}`")
            _dataclass_update(current, incoming, prefix=f"{prefix}{f.name}.")
        elif isinstance(incoming, dict):
            raise ValueError(f"Expected scalar value for config field `{prefix}{f.name}`, got mapping")
        else:
            setattr(obj, f.name, incoming)


def _load_config_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        data = tomllib.loads(path.read_text())
    elif path.suffix == ".json":
        data = json.loads(path.read_text())
    else:
        raise ValueError(f"Unsupported config format: {path.suffix}. Use .toml or .json")
    if not isinstance(data, dict):
        raise ValueError("Config must parse to a mapping at the top level.")
    return data
