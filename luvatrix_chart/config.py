"""Layered, immutable chart configuration.

Options are resolved once per chart construction from an ordered list of
plain mappings (library defaults, chart-type defaults, per-instance options).
Later layers win; nested mappings merge key by key while every other value,
lists included, replaces the earlier one. Values wrapped in :class:`Scriptable`
are evaluated against a resolution context, then the merged tree is frozen so
nothing downstream can patch shared defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import tomllib
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

FrozenConfig = Mapping[str, Any]

_MISSING = object()


@dataclass(frozen=True)
class Scriptable:
    """Option value computed from the resolution context."""

    fn: Callable[[Mapping[str, Any]], Any]

    def evaluate(self, context: Mapping[str, Any]) -> Any:
        return self.fn(context)


def resolve_config(*layers: Mapping[str, Any] | None, context: Mapping[str, Any] | None = None) -> FrozenConfig:
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        if not isinstance(layer, Mapping):
            raise TypeError(f"config layer must be a mapping, got {type(layer)!r}")
        _merge_into(merged, layer)
    ctx = MappingProxyType(dict(context or {}))
    return freeze(_evaluate(merged, ctx))


def resolve(
    global_defaults: Mapping[str, Any] | None,
    by_type: Mapping[str, Any] | None,
    by_instance: Mapping[str, Any] | None,
    scriptable: Mapping[str, Any] | None = None,
) -> FrozenConfig:
    return resolve_config(global_defaults, by_type, by_instance, context=scriptable)


def freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


def get_option(config: Mapping[str, Any], path: str | Iterable[str], default: Any = None) -> Any:
    keys = path.split(".") if isinstance(path, str) else list(path)
    node: Any = config
    for key in keys:
        if not isinstance(node, Mapping):
            return default
        node = node.get(key, _MISSING)
        if node is _MISSING:
            return default
    return node


def load_config_file(path: str | Path) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"chart config must be a table: {config_path}")
    return raw


def _merge_into(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        current = target.get(key, _MISSING)
        if isinstance(value, Mapping):
            if not isinstance(current, dict):
                current = {}
                target[key] = current
            _merge_into(current, value)
        elif isinstance(value, (list, tuple)):
            target[key] = [_copy_value(v) for v in value]
        else:
            target[key] = value


def _copy_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        out: dict[str, Any] = {}
        _merge_into(out, value)
        return out
    return value


def _evaluate(value: Any, context: Mapping[str, Any]) -> Any:
    if isinstance(value, Scriptable):
        return _evaluate(value.evaluate(context), context)
    if isinstance(value, dict):
        return {k: _evaluate(v, context) for k, v in value.items()}
    if isinstance(value, list):
        return [_evaluate(v, context) for v in value]
    return value
