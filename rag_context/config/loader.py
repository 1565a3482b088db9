from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from rag_context.utils.lookup import dotted_get

from .env import get_env

BASE_CONFIG_DIR = Path(__file__).resolve().parent
ENV_PREFIX = "RAG_CONTEXT__"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data


def _merge(a: Dict[str, Any], b: Mapping[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def _coerce(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    if value.lower() in {"null", "none", "~"}:
        return None
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return value


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        parts = key[len(ENV_PREFIX) :].lower().split("__")
        d = out
        for p in parts[:-1]:
            d = d.setdefault(p, {})
        d[parts[-1]] = _coerce(value)
    return out


def load_config(
    name: str = "rag",
    overrides_path: str | Path | None = None,
    profile: Optional[str] = None,
    config_dir: str | Path | None = None,
) -> Dict[str, Any]:
    """Load a configuration file applying overlays in the proper order.

    Order: bundled ``<name>.yaml``, profile overlay, ``overrides_path``, a YAML
    document in ``RAG_CONTEXT_CONFIG_<NAME>``, then ``RAG_CONTEXT__A__B``
    environment variables.
    """
    base_dir = Path(config_dir) if config_dir else BASE_CONFIG_DIR
    config = _load_yaml(BASE_CONFIG_DIR / f"{name}.yaml")
    if config_dir:
        config = _merge(config, _load_yaml(base_dir / f"{name}.yaml"))
    if profile:
        config = _merge(config, _load_yaml(base_dir / "profiles" / profile / f"{name}.yaml"))
    if overrides_path:
        config = _merge(config, _load_yaml(Path(overrides_path)))
    env_override = get_env(f"RAG_CONTEXT_CONFIG_{name.upper()}")
    if env_override:
        config = _merge(config, yaml.safe_load(env_override) or {})
    return _merge(config, _env_overrides(os.environ))


def config_get(config: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Read ``key`` (dotted path) from ``config``; ``None`` values fall back to ``default``."""
    value = dotted_get(config, key, None)
    return default if value is None else value


__all__ = ["load_config", "config_get"]
