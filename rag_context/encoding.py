from __future__ import annotations

"""Compact JSON encoder for context payloads."""

import dataclasses
import json
import math
from collections.abc import Mapping
from typing import Any, Dict, Optional

from .config.loader import config_get
from .errors import EncodingError
from .rag.budget import estimate_tokens


class Encoder:
    """Serialise context payloads and estimate their token cost.

    ``dictionary`` renames keys on encode (and back on decode) so long, repeated
    field names can be shortened on the wire.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        self.config = config or {}

    def encode(self, payload: Any, options: Optional[Mapping[str, Any]] = None) -> str:
        options = options or {}
        dictionary = options.get("dictionary", config_get(self.config, "encoding.dictionary", {}))
        preserve = bool(
            options.get(
                "preserve_zero_fraction",
                config_get(self.config, "encoding.preserve_zero_fraction", False),
            )
        )
        data = self.normalize(payload)
        if not preserve:
            data = _drop_zero_fraction(data)
        mapped = _map_keys(data, dict(dictionary or {}))
        try:
            return json.dumps(mapped, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Unable to encode context payload: {exc}") from exc

    def decode(self, payload: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        options = options or {}
        dictionary = options.get("dictionary", config_get(self.config, "encoding.dictionary", {}))
        try:
            decoded = json.loads(payload)
        except ValueError as exc:
            raise EncodingError(f"Invalid context payload: {exc}") from exc
        inverse = {v: k for k, v in dict(dictionary or {}).items()}
        return _map_keys(decoded, inverse)

    def estimated_tokens(self, payload: Any) -> int:
        """Approximate 1 token per 4 bytes of UTF-8."""
        if isinstance(payload, str):
            content = payload
        else:
            try:
                content = json.dumps(self.normalize(payload), ensure_ascii=False, separators=(",", ":"))
            except (TypeError, ValueError):
                content = ""
        return estimate_tokens(content)

    def normalize(self, payload: Any) -> Any:
        if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
            return dataclasses.asdict(payload)
        if hasattr(payload, "model_dump"):
            return payload.model_dump()
        if isinstance(payload, str):
            try:
                return json.loads(payload)
            except ValueError:
                return {"value": payload}
        if isinstance(payload, Mapping):
            return {k: self.normalize(v) if _needs_normalizing(v) else v for k, v in payload.items()}
        if isinstance(payload, (list, tuple)):
            return [self.normalize(v) if _needs_normalizing(v) else v for v in payload]
        return {"value": payload}


def _needs_normalizing(value: Any) -> bool:
    if isinstance(value, (Mapping, list, tuple)):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return hasattr(value, "model_dump")


def _drop_zero_fraction(data: Any) -> Any:
    if isinstance(data, float) and math.isfinite(data) and data.is_integer():
        return int(data)
    if isinstance(data, dict):
        return {k: _drop_zero_fraction(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_drop_zero_fraction(v) for v in data]
    return data


def _map_keys(data: Any, mapping: Dict[str, str]) -> Any:
    if not mapping:
        return data
    if isinstance(data, dict):
        return {mapping.get(k, k): _map_keys(v, mapping) for k, v in data.items()}
    if isinstance(data, list):
        return [_map_keys(v, mapping) for v in data]
    return data


__all__ = ["Encoder"]
