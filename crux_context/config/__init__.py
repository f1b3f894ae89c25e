"""Unified configuration layer for the context pipeline.

Goals
-----
* Centralize defaults (see :mod:`crux_context.config.defaults`).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by ``CONTEXT_CONFIG_FILE``
    3. Environment variables (``CONTEXT_MAX_CONTEXT_TOKENS``, ...)
    4. In-code overrides passed to :func:`get_context_config`
* Return a validated :class:`~crux_context.base.dto.ContextConfig`.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Keys may be snake_case or the camelCase option
names; a top-level ``context:`` section is used when present::

    context:
      maxContextTokens: 200000
      summarizeOnTruncate: true
      summarizationMode: llm-based

Public API
----------
* get_context_config(overrides: dict | None = None) -> ContextConfig
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

import yaml

if TYPE_CHECKING:
    from ..base.dto import ContextConfig

# base.dto imports config.defaults, so ContextConfig is imported lazily below.


ENV_PREFIX = "CONTEXT_"

# field name -> parser for its environment variable
_ENV_FIELDS = {
    "enabled": "bool",
    "max_context_tokens": "int",
    "reserved_output_tokens": "int",
    "trim_strategy": "str",
    "preserve_recent_turns": "int",
    "summarize_on_truncate": "bool",
    "summarization_mode": "str",
    "max_summary_tokens": "int",
    "preserve_error_details": "bool",
    "token_estimator": "str",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None


def _str_to_bool(val: str) -> bool:
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the file named by ``CONTEXT_CONFIG_FILE``.

    Missing files and unparsable content yield an empty mapping; the pipeline
    then runs on defaults and environment values.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("CONTEXT_CONFIG_FILE")
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if isinstance(data, dict) and isinstance(data.get("context"), dict):
        data = data["context"]
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, kind in _ENV_FIELDS.items():
        raw = os.getenv(f"{ENV_PREFIX}{field.upper()}")
        if raw is None or raw.strip() == "":
            continue
        if kind == "bool":
            out[field] = _str_to_bool(raw)
        elif kind == "int":
            try:
                out[field] = int(raw)
            except ValueError:
                continue
        else:
            out[field] = raw.strip()
    return out


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Map camelCase aliases to field names so later sources override earlier ones."""
    from ..base.dto import ContextConfig

    aliases = {f.alias: name for name, f in ContextConfig.model_fields.items() if f.alias}
    return {aliases.get(k, k): v for k, v in data.items()}


def get_context_config(overrides: Optional[Mapping[str, Any]] = None) -> "ContextConfig":
    """Return the merged, validated configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    from ..base.dto import ContextConfig

    merged: Dict[str, Any] = {}
    merged |= _normalize_keys(_load_external_config())
    merged |= _env_overrides()
    if overrides:
        merged |= _normalize_keys(overrides)
    return ContextConfig.model_validate(merged)


def reset_config_cache() -> None:
    """Forget the cached external config file (used by tests)."""
    global _FILE_CACHE
    _FILE_CACHE = None


__all__ = ["get_context_config", "reset_config_cache", "ENV_PREFIX"]
