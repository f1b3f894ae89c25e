from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from crux_context.base.dto import ContextConfig
from crux_context.config import get_context_config, reset_config_cache


def test_defaults():
    cfg = get_context_config()
    assert cfg.enabled is False
    assert cfg.max_context_tokens == 128000
    assert cfg.reserved_output_tokens == 4096
    assert cfg.max_input_tokens == 128000 - 4096
    assert cfg.trim_strategy == "priority-based"
    assert cfg.preserve_recent_turns == 5
    assert cfg.summarize_on_truncate is False
    assert cfg.summarization_mode == "rule-based"
    assert cfg.max_summary_tokens == 500
    assert cfg.preserve_error_details is True
    assert cfg.token_estimator == "auto"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CONTEXT_MAX_CONTEXT_TOKENS", "2000")
    monkeypatch.setenv("CONTEXT_SUMMARIZE_ON_TRUNCATE", "yes")
    monkeypatch.setenv("CONTEXT_TRIM_STRATEGY", " age-based ")
    cfg = get_context_config()
    assert cfg.max_context_tokens == 2000
    assert cfg.summarize_on_truncate is True
    assert cfg.trim_strategy == "age-based"


def test_unparsable_env_int_is_ignored(monkeypatch):
    monkeypatch.setenv("CONTEXT_RESERVED_OUTPUT_TOKENS", "lots")
    assert get_context_config().reserved_output_tokens == 4096


def test_yaml_file_with_context_section(monkeypatch, tmp_path):
    path = tmp_path / "context.yaml"
    path.write_text(
        "context:\n  maxContextTokens: 200000\n  summarizationMode: llm-based\n  preserveRecentTurns: 3\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("CONTEXT_CONFIG_FILE", str(path))
    reset_config_cache()
    cfg = get_context_config()
    assert cfg.max_context_tokens == 200000
    assert cfg.summarization_mode == "llm-based"
    assert cfg.preserve_recent_turns == 3


def test_json_file_then_env_then_overrides(monkeypatch, tmp_path):
    path = tmp_path / "context.json"
    path.write_text(json.dumps({"max_context_tokens": 50000, "reservedOutputTokens": 1000}), encoding="utf-8")
    monkeypatch.setenv("CONTEXT_CONFIG_FILE", str(path))
    monkeypatch.setenv("CONTEXT_MAX_CONTEXT_TOKENS", "60000")
    reset_config_cache()
    cfg = get_context_config({"reservedOutputTokens": 500})
    assert cfg.max_context_tokens == 60000
    assert cfg.reserved_output_tokens == 500


def test_missing_file_falls_back_to_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("CONTEXT_CONFIG_FILE", str(tmp_path / "nope.yaml"))
    reset_config_cache()
    assert get_context_config().max_context_tokens == 128000


def test_invalid_override_raises():
    with pytest.raises(ValidationError):
        get_context_config({"trim_strategy": "lifo"})


def test_aliases_and_frozen():
    cfg = ContextConfig.model_validate({"maxContextTokens": 5000, "tokenEstimator": "exact"})
    assert cfg.max_context_tokens == 5000
    assert cfg.token_estimator == "exact"
    with pytest.raises(ValidationError):
        cfg.max_context_tokens = 1


def test_for_model_detects_window():
    assert ContextConfig.for_model("claude-3-5-sonnet-20241022").max_context_tokens == 200000
    assert ContextConfig.for_model("gpt-4", reserved_output_tokens=1000).max_input_tokens == 8192 - 1000
    assert ContextConfig.for_model("gpt-4", maxContextTokens=9000).max_context_tokens == 9000
