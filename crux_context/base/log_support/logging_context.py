"""Fields shared by every event one pipeline run emits.

``build_final_prompt`` creates a :class:`LogContext` once per call and passes
it to each ``log_event`` so the budget, trimming and summarization events of
that call can be correlated by provider, model and estimator strategy.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class LogContext:
    """Per-run context merged into structured log payloads."""

    provider: Optional[str] = None
    model: Optional[str] = None
    estimator: Optional[str] = None
    trim_strategy: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def bind(self, **fields: Any) -> "LogContext":
        """Return a copy with ``fields`` added to ``extra``."""
        return replace(self, extra={**self.extra, **fields})

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "estimator": self.estimator,
            "trim_strategy": self.trim_strategy,
        }
        data.update(self.extra)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
