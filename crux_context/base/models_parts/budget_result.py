"""
BudgetResult DTO returned by :func:`check_budget`.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class BudgetResult:
    """Comparison of a message sequence against the input budget.

    Attributes:
        max_input_tokens: Context size minus reserved output tokens.
        current_tokens: Estimated tokens of the sequence.
        available_tokens: ``max_input_tokens - current_tokens``; negative when over.
        within_budget: ``current_tokens <= max_input_tokens``.
        utilization_percent: Rounded percentage of the budget used (may exceed 100).
    """

    max_input_tokens: int
    current_tokens: int
    available_tokens: int
    within_budget: bool
    utilization_percent: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["BudgetResult"]
