"""Token usage counter owned by the orchestrator.

One instance per vetting run.  The core never touches it; model-calling
code adds the ``usage`` block of every response and the orchestrator
reads the totals when it assembles run metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..config import get_settings


@dataclass
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    calls: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def add(self, prompt_tokens: int = 0, completion_tokens: int = 0) -> "TokenUsage":
        self.prompt_tokens += max(0, int(prompt_tokens))
        self.completion_tokens += max(0, int(completion_tokens))
        self.calls += 1
        return self

    def add_usage(self, usage: Optional[Mapping[str, Any]]) -> "TokenUsage":
        """Add an OpenAI-style ``usage`` dict; a missing block counts as a call."""
        usage = usage or {}
        return self.add(
            prompt_tokens=usage.get("prompt_tokens") or 0,
            completion_tokens=usage.get("completion_tokens") or 0,
        )

    def merge(self, other: "TokenUsage") -> "TokenUsage":
        """Fold another run's counter into this one (multi-idea batches)."""
        self.prompt_tokens += other.prompt_tokens
        self.completion_tokens += other.completion_tokens
        self.calls += other.calls
        return self

    def estimated_cost(self, rate_per_1k: Optional[float] = None) -> float:
        """Rough USD estimate at a flat blended rate per 1K tokens.

        The rate defaults to ``COST_PER_1K_TOKENS`` from the settings.
        """
        if rate_per_1k is None:
            rate_per_1k = get_settings().cost_per_1k_tokens
        return round(self.total_tokens / 1000 * rate_per_1k, 4)

    def reset(self) -> None:
        self.prompt_tokens = 0
        self.completion_tokens = 0
        self.calls = 0
