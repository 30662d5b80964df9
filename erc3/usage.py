"""Token usage normalization for LLM call logging."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass
class TokenUsage:
    """Token counts from a single LLM call."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: Optional[int] = None

    @property
    def total(self) -> int:
        if self.total_tokens is not None:
            return self.total_tokens
        return self.prompt_tokens + self.completion_tokens

    def to_dict(self) -> dict:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total,
        }


def _lookup(usage, name):
    if isinstance(usage, Mapping):
        return usage.get(name)
    return getattr(usage, name, None)


def _field(usage, *names):
    """First non-zero value among alias ``names``."""
    for name in names:
        value = _lookup(usage, name)
        if value:
            return value
    return None


def normalize_usage(usage) -> TokenUsage:
    """Build a TokenUsage from OpenAI- or Anthropic-style usage data.

    ``usage`` may be a TokenUsage, a mapping, or an SDK usage object.
    Both ``prompt_tokens``/``completion_tokens`` and
    ``input_tokens``/``output_tokens`` naming are accepted. ``total_tokens``
    is kept when given and computed otherwise.
    """
    if isinstance(usage, TokenUsage):
        return usage
    if usage is None:
        return TokenUsage()

    prompt = _field(usage, "prompt_tokens", "input_tokens") or 0
    completion = _field(usage, "completion_tokens", "output_tokens") or 0
    total = _lookup(usage, "total_tokens")
    return TokenUsage(
        prompt_tokens=int(prompt),
        completion_tokens=int(completion),
        total_tokens=int(total) if total is not None else None,
    )
