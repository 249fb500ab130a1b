"""LLM client wrapper (Anthropic Claude)."""

from day_agent.llm.client import DEFAULT_MODEL, AsyncLLMClient, Completion

__all__ = ["DEFAULT_MODEL", "AsyncLLMClient", "Completion"]
