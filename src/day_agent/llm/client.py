"""Single-shot Claude completions for the briefing writer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from day_agent.exceptions import LLMError

logger = logging.getLogger(__name__)


DEFAULT_MODEL = os.environ.get("DEFAULT_LLM_MODEL", "claude-haiku-4-5-20251001")


@dataclass(frozen=True)
class Completion:
    text: str
    input_tokens: int
    output_tokens: int
    model: str


class AsyncLLMClient:
    """One prompt in, one text completion out.

    Every ``generate`` call is a single request: the SDK's own retries are
    switched off, and rate limits and timeouts surface as ``LLMError`` like any
    other API failure. Retrying is the caller's decision.

    Args:
        api_key: Anthropic key. Falls back to ``$ANTHROPIC_API_KEY``.
        model: Model used when ``generate`` is not given one.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
    ):
        if not api_key and not os.environ.get("ANTHROPIC_API_KEY"):
            raise LLMError(
                "Anthropic API key is required. "
                "Pass it directly or set ANTHROPIC_API_KEY in your environment."
            )
        try:
            from anthropic import AsyncAnthropic
        except ImportError:
            raise ImportError(
                "anthropic is required for AsyncLLMClient. "
                "Install with: pip install day-agent[llm]"
            )
        self._client = AsyncAnthropic(api_key=api_key or None, max_retries=0, timeout=timeout)
        self.model = model

    @property
    def client(self):
        """The underlying AsyncAnthropic client."""
        return self._client

    async def generate(
        self,
        system_prompt: str,
        prompt: str,
        max_tokens: int = 512,
        temperature: float = 0.3,
        model: str | None = None,
    ) -> Completion:
        """Ask Claude for a completion of ``prompt``.

        Raises:
            LLMError: the request failed or the reply held no text.
        """
        from anthropic import APIError

        use_model = model or self.model
        try:
            response = await self._client.messages.create(
                model=use_model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIError as e:
            raise LLMError(f"Claude request failed: {e}") from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            raise LLMError(f"Claude returned no text (stop reason: {response.stop_reason})")

        return Completion(
            text=text,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=use_model,
        )
