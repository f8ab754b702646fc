"""
Model-call boundary: one chat completion per generation attempt, with token tracking and a hard timeout.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from openai import APIError as OpenAIAPIError
from openai import AsyncOpenAI

from app.config import Settings, settings as default_settings
from app.errors import GenerationFailed

logger = logging.getLogger(__name__)


# Approximate cost per 1K tokens (USD) for gpt-4o-mini
INPUT_COST_PER_1K = 0.00015
OUTPUT_COST_PER_1K = 0.0006


def estimate_cost(input_tokens: int, output_tokens: int) -> float:
    return (input_tokens / 1000.0) * INPUT_COST_PER_1K + (output_tokens / 1000.0) * OUTPUT_COST_PER_1K


@dataclass
class ModelCompletion:
    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    raw: dict[str, Any] = field(default_factory=dict)


class ModelClient(Protocol):
    model_name: str

    async def complete(self, system_prompt: str, user_prompt: str) -> ModelCompletion: ...


class OpenAIChatClient:
    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or default_settings
        self.model_name = self.config.openai_model
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.config.openai_api_key:
                logger.error("AI generation attempted without OPENAI_API_KEY")
                raise GenerationFailed("OPENAI_API_KEY is not set")
            self._client = AsyncOpenAI(api_key=self.config.openai_api_key)
        return self._client

    async def complete(self, system_prompt: str, user_prompt: str) -> ModelCompletion:
        """Raises GenerationFailed on API error, timeout or empty content."""
        client = self._get_client()
        logger.info("Prompt lengths (chars): system=%d user=%d", len(system_prompt), len(user_prompt))
        try:
            resp = await asyncio.wait_for(
                client.chat.completions.create(
                    model=self.model_name,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    response_format={"type": "json_object"},
                    temperature=self.config.openai_temperature,
                ),
                timeout=self.config.openai_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error("OpenAI call timed out after %ss", self.config.openai_timeout_seconds)
            raise GenerationFailed("model call timed out") from e
        except OpenAIAPIError as e:
            logger.exception("OpenAI API error during sequence generation: %s", e)
            raise GenerationFailed(f"OpenAI API error: {e}") from e

        content = resp.choices[0].message.content if resp.choices else None
        if not content:
            logger.error("Empty response from OpenAI API (id=%s)", getattr(resp, "id", None))
            raise GenerationFailed("empty model content")

        usage = getattr(resp, "usage", None)
        input_tokens = usage.prompt_tokens if usage else 0
        output_tokens = usage.completion_tokens if usage else 0
        logger.info(
            "AI generation token usage: model=%s input=%d output=%d cost_usd=%.6f",
            self.model_name,
            input_tokens,
            output_tokens,
            estimate_cost(input_tokens, output_tokens),
        )
        return ModelCompletion(
            content=content,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            raw=resp.model_dump(mode="json"),
        )
