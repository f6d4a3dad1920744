"""
LLM completion wrapper.

Turns a (system, prompt, max_tokens) request into a GenerationResult,
enforcing a wall-clock timeout and converting every provider failure into
GenerationFailedError.
"""

import asyncio
import logging
from typing import Optional

from langchain_core.messages import HumanMessage, SystemMessage

from providers import LLMProvider, ModelConfig, create_model_config, get_provider
from shared.config import Settings, get_settings

from .callback import UsageTrackingCallback
from .exceptions import GenerationFailedError
from .models import GenerationResult

logger = logging.getLogger(__name__)


class LLMGenerator:
    """
    Single-shot chat completions through a configured provider.

    Args:
        config: Model configuration (defaults to one built from settings)
        provider: Provider instance (defaults to the one named in config)
        timeout_seconds: Wall-clock limit per completion
    """

    def __init__(
        self,
        config: Optional[ModelConfig] = None,
        provider: Optional[LLMProvider] = None,
        timeout_seconds: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self._config = config or create_model_config(
            settings.openai_model,
            settings.openai_api_key,
            settings.openai_temperature,
        )
        self._provider = provider or get_provider(self._config.provider_type)
        self._timeout = (
            timeout_seconds if timeout_seconds is not None
            else settings.generation_timeout_seconds
        )

    @property
    def model(self) -> str:
        return self._config.model_id

    async def complete(self, system: str, prompt: str, max_tokens: int) -> GenerationResult:
        """
        Run one completion.

        Raises:
            GenerationFailedError: On provider error, timeout, or empty reply
        """
        callback = UsageTrackingCallback()
        messages = [SystemMessage(content=system), HumanMessage(content=prompt)]

        try:
            llm = self._provider.get_llm(
                self._config.model_copy(update={"max_tokens": max_tokens})
            )
            response = await asyncio.wait_for(
                llm.ainvoke(messages, config={"callbacks": [callback]}),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("LLM call timed out after %.0fs (model=%s)", self._timeout, self.model)
            raise GenerationFailedError() from e
        except Exception as e:
            # Provider SDKs raise many unrelated types; all mean "no content"
            logger.exception("LLM call failed (model=%s): %s", self.model, e)
            raise GenerationFailedError() from e

        content = response.content if isinstance(response.content, str) else ""
        if not content.strip():
            logger.error("LLM returned empty content (model=%s)", self.model)
            raise GenerationFailedError()

        return GenerationResult(content=content.strip(), usage=callback.usage)
