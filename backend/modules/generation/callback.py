"""
LangChain callback handler for token usage.

Captures the provider-reported token counts of a single ``ainvoke`` call so
they can be returned to the client alongside the generated content.

Usage:
    callback = UsageTrackingCallback()
    response = await llm.ainvoke(messages, config={"callbacks": [callback]})
    usage = callback.usage
"""

import logging
from typing import Any, Optional
from uuid import UUID

from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.messages import BaseMessage
from langchain_core.outputs import LLMResult

from .models import TokenUsage

logger = logging.getLogger(__name__)


class UsageTrackingCallback(BaseCallbackHandler):
    """
    Callback handler that captures usage metadata from LLM responses.

    Attributes:
        usage: Captured token usage (None until on_llm_end is called)
    """

    def __init__(self) -> None:
        super().__init__()
        self._usage: Optional[TokenUsage] = None

    @property
    def usage(self) -> Optional[TokenUsage]:
        return self._usage

    def on_chat_model_start(
        self,
        serialized: dict[str, Any],
        messages: list[list[BaseMessage]],
        *,
        run_id: UUID,
        **kwargs: Any,
    ) -> None:
        self._usage = None

    def on_llm_end(
        self,
        response: LLMResult,
        *,
        run_id: UUID,
        **kwargs: Any,
    ) -> None:
        """
        Extract usage from the result.

        OpenAI reports it in ``llm_output["token_usage"]``; newer
        langchain versions also attach ``usage_metadata`` to the message.
        """
        usage = _from_llm_output(response.llm_output) or _from_generations(response)
        if usage:
            self._usage = usage
            logger.debug(
                "Captured usage: prompt=%d, completion=%d",
                usage.prompt_tokens, usage.completion_tokens,
            )
        else:
            logger.debug("No usage metadata found in LLM response")


def _from_llm_output(llm_output: Optional[dict[str, Any]]) -> Optional[TokenUsage]:
    token_usage = (llm_output or {}).get("token_usage")
    if not token_usage:
        return None
    prompt = token_usage.get("prompt_tokens", 0) or 0
    completion = token_usage.get("completion_tokens", 0) or 0
    return TokenUsage(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=token_usage.get("total_tokens") or prompt + completion,
    )


def _from_generations(response: LLMResult) -> Optional[TokenUsage]:
    for generations in response.generations:
        for generation in generations:
            message = getattr(generation, "message", None)
            metadata = getattr(message, "usage_metadata", None)
            if metadata:
                return TokenUsage(
                    prompt_tokens=metadata.get("input_tokens", 0),
                    completion_tokens=metadata.get("output_tokens", 0),
                    total_tokens=metadata.get("total_tokens", 0),
                )
    return None
