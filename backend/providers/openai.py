"""OpenAI GPT LLM provider implementation.

Handles OpenAI's GPT models via the langchain-openai package.
"""

from langchain_openai import ChatOpenAI

from .base import LLMProvider, ModelConfig


class OpenAIProvider(LLMProvider):
    """Provider for OpenAI GPT models.

    Uses the standard ChatOpenAI client with OpenAI's default API endpoint.
    Client-side retries are disabled; the caller owns the timeout.
    """

    def get_llm(self, config: ModelConfig) -> ChatOpenAI:
        """Return a ChatOpenAI client configured for OpenAI.

        Raises:
            ValueError: If api_key is not provided
        """
        if not config.api_key:
            raise ValueError(
                "OpenAI API key is required. "
                "Set it via the OPENAI_API_KEY environment variable."
            )

        return ChatOpenAI(
            model=config.model_id,
            api_key=config.api_key,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            max_retries=0,
        )
