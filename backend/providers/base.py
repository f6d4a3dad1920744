"""Base classes and models for LLM providers."""

from abc import ABC, abstractmethod
from typing import Optional

from langchain_openai import ChatOpenAI
from pydantic import BaseModel


class ModelConfig(BaseModel):
    """Configuration for one chat model.

    Attributes:
        provider_type: Provider name (e.g., "openai")
        model_id: Model identifier (e.g., "gpt-4")
        api_key: API key for the provider
        temperature: Sampling temperature
        max_tokens: Completion budget (None = provider default)
    """

    model_config = {"frozen": True}

    provider_type: str
    model_id: str
    api_key: str = ""
    temperature: float = 0.7
    max_tokens: Optional[int] = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations return a LangChain chat model configured from a
    ModelConfig; callers only use the chat model's ``ainvoke``.
    """

    @abstractmethod
    def get_llm(self, config: ModelConfig) -> ChatOpenAI:
        """Return a configured LLM client for the given model.

        Args:
            config: Model configuration with provider details

        Returns:
            A configured ChatOpenAI client
        """
        pass
