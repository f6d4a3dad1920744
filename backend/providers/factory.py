"""Factory functions for creating LLM providers."""

from .base import LLMProvider, ModelConfig
from .openai import OpenAIProvider

DEFAULT_PROVIDER = "openai"


def get_providers() -> dict[str, LLMProvider]:
    """Get instances of each provider type.

    Returns:
        Dictionary mapping provider type names to provider instances.
    """
    return {
        "openai": OpenAIProvider(),
    }


def parse_model_string(model: str) -> tuple[str, str]:
    """Parse 'provider/model_id' into (provider_type, model_id).

    A bare model ID (e.g., "gpt-4") uses the default provider.

    Raises:
        ValueError: If the model ID part is empty
    """
    if "/" in model:
        provider_type, model_id = model.split("/", 1)
    else:
        provider_type, model_id = DEFAULT_PROVIDER, model
    if not model_id:
        raise ValueError(f"Invalid model string '{model}'")
    return provider_type, model_id


def create_model_config(model: str, api_key: str, temperature: float) -> ModelConfig:
    """Build a ModelConfig from a model string and credentials."""
    provider_type, model_id = parse_model_string(model)
    return ModelConfig(
        provider_type=provider_type,
        model_id=model_id,
        api_key=api_key,
        temperature=temperature,
    )


def get_provider(provider_type: str) -> LLMProvider:
    """Look up a provider by type.

    Raises:
        ValueError: If the provider type is unknown
    """
    providers = get_providers()
    if provider_type not in providers:
        raise ValueError(
            f"Unknown provider '{provider_type}'. "
            f"Available: {', '.join(sorted(providers))}"
        )
    return providers[provider_type]
