"""LLM provider implementations."""

from .base import LLMProvider, ModelConfig
from .factory import create_model_config, get_provider, get_providers, parse_model_string

__all__ = [
    "LLMProvider",
    "ModelConfig",
    "create_model_config",
    "get_provider",
    "get_providers",
    "parse_model_string",
]
