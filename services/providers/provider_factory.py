"""Construct the configured provider and pick a single fallback when it is unusable."""

import logging
from typing import Mapping, Optional

from models.model_types import ModelConfig
from services.model_config import (
    MOCK,
    OLLAMA_LOCAL,
    OLLAMA_REMOTE,
    build_config,
    is_provider_configured,
    resolve_config,
)
from services.providers.base_provider import BaseModelProvider
from services.providers.mock_provider import MockProvider
from services.providers.ollama_provider import OllamaProvider

LOGGER = logging.getLogger(__name__)


class ProviderConfigurationError(ValueError):
    """Raised when a configuration names a provider that does not exist."""


def create_provider(config: ModelConfig) -> BaseModelProvider:
    """Return the provider implementation for `config.provider`.

    Raises:
        ProviderConfigurationError: If the provider identity is unknown.
    """
    if config.provider in (OLLAMA_LOCAL, OLLAMA_REMOTE):
        return OllamaProvider(config)
    if config.provider == MOCK:
        return MockProvider(config)
    raise ProviderConfigurationError(f"Unknown provider: {config.provider}")


def alternate_config(config: ModelConfig, env: Optional[Mapping[str, str]] = None) -> ModelConfig:
    """Return the one configuration tried when `config` is unusable.

    Local and remote runtimes stand in for each other when the alternate is
    configured; otherwise the simulator is used.
    """
    if config.provider == OLLAMA_LOCAL:
        remote = build_config(OLLAMA_REMOTE, env)
        if is_provider_configured(remote):
            return remote
    elif config.provider == OLLAMA_REMOTE:
        return build_config(OLLAMA_LOCAL, env)
    return build_config(MOCK, env)


async def create_fallback_provider(
    config: Optional[ModelConfig] = None,
    env: Optional[Mapping[str, str]] = None,
) -> BaseModelProvider:
    """Return the primary provider, or exactly one alternate if it reports problems.

    The alternate is returned without probing it again.
    """
    config = config or resolve_config(env)
    primary = create_provider(config)

    if config.provider == MOCK:
        LOGGER.info("Using mock provider")
        return primary

    availability = await primary.check_availability()
    if not availability.errors:
        return primary

    LOGGER.warning("%s not available: %s", primary.name, "; ".join(availability.errors))
    await primary.aclose()

    fallback_config = alternate_config(config, env)
    LOGGER.info("Falling back from %s to %s", config.provider, fallback_config.provider)
    return create_provider(fallback_config)
