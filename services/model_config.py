"""Environment-driven model provider selection.

The resolver is re-run for every request so that configuration changes take
effect without a restart. Every function accepts an optional environment
mapping, which defaults to `os.environ`.
"""

import logging
import os
from typing import Mapping, Optional

from models.model_types import ModelConfig

LOGGER = logging.getLogger(__name__)

OLLAMA_LOCAL = "ollama-local"
OLLAMA_REMOTE = "ollama-remote"
MOCK = "mock"

DEFAULT_TEXT_MODEL = "gemma3:4b"
DEFAULT_VISION_MODEL = "llava:7b"
DEFAULT_OLLAMA_HOST = "http://127.0.0.1:11434"

PROVIDER_CONFIGS = {
    OLLAMA_LOCAL: {
        "text_model": DEFAULT_TEXT_MODEL,
        "vision_model": DEFAULT_VISION_MODEL,
        "description": "Local Ollama instance",
    },
    OLLAMA_REMOTE: {
        "text_model": DEFAULT_TEXT_MODEL,
        "vision_model": DEFAULT_VISION_MODEL,
        "description": "Remote Ollama instance",
    },
    MOCK: {
        "text_model": "Mock Legal AI",
        "vision_model": "Mock Vision AI",
        "description": "Mock AI for demo/testing",
    },
}

# Provider chosen when nothing is set explicitly, keyed by "running hosted".
# Hosted deployments rarely reach a model runtime, so they get the simulator;
# set OLLAMA_API_URL or MODEL_PROVIDER to target a remote runtime instead.
DEFAULT_PROVIDER_BY_HOSTING = {
    True: MOCK,
    False: OLLAMA_LOCAL,
}


def _env(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if env is None else env


def _value(env: Mapping[str, str], key: str) -> str:
    return (env.get(key) or "").strip()


def is_hosted_environment(env: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when running on a recognized hosting platform or in production."""
    env = _env(env)
    if _value(env, "VERCEL") or _value(env, "NETLIFY"):
        return True
    return any(_value(env, key).lower() == "production" for key in ("APP_ENV", "ENVIRONMENT"))


def resolve_provider_identity(env: Optional[Mapping[str, str]] = None) -> str:
    """Pick the provider identity for the current environment.

    Order: explicit `MODEL_PROVIDER`, then an explicit remote URL, then the
    hosting policy table.
    """
    env = _env(env)

    manual = _value(env, "MODEL_PROVIDER")
    if manual:
        if manual in PROVIDER_CONFIGS:
            return manual
        LOGGER.warning("Ignoring unknown MODEL_PROVIDER %r", manual)

    if _value(env, "OLLAMA_API_URL"):
        return OLLAMA_REMOTE

    return DEFAULT_PROVIDER_BY_HOSTING[is_hosted_environment(env)]


def build_config(provider: str, env: Optional[Mapping[str, str]] = None) -> ModelConfig:
    """Build the configuration for a specific provider identity.

    Raises:
        KeyError: If `provider` is not a known identity.
    """
    env = _env(env)
    defaults = PROVIDER_CONFIGS[provider]

    if provider == MOCK:
        try:
            latency_scale = float(_value(env, "MOCK_LATENCY_SCALE") or 1.0)
        except ValueError:
            LOGGER.warning("Invalid MOCK_LATENCY_SCALE %r, using 1.0", env.get("MOCK_LATENCY_SCALE"))
            latency_scale = 1.0
        return ModelConfig(
            provider=provider,
            text_model=defaults["text_model"],
            vision_model=defaults["vision_model"],
            description=defaults["description"],
            latency_scale=max(latency_scale, 0.0),
        )

    if provider == OLLAMA_REMOTE:
        api_url = _value(env, "OLLAMA_API_URL") or None
    else:
        api_url = _value(env, "OLLAMA_HOST") or DEFAULT_OLLAMA_HOST

    return ModelConfig(
        provider=provider,
        text_model=_value(env, "OLLAMA_TEXT_MODEL") or defaults["text_model"],
        vision_model=_value(env, "OLLAMA_VISION_MODEL") or defaults["vision_model"],
        description=defaults["description"],
        api_url=api_url,
    )


def resolve_config(env: Optional[Mapping[str, str]] = None) -> ModelConfig:
    """Return the configuration of the provider selected for this environment."""
    return build_config(resolve_provider_identity(env), env)


def is_provider_configured(config: ModelConfig) -> bool:
    """Return True when the provider has every setting it needs to be used."""
    if config.provider in (OLLAMA_LOCAL, MOCK):
        return True
    if config.provider == OLLAMA_REMOTE:
        return bool(config.api_url and config.api_url.strip())
    return False
