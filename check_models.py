"""Check that the configured model runtime has the models the assistant needs.

The provider is resolved exactly as the API resolves it (`MODEL_PROVIDER`,
`OLLAMA_API_URL`, hosting variables, `.env`). Missing models are listed with
the command that installs them.

Run: `python check_models.py` (exit code 1 when something is missing).
"""
import asyncio
import sys

from dotenv import load_dotenv

from services.model_config import MOCK, OLLAMA_LOCAL, is_provider_configured, resolve_config
from services.providers.provider_factory import create_provider


async def check_models() -> int:
    """Print availability diagnostics and return a process exit code."""
    config = resolve_config()
    print(f"Checking model availability for {config.description} ({config.provider})...\n")

    if not is_provider_configured(config):
        print(f"Provider '{config.provider}' is not configured. Set OLLAMA_API_URL for a remote runtime.")
        return 1

    provider = create_provider(config)
    try:
        availability = await provider.check_availability()
    finally:
        await provider.aclose()

    if availability.errors:
        print("Installation required:")
        for error in availability.errors:
            print(f"   {error}")

        missing = []
        if not availability.vision_model:
            missing.append(config.vision_model)
        if not availability.text_model:
            missing.append(config.text_model)
        if missing and config.provider == OLLAMA_LOCAL:
            print("\nTo install missing models, run:")
            for model in missing:
                print(f"   ollama pull {model}")
        return 1

    print("All models are available.")
    if config.provider != MOCK:
        print(f"   Text only: {config.text_model} handles the response")
        print(f"   Text + images: {config.vision_model} analyzes images, then {config.text_model} answers")
    return 0


if __name__ == "__main__":
    load_dotenv()
    sys.exit(asyncio.run(check_models()))
