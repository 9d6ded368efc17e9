import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from routes.chat_route import router as chat_router
from services.model_config import is_provider_configured, resolve_config

load_dotenv()  # Load environment variables from .env file if present

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Log the provider selected at startup. Configuration is resolved again
    on every request, so nothing is stored on `app.state`.
    """
    config = resolve_config()
    LOGGER.info(
        "Model provider at startup: %s (%s); text=%s vision=%s",
        config.provider,
        config.description,
        config.text_model,
        config.vision_model,
    )
    if not is_provider_configured(config):
        LOGGER.warning("Provider %s is missing required settings", config.provider)
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(title="Legal Assistant API", lifespan=lifespan)

    @app.get("/health")
    async def health():
        """
        Liveness check reporting the provider the next request would use.
        """
        config = resolve_config()
        return {
            "ok": True,
            "provider": config.provider,
            "provider_configured": is_provider_configured(config),
        }

    app.include_router(chat_router)

    return app


app = create_app()
