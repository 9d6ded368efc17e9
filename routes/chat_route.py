"""FastAPI routes for legal-assistant chat and model status."""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from controllers.chat_controller import GENERIC_FAILURE, get_model_status, handle_chat_request

LOGGER = logging.getLogger(__name__)

STATUS_FAILURE = "Failed to check model availability."

router = APIRouter(prefix="/api", tags=["chat"])


def _error_response(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": detail})


@router.post("/chat", summary="Answer a legal question, optionally with images")
async def post_chat(request: Request):
    """Run the chat pipeline and return `{success, response, model_used}` or `{success, error}`."""
    try:
        body = await request.json()
    except Exception:  # pylint: disable=broad-exception-caught
        return _error_response(400, "Request body must be valid JSON.")

    try:
        return await handle_chat_request(body)
    except HTTPException as exc:
        return _error_response(exc.status_code, str(exc.detail))
    except Exception:  # pylint: disable=broad-exception-caught
        LOGGER.exception("Unhandled error in chat route")
        return _error_response(500, GENERIC_FAILURE)


@router.get("/models/status", summary="Report provider configuration and model availability")
async def models_status():
    """Return the resolved provider with a fresh availability check, or `{success, error}`."""
    try:
        return await get_model_status()
    except HTTPException as exc:
        return _error_response(exc.status_code, str(exc.detail))
    except Exception:  # pylint: disable=broad-exception-caught
        LOGGER.exception("Model status check failed")
        return _error_response(500, STATUS_FAILURE)
