"""End-to-end tests for the chat endpoint through the FastAPI app."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from main import app
from models.model_types import ModelAvailability
from services.providers.mock_responses import LANDLORD_TENANT_TEMPLATE

PNG_IMAGE = {"fileName": "a.png", "mimeType": "image/png", "base64": "iVBORw0KGgo="}


@pytest.fixture
def client():
    return TestClient(app)


class TestValidation:
    @pytest.mark.parametrize(
        "body",
        [{}, {"userInput": ""}, {"userInput": "   "}, {"userInput": 42}, {"userInput": None}, ["not", "an", "object"]],
    )
    def test_missing_or_invalid_input_is_rejected_without_provider(self, client, body) -> None:
        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock()) as factory, patch(
            "controllers.chat_controller.resolve_config"
        ) as resolve:
            response = client.post("/api/chat", json=body)

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["error"]
        factory.assert_not_called()
        resolve.assert_not_called()

    def test_invalid_json_is_rejected(self, client) -> None:
        response = client.post("/api/chat", content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Request body must be valid JSON."}

    def test_malformed_images_are_rejected(self, client) -> None:
        response = client.post("/api/chat", json={"userInput": "hi", "images": "a.png"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request payload."


class TestChatWithSimulator:
    def test_landlord_question(self, client, monkeypatch) -> None:
        monkeypatch.setenv("MODEL_PROVIDER", "mock")

        response = client.post("/api/chat", json={"userInput": "My landlord won't return my deposit"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["response"].startswith(LANDLORD_TENANT_TEMPLATE)
        assert data["model_used"] == "Mock Legal AI (Mock Demo)"

    def test_image_request_reports_both_models(self, client, monkeypatch) -> None:
        monkeypatch.setenv("MODEL_PROVIDER", "mock")

        response = client.post("/api/chat", json={"userInput": "What is this?", "images": [PNG_IMAGE]})

        assert response.status_code == 200
        assert response.json()["model_used"] == "Mock Vision AI (Mock Demo) + Mock Legal AI (Mock Demo)"


class TestChatWithInjectedProvider:
    def test_vision_unavailable_returns_503(self, client, make_provider) -> None:
        provider = make_provider(
            availability=ModelAvailability(
                text_model=True,
                vision_model=False,
                errors=["llava:7b model not found. Run: ollama pull llava:7b"],
            )
        )
        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock(return_value=provider)):
            response = client.post("/api/chat", json={"userInput": "Read this", "images": [PNG_IMAGE]})

        assert response.status_code == 503
        data = response.json()
        assert data["success"] is False
        assert data["error"].startswith("Vision model not available")
        assert "llava:7b" in data["error"]
        assert provider.analyzed == []
        assert provider.closed is True

    def test_vision_unavailable_is_fine_without_images(self, client, make_provider) -> None:
        provider = make_provider(
            availability=ModelAvailability(text_model=True, vision_model=False, errors=["llava:7b model not found."])
        )
        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock(return_value=provider)):
            response = client.post("/api/chat", json={"userInput": "Text only"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "response": "Generated answer", "model_used": "fake-text"}

    def test_text_unavailable_returns_503(self, client, make_provider) -> None:
        provider = make_provider(
            availability=ModelAvailability(
                text_model=False,
                vision_model=True,
                errors=["gemma3:4b model not found. Run: ollama pull gemma3:4b"],
            )
        )
        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock(return_value=provider)):
            response = client.post("/api/chat", json={"userInput": "Question"})

        assert response.status_code == 503
        assert response.json()["error"].startswith("Text model not available")
        assert provider.text_calls == []

    def test_unsupported_images_are_dropped(self, client, make_provider) -> None:
        provider = make_provider()
        images = [PNG_IMAGE, {"fileName": "brief.pdf", "mimeType": "application/pdf", "base64": "JVBER"}]
        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock(return_value=provider)):
            response = client.post(
                "/api/chat",
                json={
                    "userInput": "Check these",
                    "images": images,
                    "attachments": [{"name": "brief.pdf", "size": 5, "type": "application/pdf"}],
                },
            )

        assert response.status_code == 200
        assert provider.analyzed == ["a.png"]
        user_message = provider.text_calls[0][1].content
        assert "Image 1 (a.png)" in user_message
        assert "brief.pdf" in user_message.split("Note:")[1]

    def test_image_analysis_failure_returns_500(self, client, make_provider) -> None:
        provider = make_provider(failing_images=["a.png"])
        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock(return_value=provider)):
            response = client.post("/api/chat", json={"userInput": "Read this", "images": [PNG_IMAGE]})

        assert response.status_code == 500
        assert "Image analysis failed" in response.json()["error"]
        assert provider.text_calls == []

    def test_unexpected_error_is_not_leaked(self, client, make_provider) -> None:
        provider = make_provider()
        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock(return_value=provider)), patch(
            "controllers.chat_controller.ResponseOrchestrator.orchestrate",
            new=AsyncMock(side_effect=RuntimeError("secret stack detail")),
        ):
            response = client.post("/api/chat", json={"userInput": "Question"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to generate AI response"}
        assert provider.closed is True

    def test_provider_exception_is_not_leaked(self, client, make_provider) -> None:
        provider = make_provider()

        async def explode(messages):
            raise RuntimeError("secret stack detail")

        provider.generate_text = explode
        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock(return_value=provider)):
            response = client.post("/api/chat", json={"userInput": "Question"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to generate AI response"}
        assert provider.closed is True

    def test_empty_image_payload_is_dropped(self, client, make_provider) -> None:
        provider = make_provider()
        empty = {"fileName": "empty.png", "mimeType": "image/png", "base64": ""}
        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock(return_value=provider)):
            response = client.post("/api/chat", json={"userInput": "Read this", "images": [empty, PNG_IMAGE]})

        assert response.status_code == 200
        assert provider.analyzed == ["a.png"]

    def test_factory_crash_is_not_leaked(self, client) -> None:
        with patch(
            "controllers.chat_controller.create_fallback_provider",
            new=AsyncMock(side_effect=RuntimeError("socket details")),
        ):
            response = client.post("/api/chat", json={"userInput": "Question"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate AI response"


class TestConfiguration:
    def test_unconfigured_remote_returns_503(self, client, monkeypatch) -> None:
        monkeypatch.setenv("MODEL_PROVIDER", "ollama-remote")

        with patch("controllers.chat_controller.create_fallback_provider", new=AsyncMock()) as factory:
            response = client.post("/api/chat", json={"userInput": "Question"})

        assert response.status_code == 503
        assert "ollama-remote" in response.json()["error"]
        factory.assert_not_called()

    def test_model_status_for_simulator(self, client, monkeypatch) -> None:
        monkeypatch.setenv("MODEL_PROVIDER", "mock")

        response = client.get("/api/models/status")

        assert response.status_code == 200
        data = response.json()
        assert data["provider"] == "mock"
        assert data["configured"] is True
        assert data["text_model_available"] is True
        assert data["vision_model_available"] is True
        assert data["errors"] == []

    def test_model_status_failure_uses_error_envelope(self, client) -> None:
        with patch("routes.chat_route.get_model_status", new=AsyncMock(side_effect=RuntimeError("socket details"))):
            response = client.get("/api/models/status")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to check model availability."}

    def test_health_reports_provider(self, client, monkeypatch) -> None:
        monkeypatch.setenv("VERCEL", "1")

        response = client.get("/health")

        assert response.json() == {"ok": True, "provider": "mock", "provider_configured": True}
