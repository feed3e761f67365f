"""
LivDaily Backend — Gemini Service Unit Tests (Mocked)
=======================================================

What:  GeminiService with the google.generativeai module patched out.
       No network calls, no API spend.

What we test:
    ✅ Text and JSON generation return the model's reply
    ✅ JSON replies wrapped in ``` fences are accepted
    ✅ SDK failures, empty replies and non-JSON replies → LLMServiceError
    ✅ Unconfigured service refuses to call the SDK
    ✅ Health check returns a bool without raising
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from livdaily.exceptions import LLMServiceError
from livdaily.services.gemini_service import (
    GeminiService,
    _list_model_names,
    _parse_json_object,
)


def _model_replying(text):
    mock_response = MagicMock()
    mock_response.text = text
    mock_model = MagicMock()
    mock_model.generate_content_async = AsyncMock(return_value=mock_response)
    return mock_model


class TestGeminiServiceMocked:

    @pytest.mark.asyncio
    async def test_generate_text_success(self):
        with patch("livdaily.services.gemini_service.genai") as mock_genai:
            mock_model = _model_replying("  You showed up for yourself this week.  ")
            mock_genai.GenerativeModel.return_value = mock_model

            service = GeminiService()
            result = await service.generate_text("prompt", "system")

            assert result == "You showed up for yourself this week."
            _, kwargs = mock_genai.GenerativeModel.call_args
            assert kwargs["system_instruction"] == "system"
            assert kwargs["generation_config"] is None

    @pytest.mark.asyncio
    async def test_generate_json_requests_json_mode(self):
        with patch("livdaily.services.gemini_service.genai") as mock_genai:
            mock_genai.GenerativeModel.return_value = _model_replying(
                '{"prompt": "What felt light today?", "supportiveMessage": "Go gently."}'
            )

            service = GeminiService()
            payload = await service.generate_json("prompt", "system")

            assert payload["prompt"] == "What felt light today?"
            _, kwargs = mock_genai.GenerativeModel.call_args
            assert kwargs["generation_config"] == {"response_mime_type": "application/json"}

    @pytest.mark.asyncio
    async def test_sdk_failure_raises_llm_error(self):
        with patch("livdaily.services.gemini_service.genai") as mock_genai:
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(side_effect=RuntimeError("quota"))
            mock_genai.GenerativeModel.return_value = mock_model

            service = GeminiService()
            with pytest.raises(LLMServiceError):
                await service.generate_text("prompt", "system")

    @pytest.mark.asyncio
    async def test_empty_reply_raises_llm_error(self):
        with patch("livdaily.services.gemini_service.genai") as mock_genai:
            mock_genai.GenerativeModel.return_value = _model_replying("")

            service = GeminiService()
            with pytest.raises(LLMServiceError):
                await service.generate_text("prompt", "system")

    @pytest.mark.asyncio
    async def test_non_json_reply_raises_llm_error(self):
        with patch("livdaily.services.gemini_service.genai") as mock_genai:
            mock_genai.GenerativeModel.return_value = _model_replying("Sure! Here you go.")

            service = GeminiService()
            with pytest.raises(LLMServiceError):
                await service.generate_json("prompt", "system")

    @pytest.mark.asyncio
    async def test_unconfigured_service_does_not_call_sdk(self):
        with patch("livdaily.services.gemini_service.genai") as mock_genai, \
             patch("livdaily.services.gemini_service.settings") as mock_settings:
            mock_settings.gemini_api_key = ""

            service = GeminiService()
            assert service.is_configured is False
            with pytest.raises(LLMServiceError):
                await service.generate_text("prompt", "system")
            mock_genai.GenerativeModel.assert_not_called()

    @pytest.mark.asyncio
    async def test_health_check_returns_bool(self):
        with patch("livdaily.services.gemini_service.genai") as mock_genai:
            mock_genai.list_models.return_value = [MagicMock()]

            service = GeminiService()
            result = await service.health_check()
            assert isinstance(result, bool)

    @pytest.mark.asyncio
    async def test_health_check_swallows_sdk_errors(self):
        with patch("livdaily.services.gemini_service.genai") as mock_genai:
            mock_genai.list_models.side_effect = RuntimeError("network down")

            service = GeminiService()
            assert await service.health_check() is False

    @pytest.mark.asyncio
    async def test_health_check_lists_models_off_the_event_loop(self):
        """The blocking SDK listing call runs in a worker thread."""
        with patch("livdaily.services.gemini_service.genai"), patch(
            "livdaily.services.gemini_service.asyncio.to_thread",
            new=AsyncMock(return_value=["models/gemini-test"]),
        ) as mock_to_thread:
            service = GeminiService()
            assert await service.health_check() is True

        mock_to_thread.assert_awaited_once_with(_list_model_names)


class TestParseJsonObject:

    def test_plain_object(self):
        assert _parse_json_object('{"a": 1}') == {"a": 1}

    def test_fenced_object(self):
        assert _parse_json_object('```json\n{"a": 1}\n```') == {"a": 1}

    def test_array_is_rejected(self):
        assert _parse_json_object("[1, 2]") is None

    def test_garbage_is_rejected(self):
        assert _parse_json_object("not json") is None
