"""
LivDaily Backend — Wellness AI Service Tests
==============================================

WellnessAIService against a mocked LLMService: one call per operation, the
reply validated into the response schema, malformed replies rejected.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from livdaily.exceptions import LLMServiceError
from livdaily.schemas.ai import (
    JournalPromptRequest,
    MovementSuggestionsRequest,
    NutritionTasksRequest,
    SleepContentRequest,
    WeeklyMotivationRequest,
)
from livdaily.services.ai_service import (
    CONTENT_SYSTEM,
    JOURNAL_SYSTEM,
    MOTIVATION_SYSTEM,
    WellnessAIService,
)


@pytest.fixture
def mock_llm():
    llm = MagicMock()
    llm.generate_json = AsyncMock()
    llm.generate_text = AsyncMock()
    return llm


class TestWellnessAIService:

    @pytest.mark.asyncio
    async def test_journal_prompt(self, mock_llm):
        mock_llm.generate_json.return_value = {
            "prompt": "What is asking for your attention?",
            "supportiveMessage": "There is no wrong answer.",
        }
        service = WellnessAIService(llm=mock_llm)

        result = await service.journal_prompt(
            JournalPromptRequest(mood="anxious", energy="low", rhythm_phase="evening")
        )

        assert result.prompt == "What is asking for your attention?"
        assert result.supportive_message == "There is no wrong answer."
        prompt, system = mock_llm.generate_json.await_args.args
        assert "anxious" in prompt and "evening" in prompt
        assert system == JOURNAL_SYSTEM

    @pytest.mark.asyncio
    async def test_nutrition_tasks(self, mock_llm):
        mock_llm.generate_json.return_value = {
            "tasks": [
                {"description": "Drink a glass of water", "supportiveNote": "Small wins count."}
            ]
        }
        service = WellnessAIService(llm=mock_llm)

        result = await service.nutrition_tasks(NutritionTasksRequest(date="2024-06-03"))

        assert len(result.tasks) == 1
        assert result.tasks[0].supportive_note == "Small wins count."

    @pytest.mark.asyncio
    async def test_movement_suggestions_reject_unknown_intensity(self, mock_llm):
        mock_llm.generate_json.return_value = {
            "suggestions": [
                {"type": "walk", "duration": 10, "intensity": "extreme", "description": "go"}
            ]
        }
        service = WellnessAIService(llm=mock_llm)

        with pytest.raises(LLMServiceError):
            await service.movement_suggestions(
                MovementSuggestionsRequest(energy="high", time_available=10)
            )

    @pytest.mark.asyncio
    async def test_sleep_content_missing_field_is_llm_error(self, mock_llm):
        mock_llm.generate_json.return_value = {"windDownFlow": "Dim the lights."}
        service = WellnessAIService(llm=mock_llm)

        with pytest.raises(LLMServiceError):
            await service.sleep_content(SleepContentRequest(current_state="restless"))

    @pytest.mark.asyncio
    async def test_weekly_motivation_uses_text_generation(self, mock_llm):
        mock_llm.generate_text.return_value = "This week, begin again kindly."
        service = WellnessAIService(llm=mock_llm)

        result = await service.weekly_motivation(WeeklyMotivationRequest(week_theme="renewal"))

        assert result.content == "This week, begin again kindly."
        assert result.theme == "renewal"
        assert mock_llm.generate_text.await_args.args[1] == MOTIVATION_SYSTEM
        mock_llm.generate_json.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, mock_llm):
        mock_llm.generate_json.side_effect = LLMServiceError(message="Gemini down")
        service = WellnessAIService(llm=mock_llm)

        with pytest.raises(LLMServiceError):
            await service.journal_prompt(
                JournalPromptRequest(mood="ok", energy="ok", rhythm_phase="midday")
            )

    @pytest.mark.asyncio
    async def test_content_item_returns_title_and_body(self, mock_llm):
        mock_llm.generate_json.return_value = {
            "title": "Three Breaths",
            "content": "Breathe in for four, out for six.",
        }
        service = WellnessAIService(llm=mock_llm)

        result = await service.content_item("exercise", "breathing", duration=3)

        assert result.title == "Three Breaths"
        prompt, system = mock_llm.generate_json.await_args.args
        assert "exercise" in prompt and "breathing" in prompt and "3 minutes" in prompt
        assert system == CONTENT_SYSTEM

    @pytest.mark.asyncio
    async def test_content_item_without_title_is_llm_error(self, mock_llm):
        mock_llm.generate_json.return_value = {"content": "Untitled calm."}
        service = WellnessAIService(llm=mock_llm)

        with pytest.raises(LLMServiceError):
            await service.content_item("article", "gratitude")
