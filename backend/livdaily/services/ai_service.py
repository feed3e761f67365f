"""
LivDaily Backend — Wellness AI Service
========================================

What:  Prompt templates for the /api/ai routes and admin content generation,
       and validation of what the model returns.
How:   Each operation formats a fixed prompt, calls the LLM once through the
       LLMService interface and validates the JSON reply against the
       matching pydantic response schema.
Who:   /api/ai routes; mindfulness_service for generated catalogue items.

Output contract:
    A reply that fails schema validation is an LLMServiceError (503). The
    client never receives a partially shaped payload.
"""

import json
import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from livdaily.exceptions import LLMServiceError
from livdaily.schemas.ai import (
    GeneratedContent,
    JournalPromptRequest,
    JournalPromptResponse,
    MovementSuggestionsRequest,
    MovementSuggestionsResponse,
    NutritionTasksRequest,
    NutritionTasksResponse,
    SleepContentRequest,
    SleepContentResponse,
    WeeklyMotivationRequest,
    WeeklyMotivationResponse,
)
from livdaily.services.gemini_service import gemini_service
from livdaily.services.llm_base import LLMService

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


# ══════════════════════════════════════════════════════════════════════════
# System instructions
# ══════════════════════════════════════════════════════════════════════════

JOURNAL_SYSTEM = (
    "You are a warm, supportive wellness coach helping users with daily journaling. "
    "Use a conversational, encouraging tone. Never use clinical language."
)
NUTRITION_SYSTEM = (
    "You are a warm, non-clinical wellness guide creating simple nutrition tasks. "
    "Focus on sustainability and self-compassion. Never use clinical or restrictive language."
)
MOVEMENT_SYSTEM = (
    "You are a warm movement guide who views exercise as joyful self-care. "
    "Suggest accessible, encouraging activities that match the person's current state."
)
SLEEP_SYSTEM = (
    "You are a warm sleep and rest guide. Create content that is soothing, "
    "non-judgmental, and encourages restful sleep as an act of self-love."
)
MOTIVATION_SYSTEM = (
    "You are a warm, supportive wellness mentor. Write motivational content that is "
    "encouraging without being pushy, achievable without being overwhelming."
)
CONTENT_SYSTEM = (
    "You are an expert mindfulness instructor creating high-quality mindfulness content. "
    "Be warm, supportive, and practical."
)


def _patterns(value: Optional[Any]) -> str:
    return json.dumps(value if value is not None else {}, default=str)


class WellnessAIService:

    def __init__(self, llm: Optional[LLMService] = None):
        self.llm = llm or gemini_service

    async def _structured(
        self, schema: Type[SchemaT], prompt: str, system_instruction: str
    ) -> SchemaT:
        payload = await self.llm.generate_json(prompt, system_instruction)
        try:
            return schema.model_validate(payload)
        except PydanticValidationError as e:
            logger.error("%s reply failed validation: %s", schema.__name__, str(e))
            raise LLMServiceError(
                message="AI generation returned an unexpected format. Please try again.",
                context={"schema": schema.__name__},
            )

    async def journal_prompt(self, request: JournalPromptRequest) -> JournalPromptResponse:
        prompt = (
            f"Create a warm, personalized journaling prompt for someone feeling {request.mood} "
            f"with {request.energy} energy during the {request.rhythm_phase} phase.\n"
            f"User patterns: {_patterns(request.user_patterns)}\n"
            "Generate a prompt that feels supportive, non-clinical, and aligned with their "
            "current state.\n"
            'Respond as JSON: {"prompt": string, "supportiveMessage": string}'
        )
        logger.info("Generating journal prompt (mood=%s, energy=%s)", request.mood, request.energy)
        return await self._structured(JournalPromptResponse, prompt, JOURNAL_SYSTEM)

    async def nutrition_tasks(self, request: NutritionTasksRequest) -> NutritionTasksResponse:
        prompt = (
            f"Generate 3-5 simple, achievable nutrition-related tasks for {request.date}.\n"
            f"User patterns: {_patterns(request.user_patterns)}\n"
            f"User preferences: {_patterns(request.preferences)}\n"
            "Make tasks practical and sustainable, with warm supportive notes.\n"
            'Respond as JSON: {"tasks": [{"description": string, "supportiveNote": string}]}'
        )
        logger.info("Generating nutrition tasks for %s", request.date)
        return await self._structured(NutritionTasksResponse, prompt, NUTRITION_SYSTEM)

    async def movement_suggestions(
        self, request: MovementSuggestionsRequest
    ) -> MovementSuggestionsResponse:
        prompt = (
            f"Suggest movement activities for someone with {request.energy} energy who has "
            f"{request.time_available} minutes available.\n"
            f"User preferences: {_patterns(request.preferences)}\n"
            "Provide activities with variations and a warm tone that encourages movement "
            "as self-care.\n"
            'Respond as JSON: {"suggestions": [{"type": string, "duration": integer minutes, '
            '"intensity": "gentle" | "moderate" | "active", "description": string}]}'
        )
        logger.info(
            "Generating movement suggestions (energy=%s, minutes=%d)",
            request.energy, request.time_available,
        )
        return await self._structured(MovementSuggestionsResponse, prompt, MOVEMENT_SYSTEM)

    async def sleep_content(self, request: SleepContentRequest) -> SleepContentResponse:
        prompt = (
            f"Generate sleep content for someone in a {request.current_state} state.\n"
            f"User patterns: {_patterns(request.user_patterns)}\n"
            "Create a gentle wind-down flow, a meaningful reflection prompt, and an "
            "uplifting wake-up message.\n"
            'Respond as JSON: {"windDownFlow": string, "reflectionPrompt": string, '
            '"wakeUpMessage": string}'
        )
        logger.info("Generating sleep content (state=%s)", request.current_state)
        return await self._structured(SleepContentResponse, prompt, SLEEP_SYSTEM)

    async def weekly_motivation(self, request: WeeklyMotivationRequest) -> WeeklyMotivationResponse:
        prompt = (
            "Generate warm, personalized weekly motivational content with the theme "
            f'"{request.week_theme}".\n'
            f"User patterns: {_patterns(request.user_patterns)}\n"
            "Create content that feels supportive, achievable, and connected to their "
            "wellness journey."
        )
        logger.info("Generating weekly motivation (theme=%s)", request.week_theme)
        text = await self.llm.generate_text(prompt, MOTIVATION_SYSTEM)
        return WeeklyMotivationResponse(content=text, theme=request.week_theme)

    async def content_item(
        self,
        content_type: str,
        category: str,
        duration: Optional[int] = None,
    ) -> GeneratedContent:
        """Title and body for a new catalogue item; the caller persists it."""
        length = f"Duration: {duration} minutes.\n" if duration else ""
        prompt = (
            f'Generate a mindfulness {content_type} about "{category}".\n'
            f"{length}"
            "Create engaging, calming content that helps users practice mindfulness. "
            "Format the content clearly with sections if appropriate.\n"
            'Respond as JSON: {"title": string, "content": string}'
        )
        logger.info("Generating %s content (category=%s)", content_type, category)
        return await self._structured(GeneratedContent, prompt, CONTENT_SYSTEM)


ai_service = WellnessAIService()
