"""
LivDaily Backend — AI Route Handlers
======================================

What:  Session-gated pass-through to the LLM for generated wellness copy.
       Each route makes exactly one model call and returns the validated
       payload. Provider failures surface as 503.
"""

from fastapi import APIRouter, Depends

from livdaily.dependencies import get_current_user
from livdaily.schemas.ai import (
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
from livdaily.schemas.common import ErrorResponse
from livdaily.services.ai_service import ai_service

router = APIRouter(
    prefix="/api/ai",
    tags=["AI"],
    dependencies=[Depends(get_current_user)],
    responses={
        401: {"description": "Missing or invalid session", "model": ErrorResponse},
        503: {"description": "AI service unavailable", "model": ErrorResponse},
    },
)


@router.post("/journal-prompt", response_model=JournalPromptResponse)
async def journal_prompt(body: JournalPromptRequest) -> JournalPromptResponse:
    return await ai_service.journal_prompt(body)


@router.post("/nutrition-tasks", response_model=NutritionTasksResponse)
async def nutrition_tasks(body: NutritionTasksRequest) -> NutritionTasksResponse:
    return await ai_service.nutrition_tasks(body)


@router.post("/movement-suggestions", response_model=MovementSuggestionsResponse)
async def movement_suggestions(body: MovementSuggestionsRequest) -> MovementSuggestionsResponse:
    return await ai_service.movement_suggestions(body)


@router.post("/sleep-content", response_model=SleepContentResponse)
async def sleep_content(body: SleepContentRequest) -> SleepContentResponse:
    return await ai_service.sleep_content(body)


@router.post("/weekly-motivation", response_model=WeeklyMotivationResponse)
async def weekly_motivation(body: WeeklyMotivationRequest) -> WeeklyMotivationResponse:
    return await ai_service.weekly_motivation(body)
