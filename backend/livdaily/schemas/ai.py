"""
LivDaily Backend — AI Generation Schemas
==========================================

What:  Request bodies for the /api/ai routes and the structured payloads the
       model must return. Model output is validated against the *Response
       classes; anything that does not fit is treated as an LLM failure.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from livdaily.schemas.common import ApiModel


# ── Requests ──────────────────────────────────────────────────────────────

class JournalPromptRequest(ApiModel):
    mood: str = Field(min_length=1, max_length=50)
    energy: str = Field(min_length=1, max_length=50)
    rhythm_phase: str = Field(min_length=1, max_length=20)
    user_patterns: Optional[Dict[str, Any]] = None


class NutritionTasksRequest(ApiModel):
    date: str
    user_patterns: Optional[Dict[str, Any]] = None
    preferences: Optional[Dict[str, Any]] = None


class MovementSuggestionsRequest(ApiModel):
    energy: str = Field(min_length=1, max_length=50)
    time_available: int = Field(ge=1, le=240)
    preferences: Optional[Dict[str, Any]] = None


class SleepContentRequest(ApiModel):
    current_state: str = Field(min_length=1, max_length=100)
    user_patterns: Optional[Dict[str, Any]] = None


class WeeklyMotivationRequest(ApiModel):
    user_patterns: Optional[Dict[str, Any]] = None
    week_theme: str = Field(min_length=1, max_length=100)


# ── Structured responses ──────────────────────────────────────────────────

class JournalPromptResponse(ApiModel):
    prompt: str
    supportive_message: str


class NutritionTask(ApiModel):
    description: str
    supportive_note: str


class NutritionTasksResponse(ApiModel):
    tasks: List[NutritionTask]


class MovementSuggestion(ApiModel):
    type: str
    duration: int
    intensity: Literal["gentle", "moderate", "active"]
    description: str


class MovementSuggestionsResponse(ApiModel):
    suggestions: List[MovementSuggestion]


class SleepContentResponse(ApiModel):
    wind_down_flow: str
    reflection_prompt: str
    wake_up_message: str


class WeeklyMotivationResponse(ApiModel):
    content: str
    theme: str


class GeneratedContent(ApiModel):
    """Title and body the model writes for an admin-generated content item."""
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
