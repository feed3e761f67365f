"""
LivDaily Backend — Google Gemini Service Implementation
=========================================================

What:  LLMService backed by Google Gemini for journal prompts, nutrition
       tasks, movement ideas, sleep copy and weekly motivation.
How:   One GenerativeModel per call carrying the route's system instruction;
       structured calls request `application/json` output.
Who:   Singleton used by WellnessAIService.

Resilience:
    Calls go through a tenacity retry wrapper. LLM_MAX_ATTEMPTS defaults to 1,
    so out of the box a failed call surfaces immediately as LLMServiceError
    (503). Operators can raise it to get exponential backoff with jitter.
"""

import asyncio
import json
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_sleep_log,
    RetryError,
)

from livdaily.config import settings
from livdaily.exceptions import LLMServiceError
from livdaily.services.llm_base import LLMService

logger = logging.getLogger(__name__)

JSON_GENERATION_CONFIG = {"response_mime_type": "application/json"}


class GeminiService(LLMService):
    """
    Google Gemini implementation of LLMService.

    Error Handling Chain:
        SDK call fails → tenacity retries (settings.llm_max_attempts)
        → attempts exhausted → LLMServiceError (503)
        JSON reply does not parse → LLMServiceError (503)
    """

    def __init__(self):
        self._configured = bool(
            settings.gemini_api_key and settings.gemini_api_key != "your_gemini_api_key_here"
        )
        if self._configured:
            genai.configure(api_key=settings.gemini_api_key)
        logger.info(
            "GeminiService initialized with model=%s, max_attempts=%d, configured=%s",
            settings.gemini_model,
            settings.llm_max_attempts,
            self._configured,
        )

    @property
    def is_configured(self) -> bool:
        return self._configured

    def _build_model(self, system_instruction: str, json_mode: bool):
        return genai.GenerativeModel(
            settings.gemini_model,
            system_instruction=system_instruction,
            generation_config=JSON_GENERATION_CONFIG if json_mode else None,
        )

    async def _generate(self, prompt: str, system_instruction: str, json_mode: bool) -> str:
        """Shared path for both public methods: config check, retries, error mapping."""
        request_id = str(uuid.uuid4())[:8]
        if not self._configured:
            raise LLMServiceError(
                message="AI generation is not configured on this server.",
                context={"request_id": request_id},
            )

        model = self._build_model(system_instruction, json_mode)
        try:
            return await self._call_gemini_with_retry(model, prompt, request_id)
        except RetryError as e:
            logger.error(
                "[%s] All Gemini attempts exhausted: %s",
                request_id,
                str(e.last_attempt.exception()) if e.last_attempt else "Unknown error",
            )
            raise LLMServiceError(
                message="AI generation failed. Please try again later.",
                context={"request_id": request_id, "attempts": settings.llm_max_attempts},
            )
        except LLMServiceError:
            raise
        except Exception as e:
            logger.error("[%s] Gemini error: %s", request_id, str(e), exc_info=True)
            raise LLMServiceError(
                message="AI generation failed. Please try again later.",
                context={"request_id": request_id, "error_type": type(e).__name__},
            )

    @retry(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(settings.llm_max_attempts),
        wait=wait_exponential_jitter(
            initial=settings.llm_min_wait,
            max=settings.llm_max_wait,
            jitter=1,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _call_gemini_with_retry(self, model, prompt: str, request_id: str) -> str:
        start_time = time.time()
        try:
            response = await model.generate_content_async(
                prompt,
                request_options={"timeout": settings.llm_timeout},
            )
            text = response.text.strip() if response.text else ""
            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "[%s] Gemini call completed in %.0fms, %d chars",
                request_id, duration_ms, len(text),
            )
            if not text:
                raise LLMServiceError(
                    message="AI generation returned an empty response.",
                    context={"request_id": request_id},
                )
            return text
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "[%s] Gemini API call failed after %.0fms: %s",
                request_id, duration_ms, str(e),
            )
            raise

    async def generate_text(self, prompt: str, system_instruction: str) -> str:
        return await self._generate(prompt, system_instruction, json_mode=False)

    async def generate_json(self, prompt: str, system_instruction: str) -> Dict[str, Any]:
        raw = await self._generate(prompt, system_instruction, json_mode=True)
        payload = _parse_json_object(raw)
        if payload is None:
            logger.error("Gemini returned non-JSON structured output: %.200s", raw)
            raise LLMServiceError(
                message="AI generation returned an unexpected format. Please try again.",
            )
        return payload

    async def health_check(self) -> bool:
        """Lists models to verify the key and connectivity; no tokens are spent."""
        if not self._configured:
            return False
        try:
            model_names = await asyncio.to_thread(_list_model_names)
            target = f"models/{settings.gemini_model}"
            if target not in model_names:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False


def _list_model_names() -> List[str]:
    return [m.name for m in genai.list_models()]


def _parse_json_object(raw: str) -> Optional[Dict[str, Any]]:
    """Parse a JSON object, tolerating a ```json fenced block around it."""
    text = raw.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


# ── Singleton Instance ────────────────────────────────────────────────────
gemini_service = GeminiService()
