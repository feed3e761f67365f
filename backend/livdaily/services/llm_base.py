"""
LivDaily Backend — Abstract LLM Service Interface
===================================================

What:  The contract the AI routes depend on for generated wellness copy.
How:   Concrete providers implement generate_text() and generate_json();
       WellnessAIService builds prompts on top and never imports a provider
       SDK itself.
Who:   GeminiService implements it; tests substitute AsyncMock objects.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class LLMService(ABC):
    """
    Contract:
        - Both generate methods take a user prompt and a system instruction
        - Provider errors, timeouts and unparseable output are raised as
          LLMServiceError; nothing provider-specific escapes
        - No caching; every call goes to the provider
    """

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when credentials are present and calls can be attempted."""
        ...

    @abstractmethod
    async def generate_text(self, prompt: str, system_instruction: str) -> str:
        """
        Generate free-form text.

        Returns:
            The model's reply, stripped. Never None.

        Raises:
            LLMServiceError: provider failure or empty reply.
        """
        ...

    @abstractmethod
    async def generate_json(self, prompt: str, system_instruction: str) -> Dict[str, Any]:
        """
        Generate a JSON object.

        The caller validates the shape; this method only guarantees that the
        reply parsed as a JSON object.

        Raises:
            LLMServiceError: provider failure or non-object / invalid JSON reply.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Lightweight reachability check used by GET /health."""
        ...
