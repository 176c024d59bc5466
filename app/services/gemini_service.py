import asyncio
import logging
from typing import Optional

from google import genai
from google.genai import types

from app.config import Settings
from app.errors import AIServiceError, AIServiceNotConfigured

logger = logging.getLogger(__name__)


class GeminiService:
    """Thin wrapper over the google-genai client used for resume extraction."""

    def __init__(
        self,
        client: Optional[genai.Client],
        model: str,
        temperature: float = 0.0,
        max_output_tokens: int = 1200,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiService":
        client = None
        if settings.gemini_api_key:
            client = genai.Client(api_key=settings.gemini_api_key)
            logger.info("Gemini client initialized for model %s", settings.gemini_model)
        else:
            logger.warning("GEMINI_API_KEY not set; uploads will be rejected.")
        return cls(
            client,
            model=settings.gemini_model,
            temperature=settings.gemini_temperature,
            max_output_tokens=settings.gemini_max_output_tokens,
        )

    def generate_text(self, prompt: str) -> str:
        if self.client is None:
            raise AIServiceNotConfigured("Gemini not configured.")

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    max_output_tokens=self.max_output_tokens,
                ),
            )
        except Exception as e:
            logger.exception("Gemini generate_content failed")
            raise AIServiceError(f"Gemini error: {e}") from e

        text = response.text or ""
        logger.debug("Gemini raw response:\n%s", text)
        return text

    async def agenerate_text(self, prompt: str) -> str:
        return await asyncio.to_thread(self.generate_text, prompt)
