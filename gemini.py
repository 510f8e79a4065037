"""
Client for the Gemini generateContent REST endpoint.
"""
from typing import Optional

import requests

from config import Config
from logger import get_logger

logger = get_logger(__name__)

API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class GenerationError(Exception):
    pass


class GeminiClient:
    """Sends a single prompt and returns the first candidate's text."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, timeout: int = 60):
        self.api_key = api_key or Config.GEMINI_API_KEY
        self.model = model or Config.GEMINI_MODEL
        self.timeout = timeout
        if not self.api_key:
            raise GenerationError("Gemini API key is required (GEMINI_API_KEY)")

    @property
    def url(self) -> str:
        return f"{API_BASE}/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.4, "maxOutputTokens": 800},
        }
        logger.info("Gemini request model=%s prompt_chars=%d", self.model, len(prompt))
        try:
            response = requests.post(
                self.url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error("Gemini request failed: %s", e)
            raise GenerationError(f"Error generating answer: {e}") from e

        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error("Unexpected Gemini response shape: %s", data)
            raise GenerationError("No candidates found in response") from e
