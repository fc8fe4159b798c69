"""
Gemini adapter for the text generation port.
Calls the Generative Language REST API directly with httpx.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from ...domain.ports.text_generation_port import TextGenerationPort
from ...shared.exceptions import ServiceUnavailableException
from ...shared.utils.timing_decorator import async_timed

logger = logging.getLogger(__name__)


class GeminiTextGenerationAdapter(TextGenerationPort):
    """
    Text generation through the Gemini `generateContent` endpoint.
    A single attempt per call: failures are reported, never retried.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        model: str = "gemini-2.5-flash",
        temperature: float = 0.2,
        timeout_seconds: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    @async_timed
    async def generate(self, prompt: str) -> str:
        if not self.is_configured:
            raise ServiceUnavailableException(
                message="Gemini API key is not configured",
                endpoint=self.endpoint
            )

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.temperature},
        }
        headers = {"x-goog-api-key": self.api_key}

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise ServiceUnavailableException(
                message=f"Request timeout after {self.timeout_seconds}s",
                endpoint=self.endpoint,
                cause=e
            )
        except httpx.RequestError as e:
            raise ServiceUnavailableException(
                message=f"Request error: {str(e)}",
                endpoint=self.endpoint,
                cause=e
            )

        if response.status_code != 200:
            raise ServiceUnavailableException(
                message=f"Gemini API returned status {response.status_code}",
                endpoint=self.endpoint,
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ServiceUnavailableException(
                message="Gemini API returned a non-JSON body",
                endpoint=self.endpoint,
                cause=e
            )

        text = self._extract_text(data)
        logger.info(f"Gemini returned {len(text)} characters")
        return text

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        """Concatenate the text parts of the first candidate; empty when there is none."""
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts if isinstance(part, dict))

    def get_status(self) -> Dict[str, Any]:
        return {
            "adapter": "gemini",
            "model": self.model,
            "configured": self.is_configured,
        }
