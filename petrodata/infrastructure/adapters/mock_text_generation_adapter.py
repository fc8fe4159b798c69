"""
Mock text generation adapter for development without AI credentials.
"""
import asyncio
import logging
from typing import Any, Dict

from ...domain.ports.text_generation_port import TextGenerationPort

logger = logging.getLogger(__name__)


class MockTextGenerationAdapter(TextGenerationPort):
    """Returns a canned Markdown audit instead of calling a real model."""

    def __init__(self, delay_seconds: float = 0.0):
        self.delay_seconds = delay_seconds
        self.calls = 0

    @property
    def is_configured(self) -> bool:
        return True

    async def generate(self, prompt: str) -> str:
        self.calls += 1
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        logger.info(f"Mock audit generated for a prompt of {len(prompt)} characters")
        return (
            "## Audit Report (mock)\n\n"
            f"Prompt received with {len(prompt)} characters of operational context.\n\n"
            "Connect a Gemini API key to obtain a real analysis."
        )

    def get_status(self) -> Dict[str, Any]:
        return {
            "adapter": "mock",
            "configured": True,
            "calls": self.calls,
        }
