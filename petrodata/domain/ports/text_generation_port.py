"""
Domain port for text generation services.
Keeps the audit workflow independent from any AI vendor or transport.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class TextGenerationPort(ABC):
    """Port for free-text generation from a prompt"""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when the credentials needed to call the service are present"""
        pass

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Generate text for the prompt.

        Returns:
            The generated text, possibly empty

        Raises:
            ServiceUnavailableException: When the service cannot be reached or fails
        """
        pass

    @abstractmethod
    def get_status(self) -> Dict[str, Any]:
        """Get status information about the adapter."""
        pass
