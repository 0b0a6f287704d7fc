"""
Completion Service Client

Thin async wrapper around the OpenAI chat completions API. The duplicate
checker only needs send_prompt(messages) -> text; everything else about the
SDK stays here.
"""

from typing import Dict, List, Optional, Protocol, Any
from dupcheck.config import Settings, get_settings
from dupcheck.exceptions import UpstreamCallError, UpstreamParseError
from dupcheck.utils.logger import get_logger
from dupcheck.utils.service_initializer import ServiceInitializer

logger = get_logger(__name__)


class CompletionClient(Protocol):
    """Anything that turns role-tagged messages into a single completion text."""

    async def send_prompt(self, messages: List[Dict[str, str]]) -> str:
        ...


class OpenAICompletionClient:
    """
    Completion client backed by the OpenAI (or Azure OpenAI) async SDK.

    SDK and transport failures are raised as UpstreamCallError; empty
    completions as UpstreamParseError.
    """

    def __init__(self, client: Any, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or get_settings()
        config = self.settings.get_completion_config()
        self.model = config["model"]
        self.max_tokens = config["max_tokens"]
        self.temperature = config["temperature"]

    async def send_prompt(self, messages: List[Dict[str, str]]) -> str:
        """
        Send messages to the completion service.

        Args:
            messages: Ordered list of {"role", "content"} dicts

        Returns:
            The completion text
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                stream=False
            )
        except Exception as e:
            logger.error(f"Completion request failed: {e}")
            raise UpstreamCallError(f"Completion service unavailable: {e}", context={"model": self.model}) from e

        if not response.choices or not response.choices[0].message.content:
            raise UpstreamParseError("Invalid response from AI service", context={"model": self.model})

        return response.choices[0].message.content

    async def close(self):
        """Close the underlying SDK client."""
        await self.client.close()
        logger.info("Completion client closed")


def get_completion_client(settings: Optional[Settings] = None) -> Optional[OpenAICompletionClient]:
    """Build a completion client from settings, or None when no service is configured."""
    settings = settings or get_settings()
    client = ServiceInitializer.init_openai_client(settings)
    if client is None:
        return None
    return OpenAICompletionClient(client, settings)
