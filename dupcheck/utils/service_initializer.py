"""
Service initialization utilities for consistent error handling.
"""

from typing import Optional, Union
from openai import AsyncOpenAI, AsyncAzureOpenAI
from dupcheck.config import Settings, get_settings
from dupcheck.utils.logger import get_logger

logger = get_logger(__name__)

class ServiceInitializer:
    """Utility class for initializing the completion SDK clients."""

    @staticmethod
    def init_openai_client(settings: Optional[Settings] = None) -> Optional[Union[AsyncOpenAI, AsyncAzureOpenAI]]:
        """Initialize an async OpenAI or Azure OpenAI client, or None when neither is configured."""
        settings = settings or get_settings()

        try:
            if settings.is_azure_openai_configured:
                client = AsyncAzureOpenAI(
                    api_key=settings.AZURE_OPENAI_KEY,
                    azure_endpoint=settings.AZURE_OPENAI_ENDPOINT,
                    api_version=settings.AZURE_OPENAI_API_VERSION,
                    timeout=settings.AI_TIMEOUT
                )
                logger.info("✅ Azure OpenAI client initialized successfully")
                return client

            if settings.is_openai_configured:
                client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, timeout=settings.AI_TIMEOUT)
                logger.info("✅ OpenAI client initialized successfully")
                return client
        except Exception as e:
            logger.error(f"❌ Error initializing OpenAI client: {e}")
            return None

        logger.warning("⚠️ No completion service configured, duplicate checks will use lexical similarity")
        return None
