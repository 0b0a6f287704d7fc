import os
from dotenv import load_dotenv
from typing import Dict, Any
from functools import lru_cache

load_dotenv()

class Settings:
    # OpenAI Settings
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    # Azure OpenAI Settings
    AZURE_OPENAI_KEY: str = os.getenv("AZURE_OPENAI_KEY", "")
    AZURE_OPENAI_ENDPOINT: str = os.getenv("AZURE_OPENAI_ENDPOINT", "")
    AZURE_OPENAI_DEPLOYMENT: str = os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4.0")
    AZURE_OPENAI_API_VERSION: str = os.getenv("AZURE_OPENAI_API_VERSION", "2024-04-01-preview")

    # Completion Settings
    AI_MAX_TOKENS: int = int(os.getenv("AI_MAX_TOKENS", "1024"))
    AI_TEMPERATURE: float = float(os.getenv("AI_TEMPERATURE", "0.7"))
    AI_TIMEOUT: float = float(os.getenv("AI_TIMEOUT", "60"))

    # Duplicate Detection Settings
    DUPLICATE_SIMILARITY_THRESHOLD: float = float(os.getenv("DUPLICATE_SIMILARITY_THRESHOLD", "0.8"))
    DUPLICATE_BATCH_DELAY_SECONDS: float = float(os.getenv("DUPLICATE_BATCH_DELAY_SECONDS", "0.5"))
    DUPLICATE_MAX_AI_COMPARISONS: int = int(os.getenv("DUPLICATE_MAX_AI_COMPARISONS", "100"))
    DUPLICATE_BATCH_CANDIDATE_LIMIT: int = int(os.getenv("DUPLICATE_BATCH_CANDIDATE_LIMIT", "200"))

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    @property
    def configured_services(self) -> Dict[str, bool]:
        """Get all service configuration status at once."""
        return {
            "azure_openai": bool(self.AZURE_OPENAI_KEY and self.AZURE_OPENAI_ENDPOINT),
            "openai": bool(self.OPENAI_API_KEY)
        }

    def is_service_configured(self, service: str) -> bool:
        """Check if a specific service is configured."""
        return self.configured_services.get(service, False)

    @property
    def is_azure_openai_configured(self) -> bool:
        return self.is_service_configured("azure_openai")

    @property
    def is_openai_configured(self) -> bool:
        return self.is_service_configured("openai")

    @property
    def is_ai_configured(self) -> bool:
        return any(self.configured_services.values())

    def get_completion_config(self) -> Dict[str, Any]:
        """Get completion request configuration."""
        if self.is_azure_openai_configured:
            model = self.AZURE_OPENAI_DEPLOYMENT
        else:
            model = self.OPENAI_MODEL
        return {
            "model": model,
            "max_tokens": self.AI_MAX_TOKENS,
            "temperature": self.AI_TEMPERATURE,
            "timeout": self.AI_TIMEOUT
        }

@lru_cache()
def get_settings():
    return Settings()
