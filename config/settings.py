# DEPENDENCIES
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine-wide settings: primary configuration source
    """
    model_config                     = SettingsConfigDict(env_file          = ".env",
                                                          env_file_encoding = "utf-8",
                                                          case_sensitive    = True,
                                                          extra             = "ignore",
                                                         )

    # Application Info
    APP_NAME                         : str           = "LegalEase Contract Engine"
    APP_VERSION                      : str           = "1.0.0"

    # External Reasoner (LLM) Settings
    LLM_PROVIDER                     : str           = "ollama"
    OLLAMA_BASE_URL                  : str           = "http://localhost:11434"
    OLLAMA_MODEL                     : str           = "llama3:8b"
    OLLAMA_TIMEOUT                   : int           = 120
    OPENAI_API_KEY                   : Optional[str] = None
    OPENAI_MODEL                     : str           = "gpt-4o-mini"
    ANTHROPIC_API_KEY                : Optional[str] = None
    ANTHROPIC_MODEL                  : str           = "claude-3-haiku-20240307"

    # Scheduler Settings (free tier allows 15/min, stay below it)
    REASONER_MAX_REQUESTS_PER_WINDOW : int           = 12
    REASONER_WINDOW_SECONDS          : float         = 60.0
    REASONER_MIN_INTERVAL_SECONDS    : float         = 1.0
    REASONER_MAX_RETRIES             : int           = 2
    REASONER_RETRY_BASE_DELAY        : float         = 0.5

    # Analysis Limits
    CLAUSE_MAX_TOKENS                : int           = 1000
    SUMMARY_EXCERPT_CHARS            : int           = 4000
    EXPLANATION_PREVIEW_CHARS        : int           = 200
    COMPARISON_PREVIEW_CHARS         : int           = 200
    RENT_BARE_NUMBER_FALLBACK        : bool          = True

    # Logging Settings
    LOG_LEVEL                        : str           = "INFO"
    LOG_DIR                          : Path          = Path("logs")


# Global settings instance
settings = Settings()
