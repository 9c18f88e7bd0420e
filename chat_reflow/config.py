"""
Configuration management using pydantic-settings.

This module handles:
- API key management for the chat assistant (from environment or .env file)
- Model configuration (which Claude model to use)
- Reflow thresholds, so deployments can tune them without code changes
- Log level for the CLI

The reflow engine never reads settings itself. Callers turn settings into a
ReflowPolicy with Settings.to_policy() and pass it in explicitly.

Environment variables are loaded in this priority order:
1. System environment variables (highest priority)
2. .env file in current directory
3. Default values defined in the Settings class
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import ReflowPolicy


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Example:
        # In .env or shell:
        CHAT_REFLOW_ANTHROPIC_API_KEY=sk-ant-xxx
        CHAT_REFLOW_COMMA_MIN_LINE_LENGTH=80

        # In Python:
        settings = Settings()
        policy = settings.to_policy()
    """

    # === API Configuration ===
    # Optional: only the `chat` command talks to Claude
    anthropic_api_key: SecretStr | None = Field(
        default=None,
        description="Your Anthropic API key (starts with 'sk-ant-')"
    )

    # === Model Configuration ===
    model_name: str = Field(
        default="claude-sonnet-4-5-20250929",
        description="Claude model to use for chat replies"
    )

    max_tokens: int = Field(
        default=1024,
        ge=1,
        description="Maximum tokens in Claude's response"
    )

    # === Logging ===
    log_level: str = Field(
        default="WARNING",
        description="Log level for the chat_reflow logger"
    )

    # === Reflow Thresholds ===
    greeting_phrases: tuple[str, ...] = Field(
        default=("sure", "absolutely", "of course", "no problem"),
        description="Filler acknowledgements stripped from the start of a reply"
    )

    comma_min_count: int = Field(default=2, ge=0)
    comma_min_line_length: int = Field(default=60, ge=0)
    wrap_max_words: int = Field(default=22, ge=1)
    wrap_min_split: int = Field(default=18, ge=1)
    wrap_max_split: int = Field(default=24, ge=1)
    paragraph_lead_sentences: int = Field(default=2, ge=1)
    question_isolation_min: int = Field(default=2, ge=1)

    # === Pydantic Settings Configuration ===
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        # e.g., CHAT_REFLOW_ANTHROPIC_API_KEY, CHAT_REFLOW_WRAP_MAX_WORDS
        env_prefix="CHAT_REFLOW_",
        extra="ignore",
    )

    def to_policy(self) -> ReflowPolicy:
        """
        Build the ReflowPolicy described by these settings.

        Raises:
            ValidationError: If the thresholds are inconsistent
                (e.g. wrap_min_split > wrap_max_split)
        """
        return ReflowPolicy(
            greeting_phrases=self.greeting_phrases,
            comma_min_count=self.comma_min_count,
            comma_min_line_length=self.comma_min_line_length,
            wrap_max_words=self.wrap_max_words,
            wrap_min_split=self.wrap_min_split,
            wrap_max_split=self.wrap_max_split,
            paragraph_lead_sentences=self.paragraph_lead_sentences,
            question_isolation_min=self.question_isolation_min,
        )


# ============================================================================
# Cached Settings
# ============================================================================
# A module-level variable caches the Settings instance so the .env file is
# read once per process.

_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (lazy-loaded singleton).

    Returns:
        Settings: The application settings instance

    Raises:
        ValidationError: If a setting has an invalid value
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reset_settings() -> None:
    """Reset the cached settings (useful for testing)."""
    global _settings
    _settings = None
