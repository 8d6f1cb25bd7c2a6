from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read from OS env and optional .env file in project root.
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Redis connection string
    redis_url: str = Field(
        "redis://localhost:6379/0",
        alias="REDIS_URL",
        description="Redis connection URL, e.g. 'redis://redis:6379/0'",
    )

    # Outbound provider calls
    upstream_timeout: float = Field(
        120.0,
        alias="UPSTREAM_TIMEOUT_SECONDS",
        description="Timeout applied to every outbound provider call",
        gt=0,
    )

    # Wait before staged fragments are read back after a completion signal.
    quiescence_delay: float = Field(
        1.0,
        alias="QUIESCENCE_DELAY_SECONDS",
        description="Delay between a completion signal and session assembly",
        ge=0,
    )
    workspace_delay: float = Field(
        3.0,
        alias="WORKSPACE_DELAY_SECONDS",
        description="Delay between a workspace prompt and request assembly",
        ge=0,
    )

    session_ttl_seconds: int = Field(7200, alias="SESSION_TTL_SECONDS", gt=0)
    workspace_ttl_seconds: int = Field(3600, alias="WORKSPACE_TTL_SECONDS", gt=0)

    # Anthropic request shaping
    anthropic_version: str = Field("2023-06-01", alias="ANTHROPIC_VERSION")
    anthropic_max_tokens: int = Field(32000, alias="ANTHROPIC_MAX_TOKENS", gt=0)
    anthropic_project_max_tokens: int = Field(
        64000, alias="ANTHROPIC_PROJECT_MAX_TOKENS", gt=0
    )
    anthropic_beta_header: str = Field(
        "context-1m-2025-08-07", alias="ANTHROPIC_BETA_HEADER"
    )
    anthropic_beta_model_prefixes_raw: str = Field(
        "claude-sonnet-4",
        alias="ANTHROPIC_BETA_MODEL_PREFIXES",
        description="Comma-separated model id prefixes that need the extended-context beta",
    )

    openai_max_output_tokens: int = Field(
        1024 * 96, alias="OPENAI_MAX_OUTPUT_TOKENS", gt=0
    )

    # Deployment-level provider credentials; a staged api_key fragment wins.
    openai_api_key: Optional[str] = Field(None, alias="OPENAI_API_KEY")
    anthropic_api_key: Optional[str] = Field(None, alias="ANTHROPIC_API_KEY")
    gemini_api_key: Optional[str] = Field(None, alias="GEMINI_API_KEY")
    github_token: Optional[str] = Field(None, alias="GITHUB_TOKEN")

    # Application log level for our agentgate logger.
    # Can be overridden via LOG_LEVEL env var, e.g. "DEBUG" while debugging.
    log_level: str = Field(
        "INFO",
        alias="LOG_LEVEL",
        description="Application log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_timezone: Optional[str] = Field(
        default=None,
        alias="LOG_TIMEZONE",
        description="Timezone name for log timestamps, e.g. 'Europe/Berlin'. Defaults to system local time.",
    )
    log_dir: str = Field("logs", alias="LOG_DIR")

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(4000, alias="PORT")

    def get_anthropic_beta_model_prefixes(self) -> List[str]:
        """
        Return configured prefixes from ANTHROPIC_BETA_MODEL_PREFIXES.
        Whitespace is stripped and empty entries are ignored.
        """
        return [
            item.strip()
            for item in self.anthropic_beta_model_prefixes_raw.split(",")
            if item.strip()
        ]


settings = Settings()  # Reads from environment if available
