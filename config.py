"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, Field, SecretStr


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: SecretStr
    base_url: str = "https://api.assemblyai.com/v2"
    speaker_labels: bool = True
    summarization: bool = True
    request_timeout_seconds: float = 60.0


class OrchestratorConfig(BaseModel, frozen=True):
    """Polling behaviour of the transcription job orchestrator."""

    poll_interval_seconds: float = Field(default=3.0, ge=0)
    max_wait_seconds: float = Field(default=1800.0, gt=0)
    max_poll_attempts: int | None = Field(default=None, gt=0)


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    assemblyai: AssemblyAIConfig
    orchestrator: OrchestratorConfig = OrchestratorConfig()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    max_attempts = os.getenv("POLL_MAX_ATTEMPTS")
    return AppConfig(
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            base_url=os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com/v2"),
            summarization=_env_flag("ASSEMBLYAI_SUMMARIZATION", True),
            request_timeout_seconds=float(
                os.getenv("ASSEMBLYAI_REQUEST_TIMEOUT_SECONDS", "60")
            ),
        ),
        orchestrator=OrchestratorConfig(
            poll_interval_seconds=float(os.getenv("POLL_INTERVAL_SECONDS", "3")),
            max_wait_seconds=float(os.getenv("POLL_MAX_WAIT_SECONDS", "1800")),
            max_poll_attempts=int(max_attempts) if max_attempts else None,
        ),
    )
