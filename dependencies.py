"""Dependency injection configuration for the transcription service."""

import httpx
from meetscript_common import register_secret, setup_logging

from config import load_config
from domain import TranscriptBuilder
from handlers import TranscriptionJobOrchestrator
from infrastructure import AssemblyAIClient, LoggingJobObserver, create_http_client
from infrastructure.interfaces import TranscriptionService

logger = setup_logging()

_config = load_config()

_api_key = _config.assemblyai.api_key.get_secret_value()
register_secret(_api_key)
if not _api_key:
    logger.warning("ASSEMBLYAI_API_KEY is not set, requests will be rejected")

# AssemblyAI setup
_http_client = create_http_client(
    api_key=_api_key,
    base_url=_config.assemblyai.base_url,
    timeout_seconds=_config.assemblyai.request_timeout_seconds,
)

_transcription_service = AssemblyAIClient(
    _http_client, speaker_labels=_config.assemblyai.speaker_labels
)

# One in-memory session per process
_orchestrator = TranscriptionJobOrchestrator(
    _transcription_service,
    TranscriptBuilder(),
    _config.orchestrator,
    summarization=_config.assemblyai.summarization,
    observers=[LoggingJobObserver()],
)


def get_http_client() -> httpx.AsyncClient:
    """Returns the shared AssemblyAI HTTP client."""
    return _http_client


def get_transcription_service() -> TranscriptionService:
    """Returns the configured transcription service."""
    return _transcription_service


def get_orchestrator() -> TranscriptionJobOrchestrator:
    """Returns the session's transcription job orchestrator."""
    return _orchestrator
