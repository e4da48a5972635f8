"""Domain layer exports."""

from .audio_validator import AudioValidator
from .models import (
    SUPPORTED_AUDIO_TYPES,
    AudioInput,
    JobHandle,
    JobOutcome,
    JobState,
    JobStatus,
    TranscriptResponse,
    TranscriptStatus,
    Utterance,
)
from .transcript_builder import NO_SUMMARY_PLACEHOLDER, TranscriptBuilder

__all__ = [
    "SUPPORTED_AUDIO_TYPES",
    "NO_SUMMARY_PLACEHOLDER",
    "AudioInput",
    "AudioValidator",
    "JobHandle",
    "JobOutcome",
    "JobState",
    "JobStatus",
    "TranscriptBuilder",
    "TranscriptResponse",
    "TranscriptStatus",
    "Utterance",
]
