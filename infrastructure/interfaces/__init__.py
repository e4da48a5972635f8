"""Infrastructure interface exports."""

from .job_observer import JobObserver
from .transcription_service import TranscriptionService

__all__ = ["JobObserver", "TranscriptionService"]
