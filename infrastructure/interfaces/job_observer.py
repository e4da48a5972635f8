"""Abstract interface for transcription progress subscribers."""

from abc import ABC, abstractmethod

from domain.models import JobOutcome, JobState
from exceptions import TranscriptionJobError


class JobObserver(ABC):
    """Receives state changes of a transcription attempt."""

    @abstractmethod
    def on_progress(self, state: JobState) -> None:
        """Called after every state transition of the attempt."""

    @abstractmethod
    def on_completed(self, outcome: JobOutcome, state: JobState) -> None:
        """Called once when the job completes successfully."""

    @abstractmethod
    def on_error(self, error: TranscriptionJobError, state: JobState) -> None:
        """Called once when the attempt fails, after state has been reset."""
