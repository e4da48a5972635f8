"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod

from domain.models import AudioInput, TranscriptResponse


class TranscriptionService(ABC):
    """Abstract base class for remote transcription backends."""

    @abstractmethod
    async def upload(self, audio: AudioInput) -> str:
        """
        Uploads raw audio to the transcription service.

        Args:
            audio: The validated audio input.

        Returns:
            The opaque upload URL referencing the stored audio.

        Raises:
            UploadError: If the upload does not succeed.
        """

    @abstractmethod
    async def create_transcript(self, audio_url: str, *, summarization: bool) -> str:
        """
        Submits a speaker-labeled transcription job for uploaded audio.

        Args:
            audio_url: The upload URL returned by ``upload``.
            summarization: Whether to request a paragraph summary.

        Returns:
            The job identifier assigned by the service.

        Raises:
            SubmissionError: If the job cannot be created.
        """

    @abstractmethod
    async def get_transcript(self, job_id: str) -> TranscriptResponse:
        """
        Fetches the current status of a transcription job.

        Args:
            job_id: The job identifier returned by ``create_transcript``.

        Returns:
            The parsed status payload.

        Raises:
            PollError: If the status check fails.
        """
