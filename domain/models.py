"""Domain models for the transcription job orchestrator."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

SUPPORTED_AUDIO_TYPES = frozenset(
    {
        "audio/mpeg",
        "audio/wav",
        "audio/x-wav",
        "audio/mp4",
        "audio/flac",
        "audio/ogg",
        "audio/webm",
    }
)


class JobStatus(StrEnum):
    """Lifecycle status of a single transcription attempt."""

    IDLE = "idle"
    UPLOADING = "uploading"
    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"


class TranscriptStatus(StrEnum):
    """Job status as reported by the transcription service."""

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class AudioInput(BaseModel, frozen=True):
    """A user-selected audio blob with its MIME type."""

    data: bytes
    content_type: str
    file_name: str = "audio"


class Utterance(BaseModel, frozen=True):
    """A single speaker utterance from transcription."""

    speaker: str | int
    text: str


class JobHandle(BaseModel, frozen=True):
    """Reference to a job submitted to the transcription service."""

    job_id: str
    audio_url: str


class TranscriptResponse(BaseModel, frozen=True):
    """Status payload returned by the transcription service for one job."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    status: str
    text: str | None = None
    utterances: list[Utterance] | None = None
    summary: str | None = None
    error: str | None = None


class JobOutcome(BaseModel, frozen=True):
    """Result of a completed transcription job."""

    job_id: str
    raw_text: str
    utterances: list[Utterance]
    transcript_text: str
    summary_text: str | None = None


class JobState(BaseModel, frozen=True):
    """Snapshot of the orchestrator's state for the current attempt."""

    status: JobStatus = JobStatus.IDLE
    progress_percent: int = 0
    progress_message: str = ""
    job_id: str | None = None
    transcript_text: str | None = None
    raw_text: str | None = None
    summary_text: str | None = None
    error_message: str | None = None
    error_kind: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status in (
            JobStatus.UPLOADING,
            JobStatus.SUBMITTED,
            JobStatus.POLLING,
        )
