"""Response models for the transcription API."""

from pydantic import BaseModel

from domain import JobState, JobStatus


class TranscriptionAcceptedResponse(BaseModel):
    """Response returned once an audio file is accepted for transcription."""

    message: str
    status: JobStatus


class JobStateResponse(BaseModel):
    """Snapshot of the current transcription attempt."""

    status: JobStatus
    progress_percent: int
    progress_message: str
    job_id: str | None = None
    transcript_text: str | None = None
    raw_text: str | None = None
    summary_text: str | None = None
    error_message: str | None = None
    error_kind: str | None = None

    @classmethod
    def from_state(cls, state: JobState) -> "JobStateResponse":
        return cls(
            status=state.status,
            progress_percent=state.progress_percent,
            progress_message=state.progress_message,
            job_id=state.job_id,
            transcript_text=state.transcript_text,
            raw_text=state.raw_text,
            summary_text=state.summary_text,
            error_message=state.error_message,
            error_kind=state.error_kind,
        )
