"""Custom exceptions for the transcription service."""

from enum import StrEnum


class JobErrorKind(StrEnum):
    """Machine-readable category of a failed transcription attempt."""

    VALIDATION = "validation"
    UNSUPPORTED_FORMAT = "unsupported_format"
    MISSING_AUDIO = "missing_audio"
    UPLOAD = "upload"
    SUBMISSION = "submission"
    POLL = "poll"
    TRANSCRIPTION_FAILED = "transcription_failed"
    TIMEOUT = "timeout"
    IN_PROGRESS = "in_progress"
    UNEXPECTED = "unexpected"


class TranscriptionJobError(Exception):
    """Base class for every failure of a transcription attempt."""

    kind: JobErrorKind = JobErrorKind.VALIDATION

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class InputValidationError(TranscriptionJobError):
    """Raised when the audio input is rejected before any network call."""

    kind = JobErrorKind.VALIDATION


class UnsupportedFormatError(InputValidationError):
    """Raised when the audio MIME type is not in the allow-list."""

    kind = JobErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(
            "Unsupported file format. Please upload an audio file in "
            "MP3, WAV, M4A, FLAC, OGG, or WEBM format."
        )


class MissingAudioError(InputValidationError):
    """Raised when no audio payload was provided."""

    kind = JobErrorKind.MISSING_AUDIO

    def __init__(self):
        super().__init__("Please select an audio file.")


class UploadError(TranscriptionJobError):
    """Raised when uploading the audio to the transcription service fails."""

    kind = JobErrorKind.UPLOAD

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        super().__init__("Failed to upload the audio file.", cause)


class SubmissionError(TranscriptionJobError):
    """Raised when the transcription job cannot be created."""

    kind = JobErrorKind.SUBMISSION

    def __init__(self, audio_url: str, cause: Exception | None = None):
        self.audio_url = audio_url
        super().__init__("Failed to create the transcription request.", cause)


class PollError(TranscriptionJobError):
    """Raised when a status check against the transcription service fails."""

    kind = JobErrorKind.POLL

    def __init__(self, job_id: str, cause: Exception | None = None):
        self.job_id = job_id
        super().__init__("Failed to check the transcription status.", cause)


class TranscriptionFailedError(TranscriptionJobError):
    """Raised when the transcription service reports a terminal error status."""

    kind = JobErrorKind.TRANSCRIPTION_FAILED

    def __init__(self, job_id: str, reason: str | None = None):
        self.job_id = job_id
        self.reason = reason
        message = "An error occurred during transcription."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class TranscriptionTimeoutError(TranscriptionJobError):
    """Raised when a job does not reach a terminal status within the polling bounds."""

    kind = JobErrorKind.TIMEOUT

    def __init__(self, job_id: str, waited_seconds: float, attempts: int):
        self.job_id = job_id
        self.waited_seconds = waited_seconds
        self.attempts = attempts
        super().__init__(
            f"Transcription did not complete within {waited_seconds:.0f} seconds."
        )


class JobInProgressError(TranscriptionJobError):
    """Raised when a new attempt is started while another one is in flight."""

    kind = JobErrorKind.IN_PROGRESS

    def __init__(self, job_id: str | None = None):
        self.job_id = job_id
        super().__init__("A transcription is already in progress.")


class UnexpectedJobError(TranscriptionJobError):
    """Raised when an attempt fails for a reason outside the known error kinds."""

    kind = JobErrorKind.UNEXPECTED

    def __init__(self, cause: Exception):
        super().__init__("An unexpected error occurred during transcription.", cause)
