"""JobObserver that reports transcription progress through structured logs."""

from meetscript_common.logging import setup_logging

from domain.models import JobOutcome, JobState
from exceptions import TranscriptionJobError

from .interfaces import JobObserver

logger = setup_logging()


class LoggingJobObserver(JobObserver):
    """Writes every state change of an attempt to the application log."""

    def on_progress(self, state: JobState) -> None:
        logger.info(
            state.progress_message or "Transcription state changed",
            extra={
                "status": state.status.value,
                "progress": state.progress_percent,
                "job_id": state.job_id,
            },
        )

    def on_completed(self, outcome: JobOutcome, state: JobState) -> None:
        logger.info(
            "Transcription completed",
            extra={
                "job_id": outcome.job_id,
                "utterance_count": len(outcome.utterances),
                "has_summary": outcome.summary_text is not None,
            },
        )

    def on_error(self, error: TranscriptionJobError, state: JobState) -> None:
        logger.error(
            "Transcription failed",
            extra={"error_kind": error.kind.value, "error": error.message},
        )
