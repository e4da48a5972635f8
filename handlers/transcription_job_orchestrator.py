"""Orchestrates a single upload-submit-poll transcription attempt."""

import asyncio
from collections.abc import Iterable

from meetscript_common.logging import setup_logging

from config import OrchestratorConfig
from domain import (
    AudioInput,
    AudioValidator,
    JobHandle,
    JobOutcome,
    JobState,
    JobStatus,
    TranscriptBuilder,
    TranscriptResponse,
    TranscriptStatus,
)
from exceptions import (
    InputValidationError,
    JobInProgressError,
    TranscriptionFailedError,
    TranscriptionJobError,
    TranscriptionTimeoutError,
    UnexpectedJobError,
)
from infrastructure.interfaces import JobObserver, TranscriptionService

logger = setup_logging()

UPLOADING_MESSAGE = "Uploading audio file..."
UPLOADED_MESSAGE = "Audio file uploaded. Sending for transcription..."
IN_PROGRESS_MESSAGE = "Transcription in progress..."
COMPLETED_MESSAGE = "Transcription completed!"
CANCELLED_MESSAGE = "Transcription cancelled."


class TranscriptionJobOrchestrator:
    """
    Drives one transcription attempt from validated input to a terminal outcome.

    The orchestrator owns the JobState for the attempt and replaces it with a
    new snapshot on every transition, notifying subscribed observers each time.
    Only one attempt may be in flight per instance.
    """

    def __init__(
        self,
        transcription_service: TranscriptionService,
        transcript_builder: TranscriptBuilder,
        config: OrchestratorConfig,
        summarization: bool = True,
        validator: AudioValidator | None = None,
        observers: Iterable[JobObserver] = (),
    ):
        self._service = transcription_service
        self._builder = transcript_builder
        self._config = config
        self._summarization = summarization
        self._validator = validator or AudioValidator()
        self._observers: list[JobObserver] = list(observers)
        self._state = JobState()
        self._busy = False

    @property
    def state(self) -> JobState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._busy

    def subscribe(self, observer: JobObserver) -> None:
        self._observers.append(observer)

    def validate(self, audio: AudioInput) -> None:
        """
        Checks the input before any network call is made.

        Raises:
            MissingAudioError: If the payload is empty.
            UnsupportedFormatError: If the MIME type is not allowed.
        """
        self._validator.validate(audio)

    def reserve(self) -> None:
        """
        Marks the orchestrator busy and resets state for a new attempt.

        The previous attempt's result is discarded here, before any await, so
        readers never see a stale transcript once a new attempt is accepted.

        Raises:
            JobInProgressError: If another attempt is still in flight.
        """
        if self._busy:
            raise JobInProgressError(self._state.job_id)
        self._busy = True
        self._reset()

    async def run(self, audio: AudioInput, *, reserved: bool = False) -> JobOutcome:
        """
        Runs a full attempt: validate, upload, submit and poll.

        Args:
            audio: The audio selected by the user.
            reserved: True when the caller already called ``reserve``.

        Returns:
            JobOutcome with the formatted transcript and summary.

        Raises:
            JobInProgressError: If another attempt is still in flight.
            TranscriptionJobError: If any step fails. State is already reset.
        """
        if not reserved:
            self.reserve()
        try:
            try:
                self.validate(audio)
            except InputValidationError as e:
                self._fail(e)
                raise
            handle = await self.submit(audio)
            return await self.poll_until_terminal(handle)
        except asyncio.CancelledError:
            logger.info("Transcription attempt cancelled", extra={"job_id": self._state.job_id})
            self._reset(CANCELLED_MESSAGE)
            raise
        except TranscriptionJobError:
            raise
        except Exception as e:
            logger.exception(
                "Unexpected failure during transcription attempt",
                extra={"job_id": self._state.job_id, "status": self._state.status.value},
            )
            error = UnexpectedJobError(e)
            self._fail(error)
            raise error from e
        finally:
            self._busy = False

    async def submit(self, audio: AudioInput) -> JobHandle:
        """
        Uploads the audio and creates the transcription job.

        Raises:
            UploadError: If the upload fails.
            SubmissionError: If the job cannot be created.
        """
        try:
            self._publish(
                status=JobStatus.UPLOADING,
                progress_percent=10,
                progress_message=UPLOADING_MESSAGE,
            )
            upload_url = await self._service.upload(audio)

            self._publish(
                status=JobStatus.SUBMITTED,
                progress_percent=40,
                progress_message=UPLOADED_MESSAGE,
            )
            job_id = await self._service.create_transcript(
                upload_url, summarization=self._summarization
            )
        except TranscriptionJobError as e:
            self._fail(e)
            raise

        self._publish(
            status=JobStatus.POLLING,
            progress_percent=60,
            progress_message=IN_PROGRESS_MESSAGE,
            job_id=job_id,
        )
        return JobHandle(job_id=job_id, audio_url=upload_url)

    async def poll_until_terminal(self, handle: JobHandle) -> JobOutcome:
        """
        Polls the job status at a fixed interval until it completes or fails.

        Raises:
            PollError: If a status check fails.
            TranscriptionFailedError: If the service reports an error status.
            TranscriptionTimeoutError: If the polling bounds are exceeded.
        """
        loop = asyncio.get_running_loop()
        started = loop.time()
        attempts = 0
        try:
            while True:
                await asyncio.sleep(self._config.poll_interval_seconds)
                attempts += 1
                response = await self._service.get_transcript(handle.job_id)

                if response.status == TranscriptStatus.COMPLETED:
                    return self._complete(handle, response)
                if response.status == TranscriptStatus.ERROR:
                    raise TranscriptionFailedError(handle.job_id, response.error)

                percent = 70 if response.status == TranscriptStatus.PROCESSING else 50
                self._publish(
                    status=JobStatus.POLLING,
                    progress_percent=max(self._state.progress_percent, percent),
                    progress_message=IN_PROGRESS_MESSAGE,
                )

                waited = loop.time() - started
                if self._bounds_exceeded(attempts, waited):
                    raise TranscriptionTimeoutError(handle.job_id, waited, attempts)
        except TranscriptionJobError as e:
            self._fail(e)
            raise

    def _bounds_exceeded(self, attempts: int, waited: float) -> bool:
        max_attempts = self._config.max_poll_attempts
        if max_attempts is not None and attempts >= max_attempts:
            return True
        return waited + self._config.poll_interval_seconds > self._config.max_wait_seconds

    def _complete(self, handle: JobHandle, response: TranscriptResponse) -> JobOutcome:
        utterances = response.utterances or []
        raw_text = response.text or ""
        outcome = JobOutcome(
            job_id=handle.job_id,
            raw_text=raw_text,
            utterances=utterances,
            transcript_text=self._builder.build(utterances, raw_text),
            summary_text=self._builder.summarize(response.summary, self._summarization),
        )
        self._publish(
            status=JobStatus.COMPLETED,
            progress_percent=100,
            progress_message=COMPLETED_MESSAGE,
            transcript_text=outcome.transcript_text,
            raw_text=outcome.raw_text,
            summary_text=outcome.summary_text,
        )
        self._notify("on_completed", outcome, self._state)
        return outcome

    def _reset(self, message: str = "") -> None:
        self._state = JobState(progress_message=message)
        self._notify("on_progress", self._state)

    def _fail(self, error: TranscriptionJobError) -> None:
        logger.warning(
            "Transcription attempt failed",
            extra={
                "error_kind": error.kind.value,
                "job_id": self._state.job_id,
                "progress": self._state.progress_percent,
            },
        )
        self._state = JobState(
            status=JobStatus.FAILED,
            job_id=self._state.job_id,
            error_message=error.message,
            error_kind=error.kind.value,
        )
        self._notify("on_error", error, self._state)

    def _publish(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        self._notify("on_progress", self._state)

    def _notify(self, event: str, *args) -> None:
        for observer in self._observers:
            try:
                getattr(observer, event)(*args)
            except Exception:
                logger.exception(
                    "Job observer failed",
                    extra={"observer": type(observer).__name__, "event": event},
                )
