import asyncio
import os
from typing import Any

import pytest

DEFAULT_ENV: dict[str, str] = {
    "ASSEMBLYAI_API_KEY": "test-api-key-0123456789",
    "ASSEMBLYAI_BASE_URL": "https://assemblyai.test/v2",
    "POLL_INTERVAL_SECONDS": "0",
    "POLL_MAX_WAIT_SECONDS": "30",
}

for key, value in DEFAULT_ENV.items():
    os.environ.setdefault(key, value)


from config import OrchestratorConfig  # noqa: E402
from domain import (  # noqa: E402
    AudioInput,
    JobOutcome,
    JobState,
    TranscriptBuilder,
    TranscriptResponse,
)
from exceptions import PollError, SubmissionError, TranscriptionJobError, UploadError  # noqa: E402
from handlers import TranscriptionJobOrchestrator  # noqa: E402
from infrastructure.interfaces import JobObserver, TranscriptionService  # noqa: E402


class FakeTranscriptionService(TranscriptionService):
    """In-memory stand-in for the remote transcription service."""

    def __init__(
        self,
        statuses: list[dict[str, Any]] | None = None,
        fail_upload: bool = False,
        fail_submit: bool = False,
        fail_poll_at: int | None = None,
    ):
        self.statuses = list(statuses or [])
        self.fail_upload = fail_upload
        self.fail_submit = fail_submit
        self.fail_poll_at = fail_poll_at
        self.calls: list[tuple] = []

    async def upload(self, audio: AudioInput) -> str:
        self.calls.append(("upload", audio.file_name))
        if self.fail_upload:
            raise UploadError(audio.file_name)
        return "https://cdn.assemblyai.test/upload/abc"

    async def create_transcript(self, audio_url: str, *, summarization: bool) -> str:
        self.calls.append(("create_transcript", audio_url, summarization))
        if self.fail_submit:
            raise SubmissionError(audio_url)
        return "job-123"

    async def get_transcript(self, job_id: str) -> TranscriptResponse:
        poll_count = sum(1 for c in self.calls if c[0] == "get_transcript")
        self.calls.append(("get_transcript", job_id))
        if self.fail_poll_at is not None and poll_count == self.fail_poll_at:
            raise PollError(job_id)
        payload = self.statuses[min(poll_count, len(self.statuses) - 1)]
        return TranscriptResponse.model_validate({"id": job_id, **payload})

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)


class RecordingObserver(JobObserver):
    """Collects every event an orchestrator emits."""

    def __init__(self):
        self.states: list[JobState] = []
        self.outcomes: list[JobOutcome] = []
        self.errors: list[TranscriptionJobError] = []

    def on_progress(self, state: JobState) -> None:
        self.states.append(state)

    def on_completed(self, outcome: JobOutcome, state: JobState) -> None:
        self.outcomes.append(outcome)

    def on_error(self, error: TranscriptionJobError, state: JobState) -> None:
        self.errors.append(error)
        self.states.append(state)


COMPLETED_PAYLOAD: dict[str, Any] = {
    "status": "completed",
    "text": "Hi Hello",
    "utterances": [
        {"speaker": "A", "text": "Hi"},
        {"speaker": "B", "text": "Hello"},
    ],
    "summary": "Two people greet each other.",
}


@pytest.fixture
def run_async():
    def _run(coro):
        return asyncio.run(coro)

    return _run


@pytest.fixture
def audio() -> AudioInput:
    return AudioInput(data=b"ID3fake-mp3-bytes", content_type="audio/mpeg", file_name="meeting.mp3")


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def make_orchestrator(observer: RecordingObserver):
    def _make(
        service: TranscriptionService,
        summarization: bool = True,
        **config: Any,
    ) -> TranscriptionJobOrchestrator:
        settings = {"poll_interval_seconds": 0, **config}
        return TranscriptionJobOrchestrator(
            service,
            TranscriptBuilder(),
            OrchestratorConfig(**settings),
            summarization=summarization,
            observers=[observer],
        )

    return _make
