"""Transcription upload, status and download endpoints."""

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse
from meetscript_common.logging import setup_logging

from dependencies import get_orchestrator
from domain import AudioInput
from exceptions import InputValidationError, JobInProgressError, TranscriptionJobError
from handlers import TranscriptionJobOrchestrator
from response_models import JobStateResponse, TranscriptionAcceptedResponse

logger = setup_logging()

router = APIRouter(prefix="/transcriptions", tags=["transcriptions"])

OrchestratorDep = Annotated[TranscriptionJobOrchestrator, Depends(get_orchestrator)]

TRANSCRIPT_FILE_NAME = "transcription.txt"
SUMMARY_FILE_NAME = "summary.txt"

# Strong references keep running attempts from being garbage collected.
_attempts: set[asyncio.Task] = set()


async def _run_attempt(orchestrator: TranscriptionJobOrchestrator, audio: AudioInput) -> None:
    """Task that drives a reserved attempt to its terminal state."""
    try:
        await orchestrator.run(audio, reserved=True)
    except TranscriptionJobError as e:
        # Already surfaced through the orchestrator state and observers.
        logger.info(
            "Transcription attempt ended with an error",
            extra={"file_name": audio.file_name, "error_kind": e.kind.value},
        )


@router.post("", response_model=TranscriptionAcceptedResponse, status_code=202)
async def start_transcription(
    file: UploadFile,
    orchestrator: OrchestratorDep,
) -> TranscriptionAcceptedResponse:
    """
    Accepts an audio file and starts transcribing it in the background.

    Poll ``GET /transcriptions/current`` for progress.
    """
    audio = AudioInput(
        data=await file.read(),
        content_type=file.content_type or "",
        file_name=file.filename or "audio",
    )

    logger.info(
        "Received transcription request",
        extra={
            "file_name": audio.file_name,
            "content_type": audio.content_type,
            "size": len(audio.data),
        },
    )

    try:
        orchestrator.validate(audio)
    except InputValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)

    try:
        orchestrator.reserve()
    except JobInProgressError as e:
        raise HTTPException(status_code=409, detail=e.message)

    task = asyncio.create_task(_run_attempt(orchestrator, audio))
    _attempts.add(task)
    task.add_done_callback(_attempts.discard)

    return TranscriptionAcceptedResponse(
        message="Audio file accepted, transcription started",
        status=orchestrator.state.status,
    )


@router.get("/current", response_model=JobStateResponse)
def get_current_transcription(orchestrator: OrchestratorDep) -> JobStateResponse:
    """Returns the progress and result of the current attempt."""
    return JobStateResponse.from_state(orchestrator.state)


@router.get("/current/transcript", response_class=PlainTextResponse)
def download_transcript(orchestrator: OrchestratorDep) -> PlainTextResponse:
    """Downloads the speaker-labeled transcript as a text file."""
    transcript = orchestrator.state.transcript_text
    if not transcript:
        raise HTTPException(status_code=404, detail="No transcription available")
    return _text_download(transcript, TRANSCRIPT_FILE_NAME)


@router.get("/current/summary", response_class=PlainTextResponse)
def download_summary(orchestrator: OrchestratorDep) -> PlainTextResponse:
    """Downloads the summary as a text file."""
    summary = orchestrator.state.summary_text
    if not summary:
        raise HTTPException(status_code=404, detail="No summary available")
    return _text_download(summary, SUMMARY_FILE_NAME)


def _text_download(content: str, file_name: str) -> PlainTextResponse:
    return PlainTextResponse(
        content,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


async def cancel_attempts() -> None:
    """Cancels attempts still running, used on application shutdown."""
    for task in list(_attempts):
        task.cancel()
    await asyncio.gather(*_attempts, return_exceptions=True)
