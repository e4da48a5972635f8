"""AssemblyAI implementation of the TranscriptionService interface."""

import httpx
from meetscript_common.logging import setup_logging
from pydantic import ValidationError

from domain.models import AudioInput, TranscriptResponse
from exceptions import PollError, SubmissionError, UploadError

from .interfaces import TranscriptionService

logger = setup_logging()


class AssemblyAIClient(TranscriptionService):
    """Talks to the AssemblyAI REST API over a shared async HTTP client."""

    def __init__(self, client: httpx.AsyncClient, speaker_labels: bool = True):
        self._client = client
        self._speaker_labels = speaker_labels

    async def upload(self, audio: AudioInput) -> str:
        try:
            response = await self._client.post(
                "/upload",
                files={"audio": (audio.file_name, audio.data, audio.content_type)},
            )
            response.raise_for_status()
            upload_url = _required_string(response.json(), "upload_url")
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.exception(
                "AssemblyAI upload failed",
                extra={"file_name": audio.file_name, "size": len(audio.data)},
            )
            raise UploadError(audio.file_name, e) from e

        logger.info(
            "Audio uploaded to AssemblyAI",
            extra={"file_name": audio.file_name, "size": len(audio.data)},
        )
        return upload_url

    async def create_transcript(self, audio_url: str, *, summarization: bool) -> str:
        payload: dict[str, object] = {
            "audio_url": audio_url,
            "speaker_labels": self._speaker_labels,
        }
        if summarization:
            payload.update(
                summarization=True,
                summary_model="informative",
                summary_type="paragraph",
            )

        try:
            response = await self._client.post("/transcript", json=payload)
            response.raise_for_status()
            job_id = _required_string(response.json(), "id")
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.exception("AssemblyAI transcript request failed")
            raise SubmissionError(audio_url, e) from e

        logger.info(
            "Transcription job submitted",
            extra={"job_id": job_id, "summarization": summarization},
        )
        return job_id

    async def get_transcript(self, job_id: str) -> TranscriptResponse:
        try:
            response = await self._client.get(f"/transcript/{job_id}")
            response.raise_for_status()
            return TranscriptResponse.model_validate_json(response.content)
        except (httpx.HTTPError, ValidationError) as e:
            logger.exception("AssemblyAI status check failed", extra={"job_id": job_id})
            raise PollError(job_id, e) from e


def _required_string(body: dict, key: str) -> str:
    """Reads a mandatory non-empty string field from a JSON response body."""
    value = body[key]
    if not isinstance(value, str) or not value:
        raise ValueError(f"Response field '{key}' must be a non-empty string")
    return value


def create_http_client(
    api_key: str, base_url: str, timeout_seconds: float
) -> httpx.AsyncClient:
    """Builds the HTTP client that carries the AssemblyAI credential."""
    return httpx.AsyncClient(
        base_url=base_url,
        headers={"authorization": api_key},
        timeout=httpx.Timeout(timeout_seconds),
    )
