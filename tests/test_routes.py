import time

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from conftest import COMPLETED_PAYLOAD, FakeTranscriptionService
from dependencies import get_orchestrator
from routes import transcriptions_router

MP3_FILE = ("meeting.mp3", b"ID3fake-mp3-bytes", "audio/mpeg")
TERMINAL = {"completed", "failed"}


def _wait_for_terminal(client: TestClient, timeout: float = 5.0) -> dict:
    """Polls the state endpoint until the running attempt settles."""
    deadline = time.monotonic() + timeout
    while True:
        state = client.get("/transcriptions/current").json()
        if state["status"] in TERMINAL or time.monotonic() > deadline:
            return state
        time.sleep(0.01)


@pytest.fixture
def service() -> FakeTranscriptionService:
    return FakeTranscriptionService(statuses=[{"status": "processing"}, COMPLETED_PAYLOAD])


@pytest.fixture
def orchestrator(make_orchestrator, service):
    return make_orchestrator(service)


@pytest.fixture
def client(orchestrator):
    app = FastAPI()
    app.include_router(transcriptions_router)
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    with TestClient(app) as test_client:
        yield test_client


def test_initial_state_is_idle(client):
    resp = client.get("/transcriptions/current")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "idle"
    assert data["progress_percent"] == 0
    assert data["transcript_text"] is None
    assert data["raw_text"] is None


def test_unsupported_format_is_rejected(client, service):
    resp = client.post(
        "/transcriptions", files={"file": ("notes.txt", b"hello", "text/plain")}
    )

    assert resp.status_code == 422
    assert resp.json()["detail"].startswith("Unsupported file format.")
    assert service.calls == []


def test_empty_file_is_rejected(client, service):
    resp = client.post("/transcriptions", files={"file": ("empty.wav", b"", "audio/wav")})

    assert resp.status_code == 422
    assert resp.json()["detail"] == "Please select an audio file."
    assert service.calls == []


def test_upload_runs_attempt_to_completion(client):
    resp = client.post("/transcriptions", files={"file": MP3_FILE})

    assert resp.status_code == 202
    assert resp.json() == {
        "message": "Audio file accepted, transcription started",
        "status": "idle",
    }

    state = _wait_for_terminal(client)
    assert state["status"] == "completed"
    assert state["progress_percent"] == 100
    assert state["progress_message"] == "Transcription completed!"
    assert state["job_id"] == "job-123"
    assert state["transcript_text"] == "Speaker A: Hi\nSpeaker B: Hello"
    assert state["raw_text"] == "Hi Hello"
    assert state["summary_text"] == "Two people greet each other."


def test_second_upload_discards_previous_result(client, orchestrator, service):
    client.post("/transcriptions", files={"file": MP3_FILE})
    assert _wait_for_terminal(client)["status"] == "completed"

    service.fail_upload = True
    resp = client.post("/transcriptions", files={"file": MP3_FILE})

    assert resp.status_code == 202
    assert resp.json()["status"] == "idle"
    state = _wait_for_terminal(client)
    assert state["status"] == "failed"
    assert state["transcript_text"] is None
    assert state["summary_text"] is None
    assert client.get("/transcriptions/current/transcript").status_code == 404
    assert not orchestrator.is_busy


def test_busy_orchestrator_rejects_new_attempt(client, orchestrator, service):
    orchestrator.reserve()

    resp = client.post("/transcriptions", files={"file": MP3_FILE})

    assert resp.status_code == 409
    assert resp.json()["detail"] == "A transcription is already in progress."
    assert service.calls == []


def test_failed_attempt_is_reported_in_state(client, service):
    service.fail_upload = True

    resp = client.post("/transcriptions", files={"file": MP3_FILE})

    assert resp.status_code == 202
    state = _wait_for_terminal(client)
    assert state["status"] == "failed"
    assert state["progress_percent"] == 0
    assert state["error_kind"] == "upload"
    assert state["error_message"] == "Failed to upload the audio file."


def test_downloads_unavailable_before_completion(client):
    assert client.get("/transcriptions/current/transcript").status_code == 404
    assert client.get("/transcriptions/current/summary").status_code == 404


def test_download_transcript_as_text_file(client):
    client.post("/transcriptions", files={"file": MP3_FILE})
    _wait_for_terminal(client)

    resp = client.get("/transcriptions/current/transcript")

    assert resp.status_code == 200
    assert resp.text == "Speaker A: Hi\nSpeaker B: Hello"
    assert resp.headers["content-type"].startswith("text/plain")
    assert 'filename="transcription.txt"' in resp.headers["content-disposition"]


def test_download_summary_as_text_file(client):
    client.post("/transcriptions", files={"file": MP3_FILE})
    _wait_for_terminal(client)

    resp = client.get("/transcriptions/current/summary")

    assert resp.status_code == 200
    assert resp.text == "Two people greet each other."
    assert 'filename="summary.txt"' in resp.headers["content-disposition"]
