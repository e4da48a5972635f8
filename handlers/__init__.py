"""Handler layer exports."""

from .transcription_job_orchestrator import TranscriptionJobOrchestrator

__all__ = ["TranscriptionJobOrchestrator"]
