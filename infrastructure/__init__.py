"""Infrastructure layer exports."""

from .assemblyai_client import AssemblyAIClient, create_http_client
from .logging_observer import LoggingJobObserver

__all__ = ["AssemblyAIClient", "LoggingJobObserver", "create_http_client"]
