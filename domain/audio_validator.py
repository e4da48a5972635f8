"""Input checks performed before any network call."""

from exceptions import MissingAudioError, UnsupportedFormatError

from .models import SUPPORTED_AUDIO_TYPES, AudioInput


class AudioValidator:
    """Rejects audio inputs the transcription service cannot accept."""

    def __init__(self, supported_types: frozenset[str] = SUPPORTED_AUDIO_TYPES):
        self._supported_types = supported_types

    def validate(self, audio: AudioInput) -> None:
        """
        Validates an audio input.

        Raises:
            MissingAudioError: If the payload is empty.
            UnsupportedFormatError: If the MIME type is not allowed.
        """
        if not audio.data:
            raise MissingAudioError()
        if not self.is_supported(audio.content_type):
            raise UnsupportedFormatError(audio.content_type)

    def is_supported(self, content_type: str | None) -> bool:
        return content_type in self._supported_types
