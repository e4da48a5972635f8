"""Core business logic for transcript building."""

from .models import Utterance

NO_SUMMARY_PLACEHOLDER = "No summary available."


class TranscriptBuilder:
    """Builds formatted transcripts and summaries from service results."""

    def build(self, utterances: list[Utterance], raw_text: str | None = None) -> str:
        """
        Builds the speaker-labeled transcript shown to the user.

        Args:
            utterances: Speaker-labeled utterances from transcription.
            raw_text: Continuous transcript, used when no utterances came back.

        Returns:
            One ``Speaker {label}: {text}`` line per utterance, in order.
        """
        if not utterances:
            return raw_text or ""
        return self._format(utterances)

    def summarize(self, summary: str | None, summarization: bool) -> str | None:
        """Returns the summary to display, or None when summaries were not requested."""
        if not summarization:
            return None
        return summary or NO_SUMMARY_PLACEHOLDER

    def _format(self, utterances: list[Utterance]) -> str:
        """Formats utterances into a readable transcript."""
        return "\n".join(f"Speaker {u.speaker}: {u.text}" for u in utterances)
