"""Transcript analysis interface."""

from typing import Protocol

from voicejournal.core.entries import Analysis


class Analyzer(Protocol):
    """Interface for turning a transcript into a structured analysis."""

    async def analyze(self, transcript: str) -> Analysis:
        """Analyze a transcript."""
        ...
