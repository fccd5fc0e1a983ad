"""Mock transcript analysis adapter."""

from voicejournal.core.entries import Analysis, KeyMoments, mood_color


class MockAnalyzer:
    """
    Fixed-result analyzer.

    Implements Analyzer protocol. Returns the same analysis for every
    transcript until real sentiment inference is wired in.
    """

    def __init__(self, analysis: Analysis | None = None):
        self.analysis = analysis or Analysis(
            mood="Grateful",
            themes=["productivity", "gratitude", "family"],
            emoji="🙏",
            color=mood_color("grateful"),
            reflection="",
            key_moments=KeyMoments(
                wins=["Feeling productive", "Accomplishing goals"],
                worries=[],
                goals=["Looking forward to tomorrow"],
            ),
        )

    async def analyze(self, transcript: str) -> Analysis:
        """Analyze a transcript."""
        return self.analysis
