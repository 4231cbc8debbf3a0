"""Tests for Markdown export."""

from datetime import date

from dailybrief.briefing.generator import BriefingResult, TrendingTopic
from dailybrief.briefing.markdown import (
    ExportableBriefing,
    briefing_filename,
    export_multiple_briefings,
    export_single_briefing,
    format_metadata,
    format_sources,
    format_tweet,
    to_exportable,
    write_markdown,
)

GENERATED = "2025-01-31T12:00:00+00:00"


def _briefing(title: str = "Artificial Intelligence", type: str = "personal") -> ExportableBriefing:
    return ExportableBriefing(
        title=title,
        summary="<p>Big week for models.</p>",
        generated_at=GENERATED,
        type=type,
        tweets=["AI wrote this tweet #AI #Future", "Robots unionize"],
        sources=["Wired", "Nature"],
    )


class TestFormatting:
    def test_tweet_hashtags_stripped(self):
        assert format_tweet("AI wrote this tweet #AI #Future") == "> AI wrote this tweet"

    def test_sources_bullets(self):
        assert format_sources(["Wired", "Nature"]) == "- Wired\n- Nature"

    def test_metadata_personal(self):
        text = format_metadata(_briefing())
        assert f"Generated: {GENERATED}" in text
        assert "Type: Personal Interest" in text
        assert "Sources: 2" in text

    def test_metadata_trending(self):
        assert "Type: Trending Topic" in format_metadata(_briefing(type="trending"))


class TestExportSingle:
    def test_layout(self):
        text = export_single_briefing(_briefing())

        assert text.startswith("# Artificial Intelligence\n")
        assert "## Summary\n\n<p>Big week for models.</p>" in text
        assert "## Satirical Tweets\n\n> AI wrote this tweet\n> Robots unionize" in text
        assert text.endswith("## Sources\n\n- Wired\n- Nature")


class TestExportMultiple:
    def test_header_and_numbering(self):
        text = export_multiple_briefings(
            [_briefing("AI"), _briefing("Space", type="trending")], generated_at=GENERATED
        )

        assert text.startswith("# Daily Briefing AI Report\n")
        assert f"Generated: {GENERATED}" in text
        assert "Total Briefings: 2" in text
        assert "## 1. AI" in text
        assert "## 2. Space" in text
        assert text.index("## 1. AI") < text.index("## 2. Space")
        assert "### Summary" in text
        assert text.count("---") == 2

    def test_empty(self):
        text = export_multiple_briefings([], generated_at=GENERATED)
        assert "Total Briefings: 0" in text
        assert "---" not in text


class TestConversion:
    def test_from_briefing_result(self):
        result = BriefingResult(title="AI", summary="s", tweets=["t"], sources=["Wired"])
        exportable = to_exportable(result, generated_at=GENERATED)

        assert exportable.type == "personal"
        assert exportable.generated_at == GENERATED
        assert exportable.tweets == ["t"]
        exportable.tweets.append("x")
        assert result.tweets == ["t"]

    def test_from_trending_topic(self):
        topic = TrendingTopic(id="abc", title="Space", summary="s")
        exportable = to_exportable(topic, "trending")

        assert exportable.type == "trending"
        assert exportable.generated_at


class TestFiles:
    def test_filename_slug(self):
        assert briefing_filename(_briefing("AI & Climate: 2025!")) == "briefing-ai-climate-2025"

    def test_filename_gets_one_date(self, temp_dir):
        stem = briefing_filename(_briefing("Space"))
        path = write_markdown("# Space", temp_dir, stem, today=date(2025, 1, 31))

        assert path.name == "briefing-space-2025-01-31.md"

    def test_write_markdown(self, temp_dir):
        path = write_markdown("# Hi", temp_dir / "out", "daily-briefings", today=date(2025, 1, 31))

        assert path == temp_dir / "out" / "daily-briefings-2025-01-31.md"
        assert path.read_text(encoding="utf-8") == "# Hi"
