"""Markdown export for generated briefings."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Literal

from dailybrief.briefing.generator import BriefingResult, TrendingTopic

BriefingType = Literal["personal", "trending"]

_HASHTAG = re.compile(r"#\w+")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


@dataclass
class ExportableBriefing:
    """A briefing plus the metadata printed in exports."""

    title: str
    summary: str
    generated_at: str
    type: BriefingType = "personal"
    tweets: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def to_exportable(
    result: BriefingResult | TrendingTopic,
    type: BriefingType = "personal",
    generated_at: str | None = None,
) -> ExportableBriefing:
    return ExportableBriefing(
        title=result.title,
        summary=result.summary,
        tweets=list(result.tweets),
        sources=list(result.sources),
        generated_at=generated_at or _now_iso(),
        type=type,
    )


def format_tweet(tweet: str) -> str:
    """Quote a tweet with its hashtags stripped."""
    return f"> {_HASHTAG.sub('', tweet).strip()}"


def format_sources(sources: list[str]) -> str:
    return "\n".join(f"- {source}" for source in sources)


def format_metadata(briefing: ExportableBriefing) -> str:
    kind = "Personal Interest" if briefing.type == "personal" else "Trending Topic"
    return "\n".join([
        f"Generated: {briefing.generated_at}",
        f"Type: {kind}",
        f"Sources: {len(briefing.sources)}",
        "",
    ])


def _sections(briefing: ExportableBriefing, heading: str) -> list[str]:
    return [
        format_metadata(briefing),
        f"{heading} Summary",
        "",
        briefing.summary,
        "",
        f"{heading} Satirical Tweets",
        "",
        *(format_tweet(tweet) for tweet in briefing.tweets),
        "",
        f"{heading} Sources",
        "",
        format_sources(briefing.sources),
    ]


def export_single_briefing(briefing: ExportableBriefing) -> str:
    return "\n".join([f"# {briefing.title}", "", *_sections(briefing, "##")])


def export_multiple_briefings(
    briefings: list[ExportableBriefing], generated_at: str | None = None
) -> str:
    header = "\n".join([
        "# Daily Briefing AI Report",
        "",
        f"Generated: {generated_at or _now_iso()}",
        f"Total Briefings: {len(briefings)}",
        "",
    ])
    body = "\n".join(
        "\n".join([
            f"## {index}. {briefing.title}",
            "",
            *_sections(briefing, "###"),
            "",
            "---",
            "",
        ])
        for index, briefing in enumerate(briefings, 1)
    )
    return header + body


def briefing_filename(briefing: ExportableBriefing) -> str:
    """Slugged filename stem, e.g. ``briefing-artificial-intelligence``.

    ``write_markdown`` appends the date.
    """
    slug = _NON_SLUG.sub("-", briefing.title.lower()).strip("-")
    return f"briefing-{slug}"


def write_markdown(
    content: str, directory: Path, filename: str = "briefing", today: date | None = None
) -> Path:
    """Write ``content`` to ``<directory>/<filename>-<date>.md`` and return the path."""
    today = today or date.today()
    directory = Path(directory).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{filename}-{today.isoformat()}.md"
    path.write_text(content, encoding="utf-8")
    return path
