"""Briefing generation: summaries, satirical tweets and sources per topic."""

import logging
import random
import re
import uuid
from dataclasses import dataclass, field

from dailybrief.backends.base import LLMBackend
from dailybrief.briefing.prompts import (
    CATEGORY_KEYWORDS,
    FALLBACK_TWEETS,
    PADDING_TWEET,
    SOURCES_BY_CATEGORY,
    SUMMARY_PROMPT,
    TRENDING_TOPICS,
    TWEET_MARKER,
    TWEET_PROMPT,
)
from dailybrief.errors import BriefingError

logger = logging.getLogger(__name__)

MAX_TWEET_LENGTH = 280
TWEETS_PER_BRIEFING = 3


@dataclass
class BriefingResult:
    """A generated briefing for one topic."""

    title: str
    summary: str
    tweets: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)


@dataclass
class TrendingTopic:
    """A briefing generated for a trending topic."""

    id: str
    title: str
    summary: str
    tweets: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)


def _hashtag(topic: str) -> str:
    return re.sub(r"\s+", "", topic)


def parse_tweets(text: str, topic: str) -> list[str]:
    """Split a ``TWEET:``-formatted response into exactly three tweets.

    Entries that are empty or over the length limit are dropped; missing
    tweets are padded with a generic one.
    """
    tweets = [
        t.strip()
        for t in text.split(TWEET_MARKER)
        if t.strip() and len(t.strip()) <= MAX_TWEET_LENGTH
    ][:TWEETS_PER_BRIEFING]

    padding = PADDING_TWEET.format(topic=topic, hashtag=_hashtag(topic))
    while len(tweets) < TWEETS_PER_BRIEFING:
        tweets.append(padding)
    return tweets


def fallback_tweets(topic: str) -> list[str]:
    hashtag = _hashtag(topic)
    return [t.format(topic=topic, hashtag=hashtag) for t in FALLBACK_TWEETS]


def source_category(topic: str) -> str:
    topic_lower = topic.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in topic_lower for keyword in keywords):
            return category
    return "default"


class BriefingGenerator:
    """
    Produces briefings by prompting a generation backend.

    ``rng`` drives topic shuffling and source picking so tests can seed it.
    """

    def __init__(
        self,
        backend: LLMBackend,
        model: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        rng: random.Random | None = None,
    ):
        self.backend = backend
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.rng = rng or random.Random()

    async def _complete(self, prompt: str) -> str:
        response = await self.backend.generate(
            prompt,
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        if response.is_error:
            raise BriefingError(response.content or "Generation failed")
        if not response.content:
            raise BriefingError("Model returned an empty response")
        return response.content

    async def generate_briefing(self, interests: list[str]) -> list[BriefingResult]:
        """Generate one briefing per interest, in order."""
        if not interests:
            raise BriefingError("No interests provided")

        try:
            return [await self.generate_single_briefing(interest) for interest in interests]
        except BriefingError as e:
            logger.error("Error generating briefing: %s", e)
            raise BriefingError("Failed to generate briefing") from e

    async def generate_trending_briefing(self, count: int = 3) -> list[TrendingTopic]:
        """Generate briefings for a sample of trending topics."""
        try:
            results = []
            for topic in self.get_trending_topics(count):
                result = await self.generate_single_briefing(topic)
                results.append(TrendingTopic(
                    id=uuid.uuid4().hex[:12],
                    title=result.title,
                    summary=result.summary,
                    tweets=result.tweets,
                    sources=result.sources,
                ))
            return results
        except BriefingError as e:
            logger.error("Error generating trending briefing: %s", e)
            raise BriefingError("Failed to generate trending briefing") from e

    def get_trending_topics(self, count: int = 3) -> list[str]:
        """Pick ``count`` topics from the built-in pool."""
        # TODO: derive topics from live news trends instead of a fixed pool.
        return self.rng.sample(TRENDING_TOPICS, min(count, len(TRENDING_TOPICS)))

    async def generate_single_briefing(self, interest: str) -> BriefingResult:
        try:
            summary = await self._complete(SUMMARY_PROMPT.format(topic=interest))
        except BriefingError as e:
            logger.error("Error generating briefing for %s: %s", interest, e)
            raise BriefingError(f"Failed to generate briefing for {interest}") from e

        sources = self.extract_sources(interest)
        tweets = await self.generate_tweets(interest, summary)
        return BriefingResult(title=interest, summary=summary, tweets=tweets, sources=sources)

    async def generate_tweets(self, topic: str, summary: str) -> list[str]:
        """Generate three satirical tweets; falls back to canned ones on failure."""
        try:
            text = await self._complete(TWEET_PROMPT.format(topic=topic, summary=summary))
        except BriefingError as e:
            logger.warning("Error generating tweets for %s: %s", topic, e)
            return fallback_tweets(topic)
        return parse_tweets(text, topic)

    def extract_sources(self, topic: str) -> list[str]:
        """Pick two or three outlets matching the topic's category."""
        available = SOURCES_BY_CATEGORY[source_category(topic)]
        return self.rng.sample(available, self.rng.randint(2, 3))
