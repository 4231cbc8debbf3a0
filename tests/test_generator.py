"""Tests for briefing generation."""

import random

import pytest

from dailybrief.backends.base import LLMBackend, LLMResponse
from dailybrief.briefing.generator import (
    BriefingGenerator,
    BriefingResult,
    TrendingTopic,
    fallback_tweets,
    parse_tweets,
    source_category,
)
from dailybrief.briefing.prompts import SOURCES_BY_CATEGORY, TRENDING_TOPICS
from dailybrief.errors import BriefingError


class ScriptedBackend(LLMBackend):
    """Returns queued responses in order and records the prompts it saw."""

    def __init__(self, responses: list[LLMResponse]):
        super().__init__(api_key="test-key")
        self.responses = list(responses)
        self.calls: list[dict] = []

    async def generate(self, prompt, model=None, max_tokens=2048, temperature=0.7):
        self.calls.append({
            "prompt": prompt,
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.responses:
            return self.responses.pop(0)
        return LLMResponse(content="<p>default</p>")

    def get_default_model(self) -> str:
        return "scripted"


TWEETS = "TWEET: First joke #AI\nTWEET: Second joke\nTWEET: Third joke"


def _generator(responses: list[LLMResponse], **kwargs) -> BriefingGenerator:
    return BriefingGenerator(ScriptedBackend(responses), rng=random.Random(7), **kwargs)


class TestParseTweets:
    def test_three_tweets(self):
        assert parse_tweets(TWEETS, "AI") == ["First joke #AI", "Second joke", "Third joke"]

    def test_extra_tweets_truncated(self):
        text = TWEETS + "\nTWEET: Fourth"
        assert len(parse_tweets(text, "AI")) == 3

    def test_overlong_and_empty_dropped_then_padded(self):
        text = f"TWEET: {'x' * 281}\nTWEET:   \nTWEET: Short one"
        tweets = parse_tweets(text, "Space Exploration")

        assert tweets[0] == "Short one"
        assert len(tweets) == 3
        assert "#SpaceExploration" in tweets[1]
        assert tweets[1] == tweets[2]

    def test_preamble_before_marker_counts(self):
        tweets = parse_tweets("Here you go:\nTWEET: one", "AI")
        assert tweets[:2] == ["Here you go:", "one"]


class TestHelpers:
    def test_fallback_tweets(self):
        tweets = fallback_tweets("Climate Change")
        assert len(tweets) == 3
        assert "#ClimateChange" in tweets[0]
        assert all("Climate Change" in t for t in tweets)

    @pytest.mark.parametrize(
        ("topic", "category"),
        [
            ("Artificial Intelligence", "technology"),
            ("Machine Learning news", "technology"),
            ("Climate Change", "environment"),
            ("Global Economy", "business"),
            ("Public health", "health"),
            ("New scientific study", "science"),
            ("Tax policy", "politics"),
            ("Football", "default"),
        ],
    )
    def test_source_category(self, topic, category):
        assert source_category(topic) == category


class TestGenerateSingleBriefing:
    async def test_summary_tweets_and_sources(self):
        generator = _generator([
            LLMResponse(content="<p>Summary</p>"),
            LLMResponse(content=TWEETS),
        ], model="llama3", max_tokens=500, temperature=0.3)

        result = await generator.generate_single_briefing("Climate Change")

        assert isinstance(result, BriefingResult)
        assert result.title == "Climate Change"
        assert result.summary == "<p>Summary</p>"
        assert result.tweets == ["First joke #AI", "Second joke", "Third joke"]
        assert 2 <= len(result.sources) <= 3
        assert set(result.sources) <= set(SOURCES_BY_CATEGORY["environment"])

        calls = generator.backend.calls
        assert '"Climate Change"' in calls[0]["prompt"]
        assert "<p>Summary</p>" in calls[1]["prompt"]
        assert calls[0]["model"] == "llama3"
        assert calls[0]["max_tokens"] == 500
        assert calls[0]["temperature"] == 0.3

    async def test_summary_error_raises(self):
        generator = _generator([LLMResponse(content="API error (401): bad key", finish_reason="error")])

        with pytest.raises(BriefingError, match="Failed to generate briefing for AI"):
            await generator.generate_single_briefing("AI")

    async def test_empty_summary_raises(self):
        generator = _generator([LLMResponse(content="")])

        with pytest.raises(BriefingError):
            await generator.generate_single_briefing("AI")

    async def test_tweet_failure_uses_fallback(self):
        generator = _generator([
            LLMResponse(content="<p>Summary</p>"),
            LLMResponse(content="Request failed: timeout", finish_reason="error"),
        ])

        result = await generator.generate_single_briefing("AI")

        assert result.tweets == fallback_tweets("AI")


class TestGenerateBriefing:
    async def test_one_result_per_interest(self):
        generator = _generator([
            LLMResponse(content="<p>A</p>"), LLMResponse(content=TWEETS),
            LLMResponse(content="<p>B</p>"), LLMResponse(content=TWEETS),
        ])

        results = await generator.generate_briefing(["AI", "Economy"])

        assert [r.title for r in results] == ["AI", "Economy"]
        assert [r.summary for r in results] == ["<p>A</p>", "<p>B</p>"]

    async def test_no_interests(self):
        with pytest.raises(BriefingError, match="No interests provided"):
            await _generator([]).generate_briefing([])

    async def test_failure_wrapped(self):
        generator = _generator([LLMResponse(content="boom", finish_reason="error")])

        with pytest.raises(BriefingError, match="Failed to generate briefing"):
            await generator.generate_briefing(["AI"])


class TestTrending:
    def test_topics_come_from_pool(self):
        topics = _generator([]).get_trending_topics(3)

        assert len(topics) == 3
        assert len(set(topics)) == 3
        assert set(topics) <= set(TRENDING_TOPICS)

    def test_count_capped_at_pool_size(self):
        assert len(_generator([]).get_trending_topics(50)) == len(TRENDING_TOPICS)

    def test_seeded_rng_is_deterministic(self):
        first = BriefingGenerator(ScriptedBackend([]), rng=random.Random(1)).get_trending_topics(3)
        second = BriefingGenerator(ScriptedBackend([]), rng=random.Random(1)).get_trending_topics(3)
        assert first == second

    async def test_generate_trending_briefing(self):
        generator = _generator([])

        results = await generator.generate_trending_briefing(2)

        assert len(results) == 2
        assert all(isinstance(r, TrendingTopic) for r in results)
        assert len({r.id for r in results}) == 2
        assert all(r.title in TRENDING_TOPICS for r in results)

    async def test_trending_failure_wrapped(self):
        generator = _generator([LLMResponse(content="boom", finish_reason="error")])

        with pytest.raises(BriefingError, match="Failed to generate trending briefing"):
            await generator.generate_trending_briefing(1)
