"""Briefing generation and export."""

from dailybrief.briefing.generator import BriefingGenerator, BriefingResult, TrendingTopic

__all__ = ["BriefingGenerator", "BriefingResult", "TrendingTopic"]
