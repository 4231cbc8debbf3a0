"""dailybrief - AI-generated daily news briefings across multiple LLM providers."""

__version__ = "0.1.0"
