"""Prompt templates for briefing generation."""

SUMMARY_PROMPT = """Research and provide a comprehensive summary about "{topic}". Include key recent developments, important facts, and current trends. Use a neutral, informative tone and cite your sources.

Format your response as HTML with proper structure:
- Use <h3> tags for section headings
- Use <p> tags for paragraphs
- Use <ul> and <li> for lists
- Use <strong> for emphasis
- Include source citations as <em> tags
- Keep the content well-structured and readable"""

TWEET_PROMPT = """Based on this summary about "{topic}":

{summary}

Generate exactly 3 witty, satirical tweets that capture the essence of this topic in an entertaining way. Each tweet should:
- Be under 280 characters
- Have a humorous, satirical tone (avoid sensitive topics)
- Include relevant hashtags
- Be shareable and engaging
- Reference specific elements from the summary when possible

Format your response as three separate tweets, each starting with "TWEET:" followed by the tweet content.

Example format:
TWEET: [first tweet here]
TWEET: [second tweet here]
TWEET: [third tweet here]"""

TWEET_MARKER = "TWEET:"

PADDING_TWEET = (
    "Just discovered something mind-bending about {topic}! "
    "The plot twists keep coming... 🧠✨ #{hashtag} #Innovation"
)

FALLBACK_TWEETS = [
    "The latest developments in {topic} are absolutely wild! "
    "Who knew reality could be this entertaining? 🤯 #{hashtag}",
    "Plot twist: {topic} just leveled up. The future is looking equal parts "
    "fascinating and slightly terrifying! 🚀 #Innovation #Tech",
    "Just when you think you've seen it all with {topic}, reality pulls a rabbit "
    "out of the hat. Mind = blown 🤯✨ #Future #Discovery",
]

TRENDING_TOPICS = [
    "Artificial Intelligence",
    "Climate Change",
    "Global Economy",
    "Space Exploration",
    "Renewable Energy",
    "Cybersecurity",
    "Healthcare Innovation",
    "Electric Vehicles",
]

SOURCES_BY_CATEGORY: dict[str, list[str]] = {
    "technology": [
        "MIT Technology Review", "Wired", "TechCrunch", "Ars Technica", "The Verge", "IEEE Spectrum",
    ],
    "science": ["Nature", "Science", "Scientific American", "New Scientist", "PNAS", "Cell"],
    "business": [
        "Bloomberg", "Financial Times", "Wall Street Journal", "Reuters", "CNBC", "Forbes",
    ],
    "politics": [
        "BBC News", "CNN", "The New York Times", "The Guardian", "Politico", "Associated Press",
    ],
    "health": [
        "WHO", "CDC", "The Lancet", "JAMA", "New England Journal of Medicine", "Health Affairs",
    ],
    "environment": [
        "IPCC", "UNEP", "National Geographic", "Environmental Science & Technology",
        "Climate Central",
    ],
    "default": [
        "BBC News", "Reuters", "Associated Press", "The New York Times", "The Guardian", "CNN",
    ],
}

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("technology", ("ai", "artificial intelligence", "machine learning", "technology")),
    ("environment", ("climate", "environment", "sustainability")),
    ("business", ("business", "economy", "market")),
    ("health", ("health", "medical", "disease")),
    ("science", ("research", "study", "scientific")),
    ("politics", ("policy", "government", "politics")),
]
