"""Static ranking tables: keyword categories and source quality lists."""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeywordCategory:
    """Keywords sharing one weight; at most one hit per category counts."""

    keywords: tuple[str, ...]
    weight: float


# Scanned in insertion order.
KEYWORD_CATEGORIES: dict[str, KeywordCategory] = {
    "tools": KeywordCategory(
        keywords=(
            "claude-code", "claude code", "vscode", "vs code", "visual studio code",
            "github", "aws", "cloudflare", "cursor", "ruby on rails", "rails",
            "copilot", "typescript", "react", "node.js", "nodejs",
        ),
        weight=50,
    ),
    "ai_techniques": KeywordCategory(
        keywords=(
            "ai development", "prompt engineering", "llm", "agent", "agents",
            "langchain", "openai", "anthropic", "claude", "gpt",
            "embeddings", "rag", "fine-tuning", "ai coding", "code generation",
            "mcp", "model context protocol",
        ),
        weight=30,
    ),
    "security_techniques": KeywordCategory(
        keywords=(
            "app security", "application security", "appsec", "vulnerability",
            "pentest", "penetration testing", "exploit", "security testing",
            "owasp", "xss", "sql injection", "csrf", "authentication",
            "authorization", "secure coding", "security audit",
        ),
        weight=30,
    ),
    "practical_content": KeywordCategory(
        keywords=(
            "how to", "tutorial", "guide", "technique", "best practices",
            "deep dive", "case study", "implementation", "walkthrough",
            "explained", "introducing", "new feature", "update",
        ),
        weight=20,
    ),
    "funding": KeywordCategory(
        keywords=(
            "raises", "funding", "series a", "series b", "series c",
            "valuation", "ipo", "acquisition", "acquires", "invested",
            "investment", "venture capital", "vc", "seed round",
        ),
        weight=-40,
    ),
    "corporate_announcements": KeywordCategory(
        keywords=(
            "announces partnership", "strategic partnership", "collaboration",
            "expands into", "appoints", "names", "ceo", "rebrands",
        ),
        weight=-20,
    ),
}

PREMIUM_SOURCES: tuple[str, ...] = (
    "hackernews",
    "rss:awsblog",
    "rss:cloudflare",
    "rss:github",
    "rss:tldr-ai",
    "rss:tldr-infosec",
    "rss:krebs",
)

GENERAL_SOURCES: tuple[str, ...] = (
    "rss:techcrunch",
    "rss:verge",
)

PREMIUM_SOURCE_SCORE = 20.0
GENERAL_SOURCE_SCORE = -10.0

POINTS_WEIGHT = 0.1
COMMENTS_WEIGHT = 0.05

RECENCY_CEILING_HOURS = 100.0
