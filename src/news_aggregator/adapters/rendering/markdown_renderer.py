"""Markdown rendering of feed items and operation results."""

from news_aggregator.core import NewsItem, RefreshReport, SourceListing

PREVIEW_LENGTH = 200
EMPTY_FEED_HINT = "No items found. Try refreshing the cache with the `refresh` command."


class MarkdownFeedRenderer:
    """Render items, source listings and refresh reports as Markdown."""

    def __init__(self, preview_length: int = PREVIEW_LENGTH) -> None:
        self.preview_length = preview_length

    def render_items(self, items: list[NewsItem]) -> str:
        if not items:
            return EMPTY_FEED_HINT

        return "\n".join("\n".join(self._format_item(item)) for item in items)

    def render_sources(self, listing: SourceListing) -> str:
        lines = ["Configured sources:"]
        lines.extend(f"- {source}" for source in listing.configured)
        lines.extend(["", "Sources with cached data:"])
        if listing.cached:
            lines.extend(f"- {source}" for source in listing.cached)
        else:
            lines.append("- (none)")
        return "\n".join(lines)

    def render_report(self, report: RefreshReport) -> str:
        lines = []
        for outcome in report.outcomes:
            if outcome.ok:
                lines.append(f"Refreshed {outcome.source}: {outcome.item_count} items")
            else:
                lines.append(f"Failed to refresh {outcome.source}: {outcome.error}")
        lines.append("")
        lines.append(
            f"Total: {report.total_items} items from {len(report.succeeded)} source(s), "
            f"{len(report.failures)} failure(s)"
        )
        return "\n".join(lines)

    def _format_item(self, item: NewsItem) -> list[str]:
        """Format single feed item."""
        lines = [
            f"## {item.title}",
            f"**Source:** {item.source}",
            f"**URL:** {item.url}",
            f"**Rank Score:** {item.rank_score:.1f}",
        ]

        if item.author:
            lines.append(f"**Author:** {item.author}")

        if item.engagement:
            lines.append(f"**Points:** {item.engagement.points}")
            lines.append(f"**Comments:** {item.engagement.comments}")

        lines.append(f"**Published:** {item.published_at.strftime('%Y-%m-%d %H:%M UTC')}")

        if item.content:
            preview = item.content[:self.preview_length]
            ellipsis = "..." if len(item.content) > self.preview_length else ""
            lines.append(f"\n{preview}{ellipsis}")

        lines.append("---\n")
        return lines
