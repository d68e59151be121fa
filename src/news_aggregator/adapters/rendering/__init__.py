"""Presentation helpers."""

from news_aggregator.adapters.rendering.markdown_renderer import MarkdownFeedRenderer

__all__ = ["MarkdownFeedRenderer"]
