"""Aggregate news from Hacker News and RSS feeds into a ranked local cache."""

__version__ = "1.0.0"
