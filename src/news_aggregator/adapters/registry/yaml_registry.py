"""RSS feed registrations persisted as a YAML file."""

import logging
import os
import tempfile
from pathlib import Path

import yaml

from news_aggregator.core.entities import FeedRegistration
from news_aggregator.core.errors import DuplicateFeedError, RegistryError
from news_aggregator.core.interfaces import FeedRegistry

logger = logging.getLogger(__name__)


class YamlFeedRegistry(FeedRegistry):
    """Keep feed registrations in a YAML document.

    The file looks like::

        rss_feeds:
          - name: techcrunch
            url: https://techcrunch.com/feed/
            refresh_interval_minutes: 60

    A missing file means no feeds are registered. Every change is written
    back before the method returns.
    """

    def __init__(self, path: Path = Path("config/feeds.yaml")) -> None:
        self.path = Path(path)
        self._feeds = self._load()

    def _load(self) -> list[FeedRegistration]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise RegistryError(f"Could not read feed config {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise RegistryError(f"Feed config {self.path} must be a mapping")

        entries = data.get("rss_feeds") or []
        if not isinstance(entries, list):
            raise RegistryError(f"'rss_feeds' in {self.path} must be a list")

        feeds = []
        for entry in entries:
            try:
                feeds.append(
                    FeedRegistration(
                        name=str(entry["name"]),
                        url=str(entry["url"]),
                        refresh_interval_minutes=entry.get("refresh_interval_minutes"),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise RegistryError(f"Invalid feed entry {entry!r} in {self.path}: {e}") from e

        return feeds

    def _save(self, feeds: list[FeedRegistration]) -> None:
        """Write atomically so a crash never leaves a truncated file."""
        entries = []
        for feed in feeds:
            entry = {"name": feed.name, "url": feed.url}
            if feed.refresh_interval_minutes is not None:
                entry["refresh_interval_minutes"] = feed.refresh_interval_minutes
            entries.append(entry)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    yaml.safe_dump(
                        {"rss_feeds": entries},
                        f,
                        allow_unicode=True,
                        default_flow_style=False,
                        sort_keys=False,
                    )
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            raise RegistryError(f"Could not write feed config {self.path}: {e}") from e

    def list_feeds(self) -> list[FeedRegistration]:
        return list(self._feeds)

    def add_feed(self, registration: FeedRegistration) -> None:
        for feed in self._feeds:
            if feed.url == registration.url:
                raise DuplicateFeedError(f"RSS feed with URL {registration.url} already exists")
            if feed.name == registration.name:
                raise DuplicateFeedError(f"RSS feed named {registration.name!r} already exists")

        feeds = self._feeds + [registration]
        self._save(feeds)
        self._feeds = feeds
        logger.info("Registered RSS feed %s (%s)", registration.name, registration.url)

    def remove_feed(self, name: str) -> bool:
        feeds = [feed for feed in self._feeds if feed.name != name]
        if len(feeds) == len(self._feeds):
            return False

        self._save(feeds)
        self._feeds = feeds
        logger.info("Removed RSS feed %s", name)
        return True
