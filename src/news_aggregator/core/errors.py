"""Exception hierarchy."""


class NewsAggregatorError(Exception):
    """Base class for all aggregator errors."""


class SourceFetchError(NewsAggregatorError):
    """A source could not be fetched or parsed."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class StoreError(NewsAggregatorError):
    """The cache store failed to read or write."""


class RegistryError(NewsAggregatorError):
    """The feed registration file could not be read or written."""


class DuplicateFeedError(NewsAggregatorError):
    """A feed with the same URL or name is already registered."""


class InvalidQueryError(NewsAggregatorError, ValueError):
    """Arguments to a query or refresh were rejected."""
