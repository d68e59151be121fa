"""Feed registration adapters."""

from news_aggregator.adapters.registry.yaml_registry import YamlFeedRegistry

__all__ = ["YamlFeedRegistry"]
