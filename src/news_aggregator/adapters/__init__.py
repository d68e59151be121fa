"""Adapters around the core: sources, storage, registry, rendering."""
