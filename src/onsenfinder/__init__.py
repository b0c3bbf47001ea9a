"""Onsen Finder — REST resource service for onsen facilities backed by Elasticsearch."""

__version__ = "0.1.0"
