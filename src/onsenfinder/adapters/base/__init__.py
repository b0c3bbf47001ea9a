"""Base store interface — Abstract classes for search engine connectors."""

from onsenfinder.adapters.base.adapter import DocumentStore

__all__ = ["DocumentStore"]
