"""Document store layer — connectors for the search engine used as system of record.

Built-in stores:
  - elasticsearch: Elasticsearch v8+ (kuromoji-analyzed full-text search)

Implement ``DocumentStore`` to back the service with another engine.
"""
