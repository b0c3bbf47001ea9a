"""Onsen Finder Python SDK — Client library for the onsen REST API.

Quick start::

    from onsenfinder.client import OnsenClient

    client = OnsenClient("http://localhost:8080")
    onsen = client.create({"area": "東鳴子温泉", "name": "初音旅館", "address": "宮城県仙台市"})
    client.search("初音")
    client.delete(onsen["id"])
"""

from onsenfinder.client.client import AsyncOnsenClient, OnsenClient

__all__ = ["AsyncOnsenClient", "OnsenClient"]
