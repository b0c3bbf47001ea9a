"""Resource models exposed over the HTTP surface."""

from onsenfinder.models.onsen import DeletedOnsen, Onsen, OnsenList, OnsenPatch

__all__ = ["DeletedOnsen", "Onsen", "OnsenList", "OnsenPatch"]
