from .store import CollectionPort, Document, InMemoryCollection
from .resources import OwnedResourceRepo

__all__ = [
    "CollectionPort",
    "Document",
    "InMemoryCollection",
    "OwnedResourceRepo",
]
