from __future__ import annotations
from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from .store import CollectionPort, InMemoryCollection, SortSpec

M = TypeVar("M", bound=BaseModel)


class OwnedResourceRepo(Generic[M]):
    """
    Repository for documents that carry an owning `user_id` and an
    `is_active` visibility flag. Subclasses pick the model, collection
    name and listing order.
    """
    model: ClassVar[Type[BaseModel]]
    collection_name: ClassVar[str]
    list_sort: ClassVar[SortSpec] = (("created_at", -1),)

    def __init__(self, collection: Optional[CollectionPort] = None):
        self._col = collection or InMemoryCollection(self.collection_name)

    def list_for_owner(self, user_id: str, *, active_only: bool = False) -> List[M]:
        filters: Dict[str, Any] = {"user_id": user_id}
        if active_only:
            filters["is_active"] = True
        return [self.model(**d) for d in self._col.find(filters, sort=self.list_sort)]

    def get(self, doc_id: str) -> Optional[M]:
        doc = self._col.get(doc_id)
        return self.model(**doc) if doc is not None else None

    def create(self, user_id: str, fields: Dict[str, Any]) -> M:
        return self.model(**self._col.insert({**fields, "user_id": user_id}))

    def update(self, doc_id: str, fields: Dict[str, Any]) -> Optional[M]:
        # ownership is never transferable through an update
        fields = {k: v for k, v in fields.items() if k not in ("id", "user_id")}
        doc = self._col.update(doc_id, fields)
        return self.model(**doc) if doc is not None else None

    def delete(self, doc_id: str) -> bool:
        return self._col.delete(doc_id)
