from __future__ import annotations

import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from ..errors import DuplicateKeyError

Document = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]  # (field, 1 | -1)
NowFn = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CollectionPort(Protocol):
    """Contract for a document collection with per-document atomic writes."""
    name: str

    def insert(self, doc: Document) -> Document: ...
    def get(self, doc_id: str) -> Optional[Document]: ...
    def find_one(self, **filters: Any) -> Optional[Document]: ...
    def find(self, filters: Optional[Dict[str, Any]] = None, *, sort: Optional[SortSpec] = None) -> List[Document]: ...
    def update(self, doc_id: str, changes: Dict[str, Any]) -> Optional[Document]: ...
    def delete(self, doc_id: str) -> bool: ...


class InMemoryCollection(CollectionPort):
    """Thread-safe in-memory collection with unique indexes and timestamps.

    Every write holds one coarse lock, so the unique-index check and the write
    happen as a single step. Documents are deep-copied in and out; callers
    never share state with the store.
    """

    def __init__(
        self,
        name: str,
        *,
        unique: Iterable[str] = (),
        timestamps: bool = True,
        now: Optional[NowFn] = None,
    ):
        self.name = name
        self._unique = tuple(unique)
        self._timestamps = timestamps
        self._now = now or _utcnow
        self._docs: Dict[str, Document] = {}
        self._seq: Dict[str, int] = {}
        self._counter = 0
        self._lock = threading.RLock()

    # ---------- Reads ----------
    def get(self, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self._docs.get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def find_one(self, **filters: Any) -> Optional[Document]:
        with self._lock:
            for doc_id in self._ordered_ids():
                doc = self._docs[doc_id]
                if _matches(doc, filters):
                    return copy.deepcopy(doc)
        return None

    def find(self, filters: Optional[Dict[str, Any]] = None, *, sort: Optional[SortSpec] = None) -> List[Document]:
        with self._lock:
            hits = [
                (self._seq[doc_id], self._docs[doc_id])
                for doc_id in self._ordered_ids()
                if _matches(self._docs[doc_id], filters or {})
            ]
            keys = list(sort or [])
            if keys and keys[0][1] < 0:
                # ties on a descending primary key come out newest-inserted first
                hits.reverse()
            # stable sorts applied right-to-left so the first key wins
            for field, direction in reversed(keys):
                hits.sort(key=lambda h, f=field: h[1].get(f), reverse=direction < 0)
            return [copy.deepcopy(doc) for _, doc in hits]

    # ---------- Writes ----------
    def insert(self, doc: Document) -> Document:
        with self._lock:
            new_doc = copy.deepcopy(doc)
            new_doc.setdefault("id", uuid.uuid4().hex)
            if new_doc["id"] in self._docs:
                raise DuplicateKeyError(self.name, "id")
            self._check_unique(new_doc, exclude_id=None)
            if self._timestamps:
                now = self._now()
                new_doc.setdefault("created_at", now)
                new_doc["updated_at"] = now
            self._docs[new_doc["id"]] = new_doc
            self._counter += 1
            self._seq[new_doc["id"]] = self._counter
            return copy.deepcopy(new_doc)

    def update(self, doc_id: str, changes: Dict[str, Any]) -> Optional[Document]:
        with self._lock:
            current = self._docs.get(doc_id)
            if current is None:
                return None
            candidate = {**current, **copy.deepcopy(changes), "id": doc_id}
            self._check_unique(candidate, exclude_id=doc_id)
            if self._timestamps:
                candidate["updated_at"] = self._now()
            self._docs[doc_id] = candidate
            return copy.deepcopy(candidate)

    def delete(self, doc_id: str) -> bool:
        with self._lock:
            if self._docs.pop(doc_id, None) is None:
                return False
            self._seq.pop(doc_id, None)
            return True

    # ---------- Internals ----------
    def _ordered_ids(self) -> List[str]:
        return sorted(self._docs, key=self._seq.__getitem__)

    def _check_unique(self, doc: Document, *, exclude_id: Optional[str]) -> None:
        for field in self._unique:
            value = doc.get(field)
            if value is None:
                continue
            for other_id, other in self._docs.items():
                if other_id != exclude_id and other.get(field) == value:
                    raise DuplicateKeyError(self.name, field)


def _matches(doc: Document, filters: Dict[str, Any]) -> bool:
    return all(doc.get(k) == v for k, v in filters.items())
