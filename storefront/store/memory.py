from __future__ import annotations

import copy
import threading
import uuid
from typing import Any

from .base import DocumentNotFoundError, DocumentStore, strip_id


def _deep_merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)


class MemoryStore(DocumentStore):
    """Process-local store used when Firestore is not configured."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.RLock()

    def _docs(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        with self._lock:
            doc = self._docs(collection).get(doc_id)
            if doc is None:
                return None
            return {"id": doc_id, **copy.deepcopy(doc)}

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        with self._lock:
            self._docs(collection)[doc_id] = copy.deepcopy(strip_id(data))
        return doc_id

    def set(
        self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = False,
    ) -> None:
        with self._lock:
            docs = self._docs(collection)
            if merge and doc_id in docs:
                _deep_merge(docs[doc_id], strip_id(data))
            else:
                docs[doc_id] = copy.deepcopy(strip_id(data))

    def update(self, collection: str, doc_id: str, updates: dict[str, Any]) -> None:
        with self._lock:
            docs = self._docs(collection)
            if doc_id not in docs:
                raise DocumentNotFoundError(collection, doc_id)
            docs[doc_id].update(copy.deepcopy(strip_id(updates)))

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            self._docs(collection).pop(doc_id, None)

    def list(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        results: list[dict[str, Any]] = []
        with self._lock:
            for doc_id, doc in self._docs(collection).items():
                if filters and any(doc.get(k) != v for k, v in filters.items()):
                    continue
                results.append({"id": doc_id, **copy.deepcopy(doc)})
                if limit is not None and len(results) >= limit:
                    break
        return results

    def array_union(
        self, collection: str, doc_id: str, field: str, values: list[Any],
    ) -> None:
        with self._lock:
            doc = self._docs(collection).setdefault(doc_id, {})
            current = list(doc.get(field) or [])
            for value in values:
                if value not in current:
                    current.append(value)
            doc[field] = current

    def array_remove(
        self, collection: str, doc_id: str, field: str, values: list[Any],
    ) -> None:
        with self._lock:
            doc = self._docs(collection).get(doc_id)
            if doc is None:
                raise DocumentNotFoundError(collection, doc_id)
            doc[field] = [v for v in doc.get(field) or [] if v not in values]

    def delete_map_key(self, collection: str, doc_id: str, field: str, key: str) -> None:
        with self._lock:
            doc = self._docs(collection).get(doc_id)
            if doc is None:
                raise DocumentNotFoundError(collection, doc_id)
            mapping = doc.get(field)
            if isinstance(mapping, dict):
                mapping.pop(key, None)
