from __future__ import annotations

from typing import Any

from google.api_core.exceptions import NotFound
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter

from .base import DocumentNotFoundError, DocumentStore, strip_id


class FirestoreStore(DocumentStore):
    """``DocumentStore`` backed by a Firestore client from firebase-admin."""

    def __init__(self, client: firestore.Client) -> None:
        self._client = client

    def _doc(self, collection: str, doc_id: str):
        return self._client.collection(collection).document(doc_id)

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        snapshot = self._doc(collection, doc_id).get()
        if not snapshot.exists:
            return None
        return {"id": snapshot.id, **(snapshot.to_dict() or {})}

    def add(self, collection: str, data: dict[str, Any]) -> str:
        _, ref = self._client.collection(collection).add(strip_id(data))
        return ref.id

    def set(
        self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = False,
    ) -> None:
        self._doc(collection, doc_id).set(strip_id(data), merge=merge)

    def update(self, collection: str, doc_id: str, updates: dict[str, Any]) -> None:
        try:
            self._doc(collection, doc_id).update(strip_id(updates))
        except NotFound as exc:
            raise DocumentNotFoundError(collection, doc_id) from exc

    def delete(self, collection: str, doc_id: str) -> None:
        self._doc(collection, doc_id).delete()

    def list(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        query = self._client.collection(collection)
        for field, value in (filters or {}).items():
            query = query.where(filter=FieldFilter(field, "==", value))
        if limit is not None:
            query = query.limit(limit)
        return [{"id": snap.id, **(snap.to_dict() or {})} for snap in query.stream()]

    def array_union(
        self, collection: str, doc_id: str, field: str, values: list[Any],
    ) -> None:
        self._doc(collection, doc_id).set(
            {field: firestore.ArrayUnion(values)}, merge=True,
        )

    def array_remove(
        self, collection: str, doc_id: str, field: str, values: list[Any],
    ) -> None:
        try:
            self._doc(collection, doc_id).update({field: firestore.ArrayRemove(values)})
        except NotFound as exc:
            raise DocumentNotFoundError(collection, doc_id) from exc

    def delete_map_key(self, collection: str, doc_id: str, field: str, key: str) -> None:
        path = self._client.field_path(field, key)
        try:
            self._doc(collection, doc_id).update({path: firestore.DELETE_FIELD})
        except NotFound as exc:
            raise DocumentNotFoundError(collection, doc_id) from exc
