"""MongoDB-backed persistence for blog posts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

POSTS_COLLECTION = "posts"

_UPDATABLE_FIELDS = frozenset({"author", "title", "content"})


@dataclass(slots=True)
class AuthorRecord:
    first_name: str
    last_name: str


@dataclass(slots=True)
class PostRecord:
    id: str
    author: AuthorRecord
    title: str
    content: str
    created: datetime


def _parse_object_id(post_id: str) -> ObjectId | None:
    if not ObjectId.is_valid(post_id):
        return None
    return ObjectId(post_id)


def _to_storage_datetime(value: datetime) -> datetime:
    """BSON dates are naive UTC with millisecond precision."""
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def _to_record(document: dict[str, Any]) -> PostRecord:
    author = document.get("author") or {}
    created = document["created"]
    if created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    return PostRecord(
        id=str(document["_id"]),
        author=AuthorRecord(
            first_name=author.get("firstName", ""),
            last_name=author.get("lastName", ""),
        ),
        title=document["title"],
        content=document["content"],
        created=created,
    )


def _author_document(author: AuthorRecord) -> dict[str, str]:
    return {"firstName": author.first_name, "lastName": author.last_name}


class MongoPostStore:
    """Thin mapping between ``PostRecord`` objects and documents in the posts collection."""

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def list_posts(self) -> list[PostRecord]:
        return [_to_record(document) for document in self._collection.find().sort("created", DESCENDING)]

    def count_posts(self) -> int:
        return self._collection.count_documents({})

    def get_post(self, post_id: str) -> PostRecord | None:
        object_id = _parse_object_id(post_id)
        if object_id is None:
            return None
        document = self._collection.find_one({"_id": object_id})
        return _to_record(document) if document is not None else None

    def create_post(
        self,
        *,
        author: AuthorRecord,
        title: str,
        content: str,
        created: datetime | None = None,
    ) -> PostRecord:
        document = {
            "author": _author_document(author),
            "title": title,
            "content": content,
            "created": _to_storage_datetime(created or datetime.now(UTC)),
        }
        result = self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return _to_record(document)

    def update_post(self, post_id: str, changes: dict[str, Any]) -> PostRecord | None:
        """Set the given fields on one post; returns ``None`` when the post does not exist."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields are not updatable: {sorted(unknown)}")

        object_id = _parse_object_id(post_id)
        if object_id is None:
            return None

        update = {
            key: _author_document(value) if isinstance(value, AuthorRecord) else value
            for key, value in changes.items()
        }
        document = self._collection.find_one_and_update(
            {"_id": object_id},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
        return _to_record(document) if document is not None else None

    def delete_post(self, post_id: str) -> bool:
        object_id = _parse_object_id(post_id)
        if object_id is None:
            return False
        return self._collection.delete_one({"_id": object_id}).deleted_count == 1
