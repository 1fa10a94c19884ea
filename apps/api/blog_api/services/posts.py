"""Blog post service layer."""

from __future__ import annotations

import logging
from typing import Any

from blog_api.core.log_utils import safe_log_identifier
from blog_api.errors import ApiError, not_found
from blog_api.repositories.mongo import AuthorRecord, MongoPostStore, PostRecord
from blog_api.schemas.post import Author, BlogPost, CreatePostRequest, UpdatePostRequest

logger = logging.getLogger(__name__)


def _to_author_record(author: Author) -> AuthorRecord:
    return AuthorRecord(first_name=author.first_name, last_name=author.last_name)


class PostService:
    def __init__(self, store: MongoPostStore) -> None:
        self._store = store

    @staticmethod
    def _to_post(record: PostRecord) -> BlogPost:
        return BlogPost(
            id=record.id,
            author=Author(first_name=record.author.first_name, last_name=record.author.last_name),
            title=record.title,
            content=record.content,
            created=record.created,
        )

    def list_posts(self) -> list[BlogPost]:
        return [self._to_post(record) for record in self._store.list_posts()]

    def get_post(self, *, post_id: str) -> BlogPost:
        record = self._store.get_post(post_id)
        if record is None:
            raise not_found()
        return self._to_post(record)

    def create_post(self, *, payload: CreatePostRequest, correlation_id: str) -> BlogPost:
        record = self._store.create_post(
            author=_to_author_record(payload.author),
            title=payload.title,
            content=payload.content,
            created=payload.created,
        )
        logger.info(
            "posts.created post_id=%s correlation_id=%s",
            record.id,
            safe_log_identifier(correlation_id, prefix="cid"),
        )
        return self._to_post(record)

    def update_post(self, *, post_id: str, payload: UpdatePostRequest, correlation_id: str) -> None:
        safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")
        if payload.id is not None and payload.id != post_id:
            logger.warning(
                "posts.update_rejected post_id=%s correlation_id=%s reason=id_mismatch",
                post_id,
                safe_correlation_id,
            )
            raise ApiError(
                status_code=400,
                code="ID_MISMATCH",
                message="Request path id and request body id values must match",
            )

        changes: dict[str, Any] = {}
        if payload.author is not None:
            changes["author"] = _to_author_record(payload.author)
        if payload.title is not None:
            changes["title"] = payload.title
        if payload.content is not None:
            changes["content"] = payload.content
        if not changes:
            raise ApiError(
                status_code=400,
                code="VALIDATION_ERROR",
                message="No updatable fields supplied",
                details={"fields": ["author", "title", "content"]},
            )

        record = self._store.update_post(post_id, changes)
        if record is None:
            raise not_found()
        logger.info(
            "posts.updated post_id=%s fields=%s correlation_id=%s",
            record.id,
            ",".join(sorted(changes)),
            safe_correlation_id,
        )

    def delete_post(self, *, post_id: str, correlation_id: str) -> None:
        # Deleting an absent post still succeeds.
        deleted = self._store.delete_post(post_id)
        logger.info(
            "posts.deleted post_id=%s existed=%s correlation_id=%s",
            post_id,
            deleted,
            safe_log_identifier(correlation_id, prefix="cid"),
        )
