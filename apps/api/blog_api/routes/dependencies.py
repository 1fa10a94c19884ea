"""Dependency wiring for routes."""

from __future__ import annotations

from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request
from pymongo.database import Database

from blog_api.repositories.mongo import POSTS_COLLECTION, MongoPostStore
from blog_api.services.posts import PostService


def get_request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id") or f"req-{uuid4()}"
    request.state.correlation_id = correlation_id
    return correlation_id


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_store(database: Annotated[Database, Depends(get_database)]) -> MongoPostStore:
    return MongoPostStore(database[POSTS_COLLECTION])


def get_post_service(store: Annotated[MongoPostStore, Depends(get_store)]) -> PostService:
    return PostService(store)
