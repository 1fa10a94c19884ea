"""Repository and service tests for blog posts."""

from __future__ import annotations

from datetime import UTC, datetime
import unittest

import mongomock

from blog_api.errors import ApiError
from blog_api.repositories.mongo import POSTS_COLLECTION, AuthorRecord, MongoPostStore
from blog_api.schemas.post import Author, CreatePostRequest, UpdatePostRequest
from blog_api.services.posts import PostService


def _new_store() -> MongoPostStore:
    return MongoPostStore(mongomock.MongoClient()["unit-tests"][POSTS_COLLECTION])


class MongoPostStoreTests(unittest.TestCase):
    def test_created_is_stored_as_utc_with_millisecond_precision(self) -> None:
        store = _new_store()
        created = datetime(2024, 5, 17, 9, 30, 15, 123456, tzinfo=UTC)

        record = store.create_post(
            author=AuthorRecord(first_name="Grace", last_name="Hopper"),
            title="Compilers",
            content="On the first compiler.",
            created=created,
        )

        stored = store.get_post(record.id)
        assert stored is not None
        self.assertEqual(stored.created, datetime(2024, 5, 17, 9, 30, 15, 123000, tzinfo=UTC))
        self.assertEqual(stored.created.tzinfo, UTC)
        self.assertEqual(stored, record)

    def test_update_sets_only_given_fields(self) -> None:
        store = _new_store()
        record = store.create_post(
            author=AuthorRecord(first_name="Grace", last_name="Hopper"),
            title="Compilers",
            content="On the first compiler.",
        )

        updated = store.update_post(record.id, {"title": "COBOL"})

        assert updated is not None
        self.assertEqual(updated.title, "COBOL")
        self.assertEqual(updated.content, record.content)
        self.assertEqual(updated.author, record.author)
        self.assertEqual(updated.created, record.created)

    def test_update_rejects_fields_that_are_not_updatable(self) -> None:
        store = _new_store()
        record = store.create_post(
            author=AuthorRecord(first_name="Grace", last_name="Hopper"),
            title="Compilers",
            content="On the first compiler.",
        )

        with self.assertRaises(ValueError):
            store.update_post(record.id, {"created": datetime.now(UTC)})

    def test_malformed_ids_behave_as_absent(self) -> None:
        store = _new_store()

        self.assertIsNone(store.get_post("xyz"))
        self.assertIsNone(store.update_post("xyz", {"title": "t"}))
        self.assertFalse(store.delete_post("xyz"))

    def test_delete_reports_whether_a_post_was_removed(self) -> None:
        store = _new_store()
        record = store.create_post(
            author=AuthorRecord(first_name="Grace", last_name="Hopper"),
            title="Compilers",
            content="On the first compiler.",
        )

        self.assertTrue(store.delete_post(record.id))
        self.assertFalse(store.delete_post(record.id))
        self.assertEqual(store.count_posts(), 0)


class PostServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = _new_store()
        self.service = PostService(self.store)
        self.post = self.service.create_post(
            payload=CreatePostRequest(
                author=Author(first_name="Alan", last_name="Turing"),
                title="Computable numbers",
                content="On computable numbers.",
            ),
            correlation_id="req-1",
        )

    def test_list_and_get_return_api_models(self) -> None:
        self.assertEqual(self.service.list_posts(), [self.post])
        self.assertEqual(self.service.get_post(post_id=self.post.id), self.post)
        self.assertEqual(
            self.post.model_dump(by_alias=True)["author"],
            {"firstName": "Alan", "lastName": "Turing"},
        )

    def test_get_missing_post_raises_not_found(self) -> None:
        with self.assertRaises(ApiError) as ctx:
            self.service.get_post(post_id="000000000000000000000000")

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.payload.code, "RESOURCE_NOT_FOUND")

    def test_update_with_mismatched_id_is_rejected_before_write(self) -> None:
        with self.assertRaises(ApiError) as ctx:
            self.service.update_post(
                post_id=self.post.id,
                payload=UpdatePostRequest(id="000000000000000000000000", title="Changed"),
                correlation_id="req-2",
            )

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.payload.code, "ID_MISMATCH")
        self.assertEqual(self.service.get_post(post_id=self.post.id).title, "Computable numbers")

    def test_update_and_delete(self) -> None:
        self.service.update_post(
            post_id=self.post.id,
            payload=UpdatePostRequest(content="Revised."),
            correlation_id="req-3",
        )
        self.assertEqual(self.service.get_post(post_id=self.post.id).content, "Revised.")

        self.service.delete_post(post_id=self.post.id, correlation_id="req-4")
        self.assertEqual(self.service.list_posts(), [])


if __name__ == "__main__":
    unittest.main()
