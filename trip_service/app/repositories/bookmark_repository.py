from __future__ import annotations

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from common.mongo.types import parse_object_id

from .documents.bookmark_document import BookmarkDocument
from .errors import translate_mongo_errors
from .interfaces import BookmarkRepositoryInterface
from ..exceptions import DuplicateBookmarkError
from ..models.bookmark import Bookmark


class BookmarkRepository(BookmarkRepositoryInterface):
    """bookmarks 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["bookmarks"]

    @translate_mongo_errors
    def find_one(self, author_id: str, post_id: str, stop_id: str) -> Bookmark | None:
        raw = self._col.find_one(
            {"author_id": author_id, "post_id": post_id, "stop_id": stop_id}
        )
        if raw is None:
            return None
        return BookmarkDocument.model_validate(raw).to_domain()

    @translate_mongo_errors
    def insert(self, bookmark: Bookmark) -> Bookmark:
        doc = BookmarkDocument.from_domain(bookmark)
        try:
            result = self._col.insert_one(doc.to_mongo_record())
        except DuplicateKeyError as exc:
            # 중복 검사와 삽입 사이에 같은 북마크가 먼저 들어온 경우
            raise DuplicateBookmarkError() from exc

        return bookmark.model_copy(update={"id": str(result.inserted_id)})

    @translate_mongo_errors
    def list_by_author(self, author_id: str) -> list[Bookmark]:
        cursor = self._col.find(
            {"author_id": author_id},
            sort=[("created_at", DESCENDING), ("_id", DESCENDING)],
        )
        return [BookmarkDocument.model_validate(raw).to_domain() for raw in cursor]

    @translate_mongo_errors
    def find_by_ids(self, bookmark_ids: list[str]) -> list[Bookmark]:
        oids = [
            oid for oid in (parse_object_id(v) for v in bookmark_ids) if oid is not None
        ]
        if not oids:
            return []

        cursor = self._col.find({"_id": {"$in": oids}}, sort=[("_id", ASCENDING)])
        return [BookmarkDocument.model_validate(raw).to_domain() for raw in cursor]

    @translate_mongo_errors
    def delete_owned(self, author_id: str, bookmark_ids: list[str]) -> int:
        oids = [
            oid for oid in (parse_object_id(v) for v in bookmark_ids) if oid is not None
        ]
        if not oids:
            return 0

        result = self._col.delete_many({"_id": {"$in": oids}, "author_id": author_id})
        return result.deleted_count
