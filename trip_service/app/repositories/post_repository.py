from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from common.mongo.types import date_to_datetime, from_object_id, parse_object_id

from .documents.post_document import PostDocument, ScheduleStopDocument
from .errors import translate_mongo_errors
from .interfaces import PostRepositoryInterface
from ..models.post import (
    ListPostsFilter,
    Post,
    PostFields,
    PostSortOrder,
    ScheduleStop,
)


_SORTS: dict[PostSortOrder | None, list[tuple[str, int]]] = {
    PostSortOrder.LATEST: [("updated_at", DESCENDING), ("_id", DESCENDING)],
    PostSortOrder.OLDEST: [("updated_at", ASCENDING), ("_id", ASCENDING)],
    PostSortOrder.MOST_LIKED: [("like_count", DESCENDING), ("_id", DESCENDING)],
    None: [("created_at", DESCENDING), ("_id", DESCENDING)],
}


class PostRepository(PostRepositoryInterface):
    """posts 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["posts"]

    # --- commands ----------------------------------------------------------------
    @translate_mongo_errors
    def insert(self, post: Post) -> str:
        """새 게시글을 삽입하고 생성된 ID 를 반환한다."""

        doc = PostDocument.from_domain(post)
        result = self._col.insert_one(doc.to_mongo_record())
        return str(result.inserted_id)

    @translate_mongo_errors
    def replace_fields(self, post_id: str, author_id: str, fields: PostFields) -> int:
        oid = parse_object_id(post_id)
        if oid is None:
            return 0

        set_doc: dict[str, Any] = fields.model_dump(
            exclude={"schedules", "start_date", "end_date"}
        )
        set_doc["start_date"] = date_to_datetime(fields.start_date)
        set_doc["end_date"] = date_to_datetime(fields.end_date)
        set_doc["schedules"] = [
            [
                ScheduleStopDocument.from_domain(stop).model_dump(by_alias=True)
                for stop in day
            ]
            for day in fields.schedules
        ]
        set_doc["updated_at"] = datetime.now(timezone.utc)

        # 작성자 조건까지 걸어서, 조회 이후 소유권이 바뀐 경우에도 덮어쓰지 않는다.
        result = self._col.update_one(
            {"_id": oid, "author_id": author_id},
            {"$set": set_doc},
        )
        return result.modified_count

    @translate_mongo_errors
    def delete_by_id(self, post_id: str, author_id: str) -> bool:
        oid = parse_object_id(post_id)
        if oid is None:
            return False
        result = self._col.delete_one({"_id": oid, "author_id": author_id})
        return result.deleted_count > 0

    # --- queries -----------------------------------------------------------------
    @translate_mongo_errors
    def find_by_id(self, post_id: str) -> Post | None:
        oid = parse_object_id(post_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return PostDocument.model_validate(doc).to_domain()

    @translate_mongo_errors
    def list(self, flt: ListPostsFilter) -> tuple[list[Post], int]:
        """필터/정렬/페이지네이션 기준으로 게시글 목록과 총 개수를 반환한다."""

        filter_doc: dict[str, Any] = {}
        if flt.author_id:
            filter_doc["author_id"] = flt.author_id
        if flt.tags:
            filter_doc["tags"] = {"$in": list(flt.tags)}
        if flt.destination:
            filter_doc["destination"] = flt.destination

        page = flt.page if flt.page > 0 else 1
        page_size = flt.page_size
        if page_size <= 0 or page_size > 100:
            page_size = 20

        total = self._col.count_documents(filter_doc)
        cursor = self._col.find(
            filter_doc,
            sort=_SORTS[flt.sort],
            skip=(page - 1) * page_size,
            limit=page_size,
        )

        items = [PostDocument.model_validate(doc).to_domain() for doc in cursor]
        return items, total

    @translate_mongo_errors
    def find_schedules_by_ids(
        self, post_ids: list[str]
    ) -> dict[str, list[list[ScheduleStop]]]:
        oids = [oid for oid in (parse_object_id(v) for v in post_ids) if oid is not None]
        if not oids:
            return {}

        cursor = self._col.find({"_id": {"$in": oids}}, {"schedules": 1})

        result: dict[str, list[list[ScheduleStop]]] = {}
        for raw in cursor:
            post_id = from_object_id(raw["_id"])
            assert post_id is not None
            result[post_id] = [
                [ScheduleStopDocument.model_validate(stop).to_domain() for stop in day]
                for day in raw.get("schedules") or []
            ]
        return result
