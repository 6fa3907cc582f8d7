from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable

import pytest
from bson import ObjectId

from trip_service.app.config import ReferenceData
from trip_service.app.exceptions import DuplicateBookmarkError
from trip_service.app.models.bookmark import Bookmark
from trip_service.app.models.post import (
    ListPostsFilter,
    Post,
    PostFields,
    PostSortOrder,
    ScheduleStop,
)
from trip_service.app.services.bookmark_resolver import BookmarkResolver
from trip_service.app.services.bookmarks_service import BookmarksService
from trip_service.app.services.posts_service import PostsService


class FakePostRepository:
    """PostRepositoryInterface 의 메모리 구현. 호출 기록을 남긴다."""

    def __init__(self) -> None:
        self.posts: dict[str, Post] = {}
        self.calls: list[str] = []
        self.force_zero_modified = False

    def insert(self, post: Post) -> str:
        self.calls.append("insert")
        post_id = str(ObjectId())
        self.posts[post_id] = post.model_copy(update={"id": post_id}, deep=True)
        return post_id

    def find_by_id(self, post_id: str) -> Post | None:
        self.calls.append("find_by_id")
        post = self.posts.get(post_id)
        return post.model_copy(deep=True) if post else None

    def list(self, flt: ListPostsFilter) -> tuple[list[Post], int]:
        self.calls.append("list")
        items = list(self.posts.values())
        if flt.author_id:
            items = [p for p in items if p.author_id == flt.author_id]
        if flt.tags:
            items = [p for p in items if set(p.tags) & set(flt.tags)]
        if flt.destination:
            items = [p for p in items if p.destination == flt.destination]

        if flt.sort == PostSortOrder.LATEST:
            items.sort(key=lambda p: p.updated_at, reverse=True)
        elif flt.sort == PostSortOrder.OLDEST:
            items.sort(key=lambda p: p.updated_at)
        elif flt.sort == PostSortOrder.MOST_LIKED:
            items.sort(key=lambda p: p.like_count, reverse=True)

        start = (flt.page - 1) * flt.page_size
        return items[start : start + flt.page_size], len(items)

    def find_schedules_by_ids(
        self, post_ids: list[str]
    ) -> dict[str, list[list[ScheduleStop]]]:
        self.calls.append("find_schedules_by_ids")
        return {
            post_id: [list(day) for day in self.posts[post_id].schedules]
            for post_id in post_ids
            if post_id in self.posts
        }

    def replace_fields(self, post_id: str, author_id: str, fields: PostFields) -> int:
        self.calls.append("replace_fields")
        post = self.posts.get(post_id)
        if post is None or post.author_id != author_id or self.force_zero_modified:
            return 0
        self.posts[post_id] = post.model_copy(
            update={
                **dict(fields),
                "updated_at": datetime.now(timezone.utc),
            },
            deep=True,
        )
        return 1

    def delete_by_id(self, post_id: str, author_id: str) -> bool:
        self.calls.append("delete_by_id")
        post = self.posts.get(post_id)
        if post is None or post.author_id != author_id:
            return False
        del self.posts[post_id]
        return True


class FakeBookmarkRepository:
    """BookmarkRepositoryInterface 의 메모리 구현."""

    def __init__(self) -> None:
        self.bookmarks: dict[str, Bookmark] = {}
        self.calls: list[str] = []

    def find_one(self, author_id: str, post_id: str, stop_id: str) -> Bookmark | None:
        self.calls.append("find_one")
        for bookmark in self.bookmarks.values():
            if (bookmark.author_id, bookmark.post_id, bookmark.stop_id) == (
                author_id,
                post_id,
                stop_id,
            ):
                return bookmark
        return None

    def insert(self, bookmark: Bookmark) -> Bookmark:
        self.calls.append("insert")
        for existing in self.bookmarks.values():
            if (existing.author_id, existing.post_id, existing.stop_id) == (
                bookmark.author_id,
                bookmark.post_id,
                bookmark.stop_id,
            ):
                raise DuplicateBookmarkError()
        bookmark_id = str(ObjectId())
        stored = bookmark.model_copy(update={"id": bookmark_id})
        self.bookmarks[bookmark_id] = stored
        return stored

    def list_by_author(self, author_id: str) -> list[Bookmark]:
        self.calls.append("list_by_author")
        items = [b for b in self.bookmarks.values() if b.author_id == author_id]
        return sorted(items, key=lambda b: b.created_at, reverse=True)

    def find_by_ids(self, bookmark_ids: list[str]) -> list[Bookmark]:
        self.calls.append("find_by_ids")
        found = [self.bookmarks[v] for v in bookmark_ids if v in self.bookmarks]
        return sorted(found, key=lambda b: b.id or "")

    def delete_owned(self, author_id: str, bookmark_ids: list[str]) -> int:
        self.calls.append("delete_owned")
        deleted = 0
        for bookmark_id in bookmark_ids:
            bookmark = self.bookmarks.get(bookmark_id)
            if bookmark is not None and bookmark.author_id == author_id:
                del self.bookmarks[bookmark_id]
                deleted += 1
        return deleted

    def add(self, author_id: str, post_id: str, stop_id: str, minutes_ago: int = 0) -> Bookmark:
        """테스트 데이터 준비용: 검증 없이 바로 저장한다."""

        bookmark_id = str(ObjectId())
        bookmark = Bookmark(
            id=bookmark_id,
            author_id=author_id,
            post_id=post_id,
            stop_id=stop_id,
            created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        )
        self.bookmarks[bookmark_id] = bookmark
        return bookmark


def build_stop(name: str, stop_id: str | None = None) -> ScheduleStop:
    return ScheduleStop(
        id=stop_id,
        place_name=name,
        place_image_src=f"https://img.example.com/{name}.jpg",
        star=4.5,
        category="sightseeing",
    )


def build_fields(**overrides: Any) -> PostFields:
    """2024-01-01 ~ 2024-01-03 (3일) 기본 일정."""

    data: dict[str, Any] = {
        "title": "부산 2박 3일",
        "destination": "Busan",
        "start_date": date(2024, 1, 1),
        "end_date": date(2024, 1, 3),
        "tags": ["beach", "food"],
        "schedules": [
            [build_stop("haeundae"), build_stop("gwangalli")],
            [build_stop("gamcheon")],
            [build_stop("jagalchi"), build_stop("nampo"), build_stop("bupyeong")],
        ],
        "distances": [[0.0, 5.2], [0.0], [0.0, 0.8, 1.1]],
        "cost": 450000,
        "people_count": 2,
        "is_public": True,
        "review_text": None,
    }
    data.update(overrides)
    return PostFields(**data)


@pytest.fixture
def reference_data() -> ReferenceData:
    return ReferenceData(
        tags=frozenset(
            {"mountain", "beach", "city", "food", "night", "museum", "nature"}
        ),
        cities=frozenset({"Seoul", "Busan", "Jeju"}),
    )


@pytest.fixture
def post_repo() -> FakePostRepository:
    return FakePostRepository()


@pytest.fixture
def bookmark_repo() -> FakeBookmarkRepository:
    return FakeBookmarkRepository()


@pytest.fixture
def posts_service(
    post_repo: FakePostRepository, reference_data: ReferenceData
) -> PostsService:
    return PostsService(post_repo, reference_data)


@pytest.fixture
def resolver(
    post_repo: FakePostRepository, bookmark_repo: FakeBookmarkRepository
) -> BookmarkResolver:
    return BookmarkResolver(post_repo, bookmark_repo)


@pytest.fixture
def bookmarks_service(
    bookmark_repo: FakeBookmarkRepository, resolver: BookmarkResolver
) -> BookmarksService:
    return BookmarksService(bookmark_repo, resolver)


@pytest.fixture
def make_fields() -> Callable[..., PostFields]:
    return build_fields


@pytest.fixture
def make_stop() -> Callable[..., ScheduleStop]:
    return build_stop
