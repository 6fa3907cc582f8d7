from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database

from ..exceptions import (
    AuthorMismatchError,
    BookmarkNotFoundError,
    DuplicateBookmarkError,
    InvalidInputError,
    StopNotFoundError,
)
from ..models.bookmark import Bookmark, BookmarkedStop
from ..repositories.bookmark_repository import BookmarkRepository
from ..repositories.interfaces import (
    BookmarkRepositoryInterface,
    PostRepositoryInterface,
)
from .bookmark_resolver import BookmarkResolver
from .posts_service import get_post_repository

logger = logging.getLogger(__name__)


class BookmarksService:
    """유저 북마크(게시글 안의 장소) 관리 비즈니스 로직.

    - Repository 인터페이스에만 의존하고, Mongo 세부 구현은 알지 않는다.
    - 장소 존재 여부 확인과 북마크 조회 시 대조는 BookmarkResolver 에 맡긴다.
    """

    def __init__(
        self,
        repo: BookmarkRepositoryInterface,
        resolver: BookmarkResolver,
    ) -> None:
        self._repo = repo
        self._resolver = resolver

    def create_bookmark(self, user_id: str, stop_id: str, post_id: str) -> Bookmark:
        """게시글의 현재 일정에 있는 장소만 북마크할 수 있다.

        같은 (user_id, stop_id, post_id) 조합이 이미 있으면 DuplicateBookmarkError.
        """

        if self._resolver.confirm_stop_belongs_to_post(post_id, stop_id) is None:
            raise StopNotFoundError(details={"post_id": post_id, "stop_id": stop_id})

        if self._repo.find_one(user_id, post_id, stop_id) is not None:
            raise DuplicateBookmarkError(
                details={"post_id": post_id, "stop_id": stop_id}
            )

        bookmark = self._repo.insert(
            Bookmark(
                author_id=user_id,
                post_id=post_id,
                stop_id=stop_id,
                created_at=datetime.now(timezone.utc),
            )
        )
        logger.info(
            "bookmark created",
            extra={"user_id": user_id, "bookmark_id": bookmark.id, "post_id": post_id},
        )
        return bookmark

    def delete_bookmarks(self, user_id: str, bookmark_ids: Any) -> int:
        """여러 북마크를 한 번에 삭제하고 삭제된 개수를 반환한다.

        모든 대상의 소유권을 먼저 확인한 뒤 한 번의 쿼리로 지운다.
        남의 북마크가 하나라도 섞여 있으면 아무것도 지우지 않는다.
        """

        if not isinstance(bookmark_ids, Sequence) or isinstance(
            bookmark_ids, (str, bytes)
        ):
            raise InvalidInputError("bookmark_ids must be a list")
        if len(bookmark_ids) == 0:
            raise InvalidInputError("bookmark_ids must not be empty")
        if not all(isinstance(v, str) for v in bookmark_ids):
            raise InvalidInputError("bookmark_ids must contain only strings")

        requested = list(dict.fromkeys(bookmark_ids))
        bookmarks = self._repo.find_by_ids(requested)
        if len(bookmarks) != len(requested):
            found = {b.id for b in bookmarks}
            missing = [v for v in requested if v not in found]
            raise BookmarkNotFoundError(details={"missing_ids": missing})

        # 조회된 순서(_id 오름차순)대로 확인해서 첫 번째 위반을 보고한다.
        for bookmark in bookmarks:
            if bookmark.author_id != user_id:
                logger.warning(
                    "author mismatch on bookmark delete",
                    extra={"user_id": user_id, "bookmark_id": bookmark.id},
                )
                raise AuthorMismatchError(
                    details={"bookmark_id": bookmark.id, "deleted_count": 0}
                )

        deleted = self._repo.delete_owned(user_id, requested)
        logger.info(
            "bookmarks deleted (%d/%d)",
            deleted,
            len(requested),
            extra={"user_id": user_id},
        )
        return deleted

    def list_bookmarks(self, user_id: str) -> list[BookmarkedStop]:
        """유저의 북마크를 현재 게시글 일정에 대조해 살아 있는 장소만 반환한다."""

        return self._resolver.resolve_bookmarks_for_user(user_id)


def get_bookmark_repository(
    db: Database = Depends(get_database),
) -> BookmarkRepositoryInterface:
    """FastAPI DI용 BookmarkRepository 팩토리."""

    return BookmarkRepository(db)


def get_bookmark_resolver(
    post_repo: PostRepositoryInterface = Depends(get_post_repository),
    bookmark_repo: BookmarkRepositoryInterface = Depends(get_bookmark_repository),
) -> BookmarkResolver:
    """FastAPI DI용 BookmarkResolver 팩토리."""

    return BookmarkResolver(post_repo, bookmark_repo)


def get_bookmarks_service(
    repo: BookmarkRepositoryInterface = Depends(get_bookmark_repository),
    resolver: BookmarkResolver = Depends(get_bookmark_resolver),
) -> BookmarksService:
    """FastAPI DI용 BookmarksService 팩토리."""

    return BookmarksService(repo, resolver)
