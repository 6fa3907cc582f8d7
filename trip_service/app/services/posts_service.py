from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database
from common.mongo.types import new_object_id

from ..config import ReferenceData, get_reference_data
from ..exceptions import (
    AuthorMismatchError,
    PostNotFoundError,
    PostUpdateFailedError,
)
from ..models.post import (
    ListPostsFilter,
    Post,
    PostFields,
    PostSortOrder,
    ScheduleStop,
)
from ..repositories.interfaces import PostRepositoryInterface
from ..repositories.post_repository import PostRepository
from ..validator import validate_filter_tags, validate_post_fields

logger = logging.getLogger(__name__)


def _with_stop_ids(fields: PostFields) -> PostFields:
    """id 가 없는 장소에 새 ObjectId 를 부여한다. 이미 있는 id 는 그대로 둔다."""

    schedules: list[list[ScheduleStop]] = [
        [
            stop if stop.id else stop.model_copy(update={"id": new_object_id()})
            for stop in day
        ]
        for day in fields.schedules
    ]
    return fields.model_copy(update={"schedules": schedules})


class PostsService:
    """여행 일정 게시글 생성/수정/삭제 및 조회 비즈니스 로직.

    - 생성/수정은 항상 같은 검증 파이프라인(태그 -> 여행지 -> 일정 형태)을 거친다.
    - 수정/삭제는 게시글 작성자 본인만 가능하다.
    """

    def __init__(
        self,
        post_repo: PostRepositoryInterface,
        reference_data: ReferenceData,
    ) -> None:
        self._post_repo = post_repo
        self._reference = reference_data

    # --- commands ----------------------------------------------------------------
    def create_post(self, user_id: str, fields: PostFields) -> Post:
        validate_post_fields(fields, self._reference)

        now = datetime.now(timezone.utc)
        post = Post(
            **_with_stop_ids(fields).model_dump(),
            author_id=user_id,
            like_count=0,
            created_at=now,
            updated_at=now,
        )
        post.id = self._post_repo.insert(post)

        logger.info(
            "post created",
            extra={"user_id": user_id, "post_id": post.id},
        )
        return post

    def update_post(self, user_id: str, post_id: str, fields: PostFields) -> Post:
        """기존 게시글을 제출된 값으로 통째로 교체한다. (부분 수정 없음)"""

        self._get_owned_post(user_id, post_id)
        validate_post_fields(fields, self._reference)

        modified = self._post_repo.replace_fields(
            post_id, user_id, _with_stop_ids(fields)
        )
        if modified == 0:
            # 조회 이후 게시글이 사라졌거나 잘못된 post_id 일 가능성이 높다.
            raise PostUpdateFailedError(details={"post_id": post_id})

        updated = self._post_repo.find_by_id(post_id)
        if updated is None:
            raise PostNotFoundError(details={"post_id": post_id})

        logger.info("post updated", extra={"user_id": user_id, "post_id": post_id})
        return updated

    def delete_post(self, user_id: str, post_id: str) -> None:
        """게시글을 삭제한다. 이 게시글을 가리키는 북마크는 남겨 둔다."""

        self._get_owned_post(user_id, post_id)

        if not self._post_repo.delete_by_id(post_id, user_id):
            raise PostNotFoundError(details={"post_id": post_id})

        logger.info("post deleted", extra={"user_id": user_id, "post_id": post_id})

    # --- queries -----------------------------------------------------------------
    def get_post(self, post_id: str) -> Post:
        post = self._post_repo.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(details={"post_id": post_id})
        return post

    def get_all_posts(self, page: int = 1, page_size: int = 20) -> tuple[list[Post], int]:
        return self._post_repo.list(ListPostsFilter(page=page, page_size=page_size))

    def get_posts_by_user(
        self, user_id: str, page: int = 1, page_size: int = 20
    ) -> tuple[list[Post], int]:
        return self._post_repo.list(
            ListPostsFilter(page=page, page_size=page_size, author_id=user_id)
        )

    def get_posts_by_tags(
        self, tags: Any, page: int = 1, page_size: int = 20
    ) -> tuple[list[Post], int]:
        """선택한 태그 중 하나라도 가진 게시글 목록 (최대 5개 태그)."""

        validate_filter_tags(tags, self._reference)
        if not tags:
            return [], 0

        return self._post_repo.list(
            ListPostsFilter(page=page, page_size=page_size, tags=list(tags))
        )

    def get_posts_by_destination(
        self, destination: str, page: int = 1, page_size: int = 20
    ) -> tuple[list[Post], int]:
        return self._post_repo.list(
            ListPostsFilter(page=page, page_size=page_size, destination=destination)
        )

    def get_posts_sorted(
        self, order: PostSortOrder, page: int = 1, page_size: int = 20
    ) -> tuple[list[Post], int]:
        """최신순 / 오래된순 / 찜 많은 순 목록."""

        return self._post_repo.list(
            ListPostsFilter(page=page, page_size=page_size, sort=order)
        )

    # --- helpers -----------------------------------------------------------------
    def _get_owned_post(self, user_id: str, post_id: str) -> Post:
        post = self._post_repo.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(details={"post_id": post_id})

        # 호출자 ID 가 아니라 저장된 게시글의 작성자와 비교해야 한다.
        if post.author_id != user_id:
            logger.warning(
                "author mismatch on post mutation",
                extra={"user_id": user_id, "post_id": post_id},
            )
            raise AuthorMismatchError(details={"post_id": post_id})
        return post


def get_post_repository(
    db: Database = Depends(get_database),
) -> PostRepositoryInterface:
    """FastAPI DI용 PostRepository 팩토리."""

    return PostRepository(db)


def get_posts_service(
    repo: PostRepositoryInterface = Depends(get_post_repository),
    reference_data: ReferenceData = Depends(get_reference_data),
) -> PostsService:
    """FastAPI DI용 PostsService 팩토리."""

    return PostsService(repo, reference_data)
