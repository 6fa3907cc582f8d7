from __future__ import annotations

import logging
from collections.abc import Iterable

from ..exceptions import PostNotFoundError
from ..models.bookmark import BookmarkedStop
from ..models.post import ScheduleStop
from ..repositories.interfaces import (
    BookmarkRepositoryInterface,
    PostRepositoryInterface,
)

logger = logging.getLogger(__name__)


def _flatten(schedules: Iterable[Iterable[ScheduleStop]]) -> list[ScheduleStop]:
    return [stop for day in schedules for stop in day]


def _find_stop(stops: Iterable[ScheduleStop], stop_id: str) -> ScheduleStop | None:
    for stop in stops:
        if stop.id == stop_id:
            return stop
    return None


class BookmarkResolver:
    """북마크가 가리키는 (post_id, stop_id) 를 게시글의 현재 일정에 대조한다.

    - 생성 시: 엄격하게 확인한다. 현재 일정에 없는 장소는 북마크할 수 없다.
    - 조회 시: 관대하게 읽는다. 게시글이 수정/삭제되어 못 찾는 북마크는 결과에서 뺀다.
    """

    def __init__(
        self,
        post_repo: PostRepositoryInterface,
        bookmark_repo: BookmarkRepositoryInterface,
    ) -> None:
        self._post_repo = post_repo
        self._bookmark_repo = bookmark_repo

    def confirm_stop_belongs_to_post(self, post_id: str, stop_id: str) -> str | None:
        """stop_id 가 게시글의 현재 schedules 안에 있으면 그 ID 를, 없으면 None.

        게시글 자체가 없으면 PostNotFoundError.
        """

        post = self._post_repo.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(details={"post_id": post_id})

        stop = _find_stop(post.iter_stops(), stop_id)
        return stop.id if stop is not None else None

    def resolve_bookmarks_for_user(self, user_id: str) -> list[BookmarkedStop]:
        bookmarks = self._bookmark_repo.list_by_author(user_id)
        if not bookmarks:
            return []

        # 참조된 게시글의 schedules 를 한 번에 읽어 온다.
        post_ids = list(dict.fromkeys(b.post_id for b in bookmarks))
        schedules_by_post = self._post_repo.find_schedules_by_ids(post_ids)
        stops_by_post = {
            post_id: _flatten(schedules)
            for post_id, schedules in schedules_by_post.items()
        }

        resolved: list[BookmarkedStop] = []
        for bookmark in bookmarks:
            stop = _find_stop(stops_by_post.get(bookmark.post_id, []), bookmark.stop_id)
            if stop is None:
                logger.debug(
                    "skipping stale bookmark",
                    extra={
                        "user_id": user_id,
                        "bookmark_id": bookmark.id,
                        "post_id": bookmark.post_id,
                    },
                )
                continue

            assert bookmark.id is not None
            resolved.append(
                BookmarkedStop(
                    bookmark_id=bookmark.id,
                    post_id=bookmark.post_id,
                    stop=stop,
                )
            )
        return resolved
