from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from .post import ScheduleStop


class Bookmark(BaseModel):
    """유저가 특정 게시글의 특정 장소를 저장한 북마크.

    장소 데이터를 복사하지 않고 (post_id, stop_id) 참조만 가진다.
    """

    id: str | None = None
    author_id: str
    post_id: str
    stop_id: str
    created_at: datetime


class BookmarkedStop(BaseModel):
    """북마크를 현재 게시글 상태에 대조해 찾아낸 장소."""

    bookmark_id: str
    post_id: str
    stop: ScheduleStop
