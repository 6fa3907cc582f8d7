from __future__ import annotations

from pydantic import BaseModel

from common.types.fields import UtcDateTime
from ...models.post import ScheduleStop


class BookmarkCreateRequest(BaseModel):
    post_id: str
    stop_id: str


class BookmarkItem(BaseModel):
    id: str
    post_id: str
    stop_id: str
    created_at: UtcDateTime


class BookmarkDeleteRequest(BaseModel):
    bookmark_ids: list[str]


class BookmarkDeleteResponse(BaseModel):
    deleted_count: int


class BookmarkedStopItem(BaseModel):
    bookmark_id: str
    post_id: str
    stop: ScheduleStop


class ListBookmarkedStopsResponse(BaseModel):
    total: int
    items: list[BookmarkedStopItem]
