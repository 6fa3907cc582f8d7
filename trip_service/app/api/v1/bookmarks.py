from __future__ import annotations

from fastapi import APIRouter, Body, Depends, status

from ..deps import get_current_user_id
from ..schemas.bookmarks import (
    BookmarkCreateRequest,
    BookmarkDeleteRequest,
    BookmarkDeleteResponse,
    BookmarkedStopItem,
    BookmarkItem,
    ListBookmarkedStopsResponse,
)
from ...services.bookmarks_service import BookmarksService, get_bookmarks_service


router = APIRouter()


@router.post(
    "",
    response_model=BookmarkItem,
    status_code=status.HTTP_201_CREATED,
    summary="장소 북마크 추가",
)
def add_bookmark(
    body: BookmarkCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> BookmarkItem:
    bookmark = service.create_bookmark(user_id, body.stop_id, body.post_id)
    assert bookmark.id is not None
    return BookmarkItem(
        id=bookmark.id,
        post_id=bookmark.post_id,
        stop_id=bookmark.stop_id,
        created_at=bookmark.created_at,
    )


@router.delete(
    "",
    response_model=BookmarkDeleteResponse,
    summary="북마크 일괄 삭제",
    description="요청한 북마크가 모두 본인 소유일 때만 한꺼번에 삭제한다.",
)
def remove_bookmarks(
    body: BookmarkDeleteRequest = Body(...),
    user_id: str = Depends(get_current_user_id),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> BookmarkDeleteResponse:
    deleted = service.delete_bookmarks(user_id, body.bookmark_ids)
    return BookmarkDeleteResponse(deleted_count=deleted)


@router.get(
    "",
    response_model=ListBookmarkedStopsResponse,
    summary="내 북마크 장소 목록 조회",
    description="게시글이 수정/삭제되어 더 이상 찾을 수 없는 북마크는 제외된다.",
)
def list_bookmarks(
    user_id: str = Depends(get_current_user_id),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> ListBookmarkedStopsResponse:
    items = [
        BookmarkedStopItem(bookmark_id=b.bookmark_id, post_id=b.post_id, stop=b.stop)
        for b in service.list_bookmarks(user_id)
    ]
    return ListBookmarkedStopsResponse(total=len(items), items=items)
