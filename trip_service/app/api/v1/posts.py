from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..deps import get_current_user_id
from ..schemas.posts import ListPostsResponse, PostResponse, PostUpsertRequest
from ...models.post import Post, PostSortOrder
from ...services.posts_service import PostsService, get_posts_service


router = APIRouter()


def _to_list_response(result: tuple[list[Post], int]) -> ListPostsResponse:
    items, total = result
    return ListPostsResponse(
        total=total, items=[PostResponse.from_domain(post) for post in items]
    )


@router.get(
    "",
    response_model=ListPostsResponse,
    summary="게시글 목록 조회",
    description="전체 게시글 목록. sort 를 주면 최신순/오래된순/찜 많은 순으로 정렬한다.",
)
def list_posts(
    sort: Optional[PostSortOrder] = Query(default=None, description="정렬 기준"),
    page: int = Query(1, ge=1, description="조회할 페이지 (1부터 시작)"),
    page_size: int = Query(20, ge=1, le=100, description="페이지당 아이템 개수 (1~100)"),
    service: PostsService = Depends(get_posts_service),
) -> ListPostsResponse:
    if sort is None:
        return _to_list_response(service.get_all_posts(page, page_size))
    return _to_list_response(service.get_posts_sorted(sort, page, page_size))


@router.get(
    "/me",
    response_model=ListPostsResponse,
    summary="내 게시글 목록 조회",
)
def list_my_posts(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    service: PostsService = Depends(get_posts_service),
) -> ListPostsResponse:
    return _to_list_response(service.get_posts_by_user(user_id, page, page_size))


@router.get(
    "/filter",
    response_model=ListPostsResponse,
    summary="태그 필터링 게시글 조회",
    description="선택한 태그(최대 5개) 중 하나라도 가진 게시글 목록을 반환한다.",
)
def list_posts_by_tags(
    tags: List[str] = Query(default=[], description="필터링할 태그 목록 (OR)"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    service: PostsService = Depends(get_posts_service),
) -> ListPostsResponse:
    return _to_list_response(service.get_posts_by_tags(tags, page, page_size))


@router.get(
    "/search",
    response_model=ListPostsResponse,
    summary="여행지로 게시글 검색",
)
def list_posts_by_destination(
    destination: str = Query(..., min_length=1, description="여행지(도시) 이름"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    service: PostsService = Depends(get_posts_service),
) -> ListPostsResponse:
    return _to_list_response(
        service.get_posts_by_destination(destination, page, page_size)
    )


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="게시글 상세 조회",
)
def get_post(
    post_id: str,
    service: PostsService = Depends(get_posts_service),
) -> PostResponse:
    return PostResponse.from_domain(service.get_post(post_id))


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="게시글 생성",
)
def create_post(
    body: PostUpsertRequest,
    user_id: str = Depends(get_current_user_id),
    service: PostsService = Depends(get_posts_service),
) -> PostResponse:
    post = service.create_post(user_id, body.to_domain())
    return PostResponse.from_domain(post)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    summary="게시글 수정",
    description="작성자 본인만 수정할 수 있으며, 전체 필드를 교체한다.",
)
def update_post(
    post_id: str,
    body: PostUpsertRequest,
    user_id: str = Depends(get_current_user_id),
    service: PostsService = Depends(get_posts_service),
) -> PostResponse:
    post = service.update_post(user_id, post_id, body.to_domain())
    return PostResponse.from_domain(post)


@router.delete(
    "/{post_id}",
    summary="게시글 삭제",
)
def delete_post(
    post_id: str,
    user_id: str = Depends(get_current_user_id),
    service: PostsService = Depends(get_posts_service),
) -> dict[str, str]:
    service.delete_post(user_id, post_id)
    return {"message": "post_deleted"}
