from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from common.types.fields import UtcDateTime
from ...models.post import Post, PostFields, ScheduleStop


class PostUpsertRequest(BaseModel):
    """게시글 생성/수정 요청 DTO. 수정 시에도 전체 필드를 보낸다."""

    title: str = Field(..., min_length=1)
    destination: str
    start_date: date
    end_date: date
    tags: list[str] = Field(default_factory=list)
    schedules: list[list[ScheduleStop]]
    distances: list[list[float]]
    cost: int = Field(..., ge=0)
    people_count: int = Field(..., ge=1)
    is_public: bool = False
    review_text: str | None = None

    def to_domain(self) -> PostFields:
        return PostFields.model_validate(self.model_dump())


class PostResponse(BaseModel):
    """게시글 응답 DTO.

    도메인 모델(Post)을 그대로 노출하지 않고, API 경계를 위한 전용 응답 모델을 사용한다.
    """

    id: str | None
    author_id: str
    title: str
    destination: str
    start_date: date
    end_date: date
    tags: list[str]
    schedules: list[list[ScheduleStop]]
    distances: list[list[float]]
    cost: int
    people_count: int
    is_public: bool
    review_text: str | None = None
    like_count: int
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, post: Post) -> "PostResponse":
        return cls.model_validate(post.model_dump())


class ListPostsResponse(BaseModel):
    total: int
    items: list[PostResponse]
