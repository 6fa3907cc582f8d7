from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterator

from pydantic import BaseModel, Field

from common.types.fields import ObjectIdStr, TripDate


class ScheduleStop(BaseModel):
    """하루 일정 안의 장소 하나 (Post.schedules 에 내장된다).

    id 는 저장 시점에 부여되며, schedules 안에서의 위치가 바뀌어도 유지된다.
    북마크는 이 id 로 장소를 가리킨다.
    """

    id: ObjectIdStr | None = None
    place_name: str
    place_image_src: str
    star: float
    category: str


class PostFields(BaseModel):
    """생성/수정 시 작성자가 제출하는 게시글 필드."""

    title: str
    destination: str
    start_date: TripDate
    end_date: TripDate
    tags: list[str] = Field(default_factory=list)
    # 날짜별 장소 목록: schedules[day][order]
    schedules: list[list[ScheduleStop]]
    # 날짜별 장소 간 거리: distances[day][order]
    distances: list[list[float]]
    cost: int
    people_count: int
    is_public: bool = False
    review_text: str | None = None


class Post(PostFields):
    """여행 일정 게시글 도메인 모델 (API/저장소에서 공통 사용)"""

    id: str | None = None
    author_id: str
    like_count: int = 0
    created_at: datetime
    updated_at: datetime

    def iter_stops(self) -> Iterator[ScheduleStop]:
        """2차원 schedules 를 날짜/순서대로 펼쳐서 돌려준다."""

        for day in self.schedules:
            yield from day


class PostSortOrder(str, Enum):
    LATEST = "latest"
    OLDEST = "oldest"
    MOST_LIKED = "most_liked"


class ListPostsFilter(BaseModel):
    """게시글 목록 조회 옵션"""

    page: int = 1
    page_size: int = 20
    author_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    destination: str | None = None
    sort: PostSortOrder | None = None
