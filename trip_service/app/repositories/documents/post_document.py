from __future__ import annotations

from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

from common.mongo.types import (
    BaseDocument,
    MongoDateTime,
    PyObjectId,
    from_object_id,
)
from ...models.post import Post, ScheduleStop


class ScheduleStopDocument(BaseModel):
    """posts.schedules 에 내장되는 장소 서브도큐먼트."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    place_name: str
    place_image_src: str
    star: float
    category: str

    @classmethod
    def from_domain(cls, stop: ScheduleStop) -> "ScheduleStopDocument":
        data = stop.model_dump(exclude={"id"})
        # id 가 없으면 default_factory 로 새 ObjectId 를 부여한다.
        if stop.id is not None:
            data["_id"] = stop.id
        return cls.model_validate(data)

    def to_domain(self) -> ScheduleStop:
        return ScheduleStop(
            id=from_object_id(self.id),
            place_name=self.place_name,
            place_image_src=self.place_image_src,
            star=self.star,
            category=self.category,
        )


class PostDocument(BaseDocument):
    """MongoDB posts 컬렉션 도큐먼트 모델."""

    author_id: str
    title: str
    destination: str
    # BSON 에 date 타입이 없어서 자정 UTC datetime 으로 저장한다.
    start_date: MongoDateTime
    end_date: MongoDateTime
    tags: list[str] = Field(default_factory=list)
    schedules: list[list[ScheduleStopDocument]] = Field(default_factory=list)
    distances: list[list[float]] = Field(default_factory=list)
    cost: int = 0
    people_count: int = 0
    is_public: bool = False
    review_text: str | None = None
    like_count: int = 0

    @classmethod
    def from_domain(cls, post: Post) -> "PostDocument":
        data: dict[str, Any] = post.model_dump(exclude={"id", "schedules"})
        data["schedules"] = [
            [ScheduleStopDocument.from_domain(stop) for stop in day]
            for day in post.schedules
        ]
        if post.id is not None:
            data["_id"] = post.id
        return cls.model_validate(data)

    def to_domain(self) -> Post:
        return Post(
            id=from_object_id(self.id),
            author_id=self.author_id,
            title=self.title,
            destination=self.destination,
            start_date=self.start_date,
            end_date=self.end_date,
            tags=list(self.tags),
            schedules=[[stop.to_domain() for stop in day] for day in self.schedules],
            distances=[list(day) for day in self.distances],
            cost=self.cost,
            people_count=self.people_count,
            is_public=self.is_public,
            review_text=self.review_text,
            like_count=self.like_count,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
