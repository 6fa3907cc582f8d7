from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated


def ensure_utc_datetime(value: Any) -> Any:
    """datetime 값을 UTC 로 정규화한다.

    - tzinfo 가 없으면 (pymongo 기본 동작) UTC 로 간주한다.
    - datetime 이 아닌 date 는 그날 00:00 UTC 로 올린다.
    """

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return date_to_datetime(value)
    return value


def date_to_datetime(value: date) -> datetime:
    """BSON 은 date 타입이 없으므로 자정 UTC datetime 으로 저장한다."""

    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def to_object_id(value: Any) -> ObjectId:
    """str, ObjectId 등을 ObjectId 로 변환한다."""

    if isinstance(value, ObjectId):
        return value
    if value is None:
        raise TypeError("ObjectId cannot be None")
    return ObjectId(str(value))


def parse_object_id(value: Any) -> ObjectId | None:
    """사용자 입력 ID 를 ObjectId 로 변환한다. 형식이 틀리면 None.

    외부에서 들어온 잘못된 ID 는 "존재하지 않는 문서" 로 취급하기 위해 사용한다.
    """

    try:
        return to_object_id(value)
    except (InvalidId, TypeError):
        return None


def from_object_id(value: Optional[ObjectId]) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def new_object_id() -> str:
    return str(ObjectId())


PyObjectId = Annotated[ObjectId, BeforeValidator(to_object_id)]
MongoDateTime = Annotated[datetime, BeforeValidator(ensure_utc_datetime)]


class BaseDocument(BaseModel):
    """MongoDB 도큐먼트 공통 베이스 모델.

    - ObjectId 같은 임의 타입을 허용한다.
    - id <-> _id alias 로 저장/조회 양쪽을 모두 지원한다.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: MongoDateTime
    updated_at: MongoDateTime

    def to_mongo_record(self) -> dict[str, Any]:
        """Mongo 저장용 dict.

        exclude_none=True 로 _id=None 을 제거해 Mongo 가 ObjectId 를 생성하게 한다.
        """

        return self.model_dump(by_alias=True, exclude_none=True)
