from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Any

from bson import ObjectId
from pydantic.functional_serializers import PlainSerializer
from pydantic.functional_validators import BeforeValidator


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _utc_isoformat(value: datetime) -> str:
    return _as_utc(value).isoformat()


def _to_calendar_date(value: Any) -> Any:
    """Mongo 에서 읽은 자정 UTC datetime 을 날짜로 되돌린다."""

    if isinstance(value, datetime):
        return _as_utc(value).date()
    return value


def _to_object_id_str(value: Any) -> Any:
    """ObjectId 는 문자열로 바꾸고, 문자열은 ObjectId 형식인지 확인한다."""

    if value is None or isinstance(value, ObjectId):
        return None if value is None else str(value)
    if isinstance(value, str) and not ObjectId.is_valid(value):
        raise ValueError(f"not a valid ObjectId: {value!r}")
    return value


# 응답에서는 항상 +00:00 오프셋을 붙인다.
UtcDateTime = Annotated[
    datetime,
    PlainSerializer(_utc_isoformat, return_type=str, when_used="json"),
]

# 여행 시작일/종료일. 시각 정보 없이 YYYY-MM-DD 로만 다룬다.
TripDate = Annotated[date, BeforeValidator(_to_calendar_date)]

ObjectIdStr = Annotated[str, BeforeValidator(_to_object_id_str)]
