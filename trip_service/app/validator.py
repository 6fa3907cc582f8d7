from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from .config import ReferenceData
from .exceptions import (
    InvalidCityError,
    InvalidInputError,
    InvalidTagError,
    ScheduleDateMismatchError,
    ScheduleDistanceMismatchError,
    TagCountExceededError,
)
from .models.post import PostFields, ScheduleStop


# 태그 필터 조회에서 한 번에 고를 수 있는 최대 태그 수
MAX_FILTER_TAGS = 5


def _is_collection(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def validate_tags(tags: Any, reference: ReferenceData) -> None:
    """모든 태그가 허용 목록에 있는지 검사한다. 첫 번째 위반에서 멈춘다."""

    if not _is_collection(tags):
        raise InvalidInputError("tags must be a list of strings")

    for tag in tags:
        if not isinstance(tag, str) or not reference.has_tag(tag):
            raise InvalidTagError(str(tag))


def validate_filter_tags(tags: Any, reference: ReferenceData) -> None:
    """태그 필터 조회 조건 검사 (리스트 여부 -> 개수 -> 허용 목록 순)."""

    if not _is_collection(tags):
        raise InvalidInputError("tags must be a list of strings")

    if len(tags) > MAX_FILTER_TAGS:
        raise TagCountExceededError(
            f"at most {MAX_FILTER_TAGS} tags can be selected",
            details={"limit": MAX_FILTER_TAGS, "requested": len(tags)},
        )

    validate_tags(tags, reference)


def validate_city(city: Any, reference: ReferenceData) -> None:
    if not isinstance(city, str) or not reference.has_city(city):
        raise InvalidCityError(str(city))


def _as_date(value: date) -> date:
    # datetime 은 date 의 서브클래스라서 먼저 확인해야 한다.
    if isinstance(value, datetime):
        return value.date()
    return value


def count_days(start_date: date, end_date: date) -> int:
    """시작일과 종료일을 모두 포함한 여행 일수."""

    return (_as_date(end_date) - _as_date(start_date)).days + 1


def validate_shape(
    schedules: Sequence[Sequence[Any]],
    distances: Sequence[Sequence[Any]],
    start_date: date,
    end_date: date,
) -> None:
    """schedules / distances / 기간 사이의 개수(cardinality)만 검사한다.

    1. schedules 의 날짜 수 == count_days(start_date, end_date)
    2. 모든 날짜 i 에 대해 len(schedules[i]) == len(distances[i])

    거리 값 자체의 타당성은 클라이언트가 측정한 값이므로 보지 않는다.
    """

    expected_days = count_days(start_date, end_date)
    if expected_days < 1:
        raise ScheduleDateMismatchError(
            "end_date must not be earlier than start_date",
            details={"start_date": str(start_date), "end_date": str(end_date)},
        )

    if len(schedules) != expected_days:
        raise ScheduleDateMismatchError(
            f"schedule has {len(schedules)} days but the trip spans {expected_days} days",
            details={"expected_days": expected_days, "schedule_days": len(schedules)},
        )

    for day_index, stops in enumerate(schedules):
        if day_index >= len(distances):
            raise ScheduleDistanceMismatchError(day_index, len(stops), 0)
        if len(stops) != len(distances[day_index]):
            raise ScheduleDistanceMismatchError(
                day_index, len(stops), len(distances[day_index])
            )

    if len(distances) > len(schedules):
        # 일정보다 긴 거리 목록: 짝이 없는 첫 날짜를 가리킨다.
        extra_day = len(schedules)
        raise ScheduleDistanceMismatchError(extra_day, 0, len(distances[extra_day]))


def validate_unique_stop_ids(schedules: Sequence[Sequence[ScheduleStop]]) -> None:
    """제출된 장소 id 가 게시글 안에서 겹치지 않는지 검사한다. id 없는 장소는 건너뛴다."""

    seen: set[str] = set()
    for day_index, stops in enumerate(schedules):
        for stop in stops:
            if stop.id is None:
                continue
            if stop.id in seen:
                raise InvalidInputError(
                    f"duplicate stop id in schedules: {stop.id}",
                    details={"stop_id": stop.id, "day_index": day_index},
                )
            seen.add(stop.id)


def validate_post_fields(fields: PostFields, reference: ReferenceData) -> None:
    """게시글 생성/수정 공통 검증 파이프라인. 순서 고정, 첫 실패에서 중단."""

    validate_tags(fields.tags, reference)
    validate_city(fields.destination, reference)
    validate_shape(fields.schedules, fields.distances, fields.start_date, fields.end_date)
    validate_unique_stop_ids(fields.schedules)
