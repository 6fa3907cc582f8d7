from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from trip_service.app.config import ReferenceData
from trip_service.app.exceptions import (
    ErrorKind,
    InvalidCityError,
    InvalidInputError,
    InvalidTagError,
    ScheduleDateMismatchError,
    ScheduleDistanceMismatchError,
    TagCountExceededError,
)
from trip_service.app.validator import (
    count_days,
    validate_city,
    validate_filter_tags,
    validate_post_fields,
    validate_shape,
    validate_tags,
    validate_unique_stop_ids,
)


def _schedules(*stop_counts: int) -> list[list[str]]:
    return [[f"stop-{day}-{i}" for i in range(count)] for day, count in enumerate(stop_counts)]


def _distances(*counts: int) -> list[list[float]]:
    return [[1.0] * count for count in counts]


def test_count_days_includes_both_endpoints() -> None:
    assert count_days(date(2024, 1, 1), date(2024, 1, 1)) == 1
    assert count_days(date(2024, 1, 1), date(2024, 1, 3)) == 3
    # 월/연도 경계
    assert count_days(date(2023, 12, 31), date(2024, 1, 1)) == 2


def test_count_days_accepts_datetime_values() -> None:
    start = datetime(2024, 1, 1, 23, 0, tzinfo=timezone.utc)
    end = datetime(2024, 1, 3, 1, 0, tzinfo=timezone.utc)
    assert count_days(start, end) == 3


def test_validate_shape_passes_for_consistent_itinerary() -> None:
    validate_shape(
        _schedules(2, 1, 3),
        _distances(2, 1, 3),
        date(2024, 1, 1),
        date(2024, 1, 3),
    )


@pytest.mark.parametrize("day_count", [2, 4])
def test_validate_shape_off_by_one_day_count_fails(day_count: int) -> None:
    """3일 여행에 2일/4일 일정 -> ScheduleDateMismatch."""
    counts = [1] * day_count
    with pytest.raises(ScheduleDateMismatchError) as exc_info:
        validate_shape(
            _schedules(*counts),
            _distances(*counts),
            date(2024, 1, 1),
            date(2024, 1, 3),
        )

    assert exc_info.value.kind is ErrorKind.SCHEDULE_DATE_MISMATCH
    assert exc_info.value.details["expected_days"] == 3
    assert exc_info.value.details["schedule_days"] == day_count


def test_validate_shape_rejects_end_before_start() -> None:
    with pytest.raises(ScheduleDateMismatchError):
        validate_shape([], [], date(2024, 1, 3), date(2024, 1, 1))


def test_validate_shape_names_offending_day() -> None:
    """0일차 장소 2개, 거리 3개 -> 0일차 ScheduleDistanceMismatch."""
    with pytest.raises(ScheduleDistanceMismatchError) as exc_info:
        validate_shape(
            _schedules(2, 1, 1),
            _distances(3, 1, 1),
            date(2024, 1, 1),
            date(2024, 1, 3),
        )

    assert exc_info.value.day_index == 0
    assert exc_info.value.details == {
        "day_index": 0,
        "stop_count": 2,
        "distance_count": 3,
    }


def test_validate_shape_reports_first_mismatching_day_only() -> None:
    with pytest.raises(ScheduleDistanceMismatchError) as exc_info:
        validate_shape(
            _schedules(1, 2, 3),
            _distances(1, 1, 1),
            date(2024, 1, 1),
            date(2024, 1, 3),
        )

    assert exc_info.value.day_index == 1


def test_validate_shape_missing_distance_day() -> None:
    with pytest.raises(ScheduleDistanceMismatchError) as exc_info:
        validate_shape(
            _schedules(1, 1),
            _distances(1),
            date(2024, 1, 1),
            date(2024, 1, 2),
        )

    assert exc_info.value.day_index == 1


def test_validate_shape_surplus_distance_day() -> None:
    with pytest.raises(ScheduleDistanceMismatchError) as exc_info:
        validate_shape(
            _schedules(1),
            _distances(1, 2),
            date(2024, 1, 1),
            date(2024, 1, 1),
        )

    assert exc_info.value.day_index == 1


def test_validate_shape_checks_days_before_distances() -> None:
    """두 규칙이 모두 깨져도 날짜 수 검사가 먼저 실패한다."""
    with pytest.raises(ScheduleDateMismatchError):
        validate_shape(
            _schedules(2, 2),
            _distances(1, 1),
            date(2024, 1, 1),
            date(2024, 1, 3),
        )


def test_validate_tags(reference_data: ReferenceData) -> None:
    validate_tags(["beach", "food"], reference_data)
    validate_tags([], reference_data)

    with pytest.raises(InvalidTagError) as exc_info:
        validate_tags(["beach", "karaoke", "casino"], reference_data)
    assert exc_info.value.details == {"tag": "karaoke"}


def test_validate_tags_requires_collection(reference_data: ReferenceData) -> None:
    with pytest.raises(InvalidInputError):
        validate_tags("beach", reference_data)


def test_validate_city(reference_data: ReferenceData) -> None:
    validate_city("Busan", reference_data)

    with pytest.raises(InvalidCityError):
        validate_city("Atlantis", reference_data)

    # 대소문자까지 정확히 일치해야 한다.
    with pytest.raises(InvalidCityError):
        validate_city("busan", reference_data)


def test_validate_filter_tags_rejects_more_than_five(
    reference_data: ReferenceData,
) -> None:
    tags = ["mountain", "beach", "city", "food", "night", "museum"]
    with pytest.raises(TagCountExceededError) as exc_info:
        validate_filter_tags(tags, reference_data)

    assert exc_info.value.details == {"limit": 5, "requested": 6}


def test_validate_filter_tags_count_checked_before_membership(
    reference_data: ReferenceData,
) -> None:
    with pytest.raises(TagCountExceededError):
        validate_filter_tags(["a", "b", "c", "d", "e", "f"], reference_data)


def test_validate_filter_tags_requires_list(reference_data: ReferenceData) -> None:
    with pytest.raises(InvalidInputError):
        validate_filter_tags("beach", reference_data)
    with pytest.raises(InvalidInputError):
        validate_filter_tags(None, reference_data)


def test_validate_post_fields_fails_fast_in_fixed_order(
    reference_data: ReferenceData, make_fields
) -> None:
    """태그 -> 여행지 -> 일정 순서로 첫 번째 실패만 보고한다."""
    broken_everything = make_fields(
        tags=["casino"],
        destination="Atlantis",
        end_date=date(2024, 1, 10),
    )
    with pytest.raises(InvalidTagError):
        validate_post_fields(broken_everything, reference_data)

    broken_city_and_shape = make_fields(destination="Atlantis", end_date=date(2024, 1, 10))
    with pytest.raises(InvalidCityError):
        validate_post_fields(broken_city_and_shape, reference_data)

    with pytest.raises(ScheduleDateMismatchError):
        validate_post_fields(make_fields(end_date=date(2024, 1, 10)), reference_data)

    validate_post_fields(make_fields(), reference_data)


def test_validate_unique_stop_ids_ignores_unassigned(make_stop) -> None:
    validate_unique_stop_ids(
        [[make_stop("a"), make_stop("b")], [make_stop("c", "65a000000000000000000001")]]
    )

    with pytest.raises(InvalidInputError) as exc_info:
        validate_unique_stop_ids(
            [
                [make_stop("a", "65a000000000000000000001")],
                [make_stop("b"), make_stop("c", "65a000000000000000000001")],
            ]
        )
    assert exc_info.value.details["day_index"] == 1
