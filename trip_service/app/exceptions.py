from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """경계 레이어에 노출되는 에러 코드."""

    INVALID_TAG = "invalid_tag"
    INVALID_CITY = "invalid_city"
    TAG_COUNT_EXCEEDED = "tag_count_exceeded"
    SCHEDULE_DATE_MISMATCH = "schedule_date_mismatch"
    SCHEDULE_DISTANCE_MISMATCH = "schedule_distance_mismatch"
    POST_NOT_FOUND = "post_not_found"
    BOOKMARK_NOT_FOUND = "bookmark_not_found"
    STOP_NOT_FOUND = "stop_not_found"
    AUTHOR_MISMATCH = "author_mismatch"
    DUPLICATE_BOOKMARK = "duplicate_bookmark"
    INVALID_INPUT = "invalid_input"
    POST_UPDATE_FAILED = "post_update_failed"
    PERSISTENCE_ERROR = "persistence_error"


class TripServiceError(Exception):
    """Base exception for all trip-service errors.

    kind / message / status_code / details 를 가지고 있어서
    API 레이어가 그대로 응답으로 변환할 수 있다.
    """

    kind: ErrorKind = ErrorKind.PERSISTENCE_ERROR
    status_code: int = 500
    default_message: str = "internal server error"

    def __init__(
        self, message: str | None = None, *, details: dict[str, Any] | None = None
    ) -> None:
        self.message = message or self.default_message
        self.details: dict[str, Any] = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidTagError(TripServiceError):
    """Tag outside the configured allow-list."""

    kind = ErrorKind.INVALID_TAG
    status_code = 400
    default_message = "tag is not in the allowed tag list"

    def __init__(self, tag: str) -> None:
        super().__init__(f"tag is not allowed: {tag}", details={"tag": tag})


class InvalidCityError(TripServiceError):
    """Destination outside the configured allow-list."""

    kind = ErrorKind.INVALID_CITY
    status_code = 400
    default_message = "destination is not in the allowed city list"

    def __init__(self, city: str) -> None:
        super().__init__(f"destination is not allowed: {city}", details={"city": city})


class TagCountExceededError(TripServiceError):
    kind = ErrorKind.TAG_COUNT_EXCEEDED
    status_code = 400
    default_message = "too many tags requested"


class ScheduleDateMismatchError(TripServiceError):
    """schedules 의 날짜 수가 start_date~end_date 기간과 다르다."""

    kind = ErrorKind.SCHEDULE_DATE_MISMATCH
    status_code = 400
    default_message = "schedule day count does not match the date range"


class ScheduleDistanceMismatchError(TripServiceError):
    """특정 날짜의 장소 수와 거리 수가 다르다."""

    kind = ErrorKind.SCHEDULE_DISTANCE_MISMATCH
    status_code = 400
    default_message = "schedule stop count does not match distance count"

    def __init__(self, day_index: int, stop_count: int, distance_count: int) -> None:
        self.day_index = day_index
        super().__init__(
            f"day {day_index}: {stop_count} stops but {distance_count} distances",
            details={
                "day_index": day_index,
                "stop_count": stop_count,
                "distance_count": distance_count,
            },
        )


class PostNotFoundError(TripServiceError):
    kind = ErrorKind.POST_NOT_FOUND
    status_code = 404
    default_message = "post not found"


class BookmarkNotFoundError(TripServiceError):
    kind = ErrorKind.BOOKMARK_NOT_FOUND
    status_code = 404
    default_message = "bookmark not found"


class StopNotFoundError(TripServiceError):
    kind = ErrorKind.STOP_NOT_FOUND
    status_code = 404
    default_message = "schedule stop not found in post"


class AuthorMismatchError(TripServiceError):
    kind = ErrorKind.AUTHOR_MISMATCH
    status_code = 403
    default_message = "user is not the author of this resource"


class DuplicateBookmarkError(TripServiceError):
    kind = ErrorKind.DUPLICATE_BOOKMARK
    status_code = 409
    default_message = "bookmark already exists"


class InvalidInputError(TripServiceError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 400
    default_message = "invalid request value"


class PostUpdateFailedError(TripServiceError):
    """수정 요청이 한 건도 반영되지 않았다."""

    kind = ErrorKind.POST_UPDATE_FAILED
    status_code = 404
    default_message = "failed to update post"


class PersistenceError(TripServiceError):
    """Storage failure. 원인 예외는 __cause__ 로만 보존하고 메시지에 노출하지 않는다."""

    kind = ErrorKind.PERSISTENCE_ERROR
    status_code = 500
    default_message = "internal server error"
