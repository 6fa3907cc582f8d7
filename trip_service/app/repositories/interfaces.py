from __future__ import annotations

from typing import Protocol

from ..models.bookmark import Bookmark
from ..models.post import ListPostsFilter, Post, PostFields, ScheduleStop


class PostRepositoryInterface(Protocol):
    """PostRepository가 따라야 할 최소한의 계약.

    Service 레이어는 이 인터페이스에만 의존하고, 구체 구현(Mongo 등)은 몰라도 된다.
    모든 구현은 저장소 오류를 PersistenceError 로 감싸서 던진다.
    """

    def insert(self, post: Post) -> str:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, post_id: str) -> Post | None:  # pragma: no cover - Protocol
        ...

    def list(
        self, flt: ListPostsFilter
    ) -> tuple[list[Post], int]:  # pragma: no cover - Protocol
        ...

    def find_schedules_by_ids(
        self, post_ids: list[str]
    ) -> dict[str, list[list[ScheduleStop]]]:  # pragma: no cover - Protocol
        """post_id -> schedules. 존재하지 않는 게시글은 결과에 포함되지 않는다."""
        ...

    def replace_fields(
        self, post_id: str, author_id: str, fields: PostFields
    ) -> int:  # pragma: no cover - Protocol
        """작성자 소유 게시글의 필드를 통째로 교체하고 수정된 도큐먼트 수를 반환한다."""
        ...

    def delete_by_id(
        self, post_id: str, author_id: str
    ) -> bool:  # pragma: no cover - Protocol
        ...


class BookmarkRepositoryInterface(Protocol):
    """BookmarkRepository가 따라야 할 최소한의 계약.

    - author_id + post_id + stop_id 조합으로 유니크하게 북마크를 관리한다.
    """

    def find_one(
        self, author_id: str, post_id: str, stop_id: str
    ) -> Bookmark | None:  # pragma: no cover - Protocol
        ...

    def insert(self, bookmark: Bookmark) -> Bookmark:  # pragma: no cover - Protocol
        """중복 조합이면 DuplicateBookmarkError 를 던진다."""
        ...

    def list_by_author(
        self, author_id: str
    ) -> list[Bookmark]:  # pragma: no cover - Protocol
        ...

    def find_by_ids(
        self, bookmark_ids: list[str]
    ) -> list[Bookmark]:  # pragma: no cover - Protocol
        """_id 오름차순으로 반환한다. 형식이 잘못된 ID 는 조용히 제외된다."""
        ...

    def delete_owned(
        self, author_id: str, bookmark_ids: list[str]
    ) -> int:  # pragma: no cover - Protocol
        """author_id 소유인 북마크만 한 번의 쿼리로 삭제하고 삭제 개수를 반환한다."""
        ...
