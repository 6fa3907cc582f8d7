from __future__ import annotations

from common.mongo.types import BaseDocument, from_object_id
from ...models.bookmark import Bookmark


class BookmarkDocument(BaseDocument):
    """MongoDB bookmarks 컬렉션 도큐먼트 모델."""

    author_id: str
    post_id: str
    stop_id: str

    @classmethod
    def from_domain(cls, bookmark: Bookmark) -> "BookmarkDocument":
        data = {
            "author_id": bookmark.author_id,
            "post_id": bookmark.post_id,
            "stop_id": bookmark.stop_id,
            "created_at": bookmark.created_at,
            "updated_at": bookmark.created_at,
        }
        if bookmark.id is not None:
            data["_id"] = bookmark.id
        return cls.model_validate(data)

    def to_domain(self) -> Bookmark:
        return Bookmark(
            id=from_object_id(self.id),
            author_id=self.author_id,
            post_id=self.post_id,
            stop_id=self.stop_id,
            created_at=self.created_at,
        )
