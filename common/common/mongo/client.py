from __future__ import annotations

import logging
import threading
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from .config import load_mongo_settings


logger = logging.getLogger(__name__)


_client: Optional[MongoClient] = None
_db: Optional[Database] = None
_lock = threading.Lock()


def get_client() -> MongoClient:
    """프로세스 전역 MongoClient 싱글톤을 반환한다.

    - MONGO_URI / MONGO_DB_NAME 에서 접속 정보를 읽는다.
    - ping 으로 연결을 확인한다.
    - posts / bookmarks 컬렉션 인덱스를 최초 연결 시 한 번만 생성한다.
    """

    global _client, _db

    if _client is not None:
        return _client

    with _lock:
        if _client is not None:
            return _client

        settings = load_mongo_settings()
        client: MongoClient = MongoClient(settings.uri)

        try:
            client.admin.command("ping")
        except Exception as exc:  # noqa: BLE001
            client.close()
            raise RuntimeError(f"failed to connect to MongoDB: {exc}") from exc

        try:
            db = (
                client[settings.db_name]
                if settings.db_name
                else client.get_default_database()
            )
        except Exception as exc:  # noqa: BLE001
            client.close()
            raise RuntimeError(
                "MongoDB database name must be specified via MONGO_DB_NAME or in MONGO_URI (mongodb://.../db_name)",
            ) from exc

        try:
            ensure_indexes(db)
        except Exception as exc:  # noqa: BLE001
            logger.error("failed to ensure MongoDB indexes: %s", exc)
            client.close()
            raise

        _client = client
        _db = db
        logger.info("MongoDB connected and indexes ensured (db=%s)", db.name)
        return _client


def get_database() -> Database:
    """전역 기본 Database 객체를 반환한다. (FastAPI Depends 용)"""

    if _db is None:
        get_client()
    assert _db is not None
    return _db


def close_client() -> None:
    """애플리케이션 종료 시 커넥션 풀을 정리한다."""

    global _client, _db

    with _lock:
        if _client is not None:
            _client.close()
        _client = None
        _db = None


def ensure_indexes(db: Database) -> None:
    """posts / bookmarks 컬렉션 인덱스를 생성한다. 여러 번 호출해도 안전하다."""

    posts = db["posts"]

    # 최신순/오래된순 정렬
    posts.create_index(
        [("updated_at", DESCENDING), ("_id", DESCENDING)],
        name="idx_updated_at_id_desc",
    )
    # 찜 많은 순 정렬
    posts.create_index(
        [("like_count", DESCENDING), ("_id", DESCENDING)],
        name="idx_like_count_id_desc",
    )
    posts.create_index([("tags", ASCENDING)], name="idx_tags")
    posts.create_index([("destination", ASCENDING)], name="idx_destination")
    posts.create_index([("author_id", ASCENDING)], name="idx_author_id")

    bookmarks = db["bookmarks"]

    bookmarks.create_index(
        [("author_id", ASCENDING), ("created_at", DESCENDING)],
        name="idx_author_created_at",
    )
    # 같은 유저가 같은 게시글의 같은 장소를 두 번 북마크할 수 없다.
    bookmarks.create_index(
        [("author_id", ASCENDING), ("post_id", ASCENDING), ("stop_id", ASCENDING)],
        name="uniq_author_post_stop",
        unique=True,
    )
