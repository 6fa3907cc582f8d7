from __future__ import annotations

import os
from dataclasses import dataclass


MONGO_URI_ENV = "MONGO_URI"
MONGO_DB_NAME_ENV = "MONGO_DB_NAME"


@dataclass(slots=True, frozen=True)
class MongoSettings:
    uri: str
    db_name: str | None = None


def get_mongo_uri() -> str:
    """MongoDB 연결 URI 를 환경 변수에서 읽는다.

    설정되지 않았으면 서비스가 바로 실패하도록 RuntimeError 를 던진다.
    """

    value = os.getenv(MONGO_URI_ENV, "").strip()
    if not value:
        raise RuntimeError(
            f"{MONGO_URI_ENV} environment variable is required for MongoDB",
        )
    return value


def get_mongo_db_name() -> str | None:
    """MONGO_DB_NAME 이 비어 있으면 None (URI 의 기본 DB 사용)."""

    value = os.getenv(MONGO_DB_NAME_ENV, "").strip()
    return value or None


def load_mongo_settings() -> MongoSettings:
    return MongoSettings(uri=get_mongo_uri(), db_name=get_mongo_db_name())
