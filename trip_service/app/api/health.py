from __future__ import annotations

from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from common.mongo.client import get_database

from ..exceptions import PersistenceError


router = APIRouter()


@router.get("/health", summary="헬스 체크")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready", summary="MongoDB 연결 확인")
def ready(db: Database = Depends(get_database)) -> dict[str, str]:
    try:
        db.command("ping")
    except PyMongoError as exc:
        raise PersistenceError("database is not reachable") from exc
    return {"status": "ready"}
