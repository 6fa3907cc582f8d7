from __future__ import annotations

import functools
import logging
from typing import Callable, TypeVar

from pymongo.errors import PyMongoError
from typing_extensions import ParamSpec

from ..exceptions import PersistenceError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def translate_mongo_errors(func: Callable[P, R]) -> Callable[P, R]:
    """pymongo 예외를 PersistenceError 로 바꿔 던진다.

    원인은 __cause__ 로 남기고, 호출자에게는 드라이버 메시지를 노출하지 않는다.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except PyMongoError as exc:
            logger.exception("mongo operation failed: %s", func.__qualname__)
            raise PersistenceError() from exc

    return wrapper
