from __future__ import annotations

from fastapi import Header, HTTPException, status


def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """게이트웨이가 인증 후 넘겨준 유저 ID.

    세션 검증은 게이트웨이 책임이므로 여기서는 값의 존재만 확인하고 그대로 신뢰한다.
    """

    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required",
        )
    return x_user_id.strip()
