"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request, status

from . import schemas, service


def _extract_token(authorization: str | None) -> str:
    """
    Accept either the raw token or `Bearer <token>`.
    """
    raw = (authorization or "").strip()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization token",
        )

    parts = raw.split(" ", 1)
    if len(parts) == 2 and parts[0].strip().lower() == "bearer":
        token = parts[1].strip()
        if not token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Missing authorization token",
            )
        return token
    return raw


async def get_access_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_token(authorization)


async def get_current_user(
    request: Request,
    access_token: str = Depends(get_access_token),
) -> schemas.Identity:
    identity = service.get_identity_from_access_token(access_token)
    request.state.user = identity
    return identity
