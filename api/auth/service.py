"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import repository, schemas, security

logger = logging.getLogger(__name__)


def _config_error(exc: security.AuthConfigError) -> HTTPException:
    logger.error("auth_misconfigured reason=%s", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


async def login(payload: schemas.LoginRequest) -> schemas.TokenResponse:
    user_row = await repository.get_user_by_username(payload.username)
    if user_row is None:
        logger.info("login_failed username=%s reason=unknown_user", payload.username)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    is_valid = security.verify_password(payload.password, str(user_row.get("password_hash") or ""))
    if not is_valid:
        logger.info("login_failed username=%s reason=bad_password", payload.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )

    try:
        token = security.build_access_token(
            user_id=str(user_row["id"]),
            username=str(user_row.get("username") or ""),
        )
    except security.AuthConfigError as exc:
        raise _config_error(exc) from exc

    logger.info("login_succeeded username=%s", payload.username)
    return schemas.TokenResponse(token=token)


def get_identity_from_access_token(access_token: str) -> schemas.Identity:
    """
    Validate a presented token and return the caller identity.

    Tokens are stateless: signature and expiry are the only checks.
    """
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthConfigError as exc:
        raise _config_error(exc) from exc
    except security.AuthSecurityError as exc:
        logger.info("token_rejected reason=%s", exc)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        ) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        )

    return schemas.Identity(user_id=subject, username=payload.get("username"))
