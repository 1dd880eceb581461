"""
Daily Diet Backend — Session Service
======================================

What:  Maps a `sessionId` cookie value to the user that owns it, and mints
       new tokens at registration.
Who:   Used by the request gate (dailydiet.dependencies) and UserService.

Token format:
    A session token is the canonical string form of a random UUID4.
    uuid4() draws from os.urandom, so tokens are unguessable and, with the
    unique constraint on users.session_id, map to at most one user.

Resolution outcomes:
    missing / malformed cookie  → UnauthenticatedError (400), no query issued
    well-formed, unknown token  → UnauthenticatedError (400)
    well-formed, bound token    → the owning User
"""

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import Response
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.config import settings
from dailydiet.exceptions import DatabaseError, UnauthenticatedError
from dailydiet.models.user import User

logger = logging.getLogger(__name__)


def parse_token(raw: Optional[str]) -> Optional[uuid.UUID]:
    """
    Return the token as a UUID, or None when it is absent or malformed.

    Only the canonical dashed form is a token; uuid.UUID also accepts bare
    hex, braces and a urn:uuid: prefix, which are rejected here.
    """
    if not raw:
        return None
    try:
        token = uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError):
        return None
    if str(token) != raw.lower():
        return None
    return token


class SessionService:
    """Stateless session resolver; the database session is passed per call."""

    def mint_token(self) -> uuid.UUID:
        return uuid.uuid4()

    def require_token(self, raw: Optional[str]) -> uuid.UUID:
        """
        Validate the shape of a cookie value.

        Raises:
            UnauthenticatedError: cookie missing or not a session token
        """
        token = parse_token(raw)
        if token is None:
            raise UnauthenticatedError(
                message="Session ID does not exist" if not raw else "Invalid session ID",
            )
        return token

    async def find_user(self, db: AsyncSession, token: uuid.UUID) -> Optional[User]:
        """Read-only lookup; None when no user holds this token."""
        try:
            result = await db.execute(select(User).where(User.session_id == token))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error resolving session: %s", str(e))
            raise DatabaseError(
                message="Could not verify your session. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def resolve(self, db: AsyncSession, token: uuid.UUID) -> User:
        """
        Resolve a well-formed token to its owner.

        Raises:
            UnauthenticatedError: no user holds this token
            DatabaseError: lookup failed
        """
        user = await self.find_user(db, token)
        if user is None:
            raise UnauthenticatedError()
        return user

    def cookie_options(self) -> Dict[str, Any]:
        return {
            "path": settings.session_cookie_path,
            "max_age": settings.session_max_age,
            "httponly": True,
            "samesite": "lax",
            "secure": settings.session_cookie_secure,
        }

    def set_cookie(self, response: Response, token: uuid.UUID) -> None:
        response.set_cookie(settings.session_cookie_name, str(token), **self.cookie_options())


session_service = SessionService()
