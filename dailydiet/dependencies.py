"""
Daily Diet Backend — Request Gate
===================================

What:  FastAPI dependencies that run before every /meals handler.
How:   `require_session_token` checks the cookie's shape without touching the
       database; `get_current_user` composes it with the session lookup.
       Handlers depend on `get_current_user` and receive the owner explicitly.

    Request ──▶ require_session_token ──▶ get_current_user ──▶ handler(owner)
                 (400 if missing/bad)      (400 if unknown)
"""

import uuid
from typing import Optional

from fastapi import Cookie, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.config import settings
from dailydiet.database import get_db_session
from dailydiet.models.user import User
from dailydiet.services.session_service import session_service


async def require_session_token(
    session_id: Optional[str] = Cookie(default=None, alias=settings.session_cookie_name),
) -> uuid.UUID:
    return session_service.require_token(session_id)


async def get_current_user(
    token: uuid.UUID = Depends(require_session_token),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    return await session_service.resolve(db, token)
