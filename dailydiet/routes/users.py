"""
Daily Diet Backend — User Route Handlers
==========================================

What:  Handles POST /users (registration).
How:   Validates the body, delegates to UserService, sets the session cookie
       when a new token was minted.
"""

from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.config import settings
from dailydiet.database import commit_session, get_db_session
from dailydiet.schemas.common import ErrorResponse
from dailydiet.schemas.user import UserCreateRequest, UserCreatedResponse
from dailydiet.services.session_service import session_service
from dailydiet.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserCreatedResponse,
    responses={
        400: {"description": "Email already registered or invalid body", "model": ErrorResponse},
    },
    summary="Register a user and start a session",
)
async def register_user(
    payload: UserCreateRequest,
    response: Response,
    session_id: Optional[str] = Cookie(default=None, alias=settings.session_cookie_name),
    db: AsyncSession = Depends(get_db_session),
) -> UserCreatedResponse:
    """
    Register a user.

    The `sessionId` cookie is scoped to /meals, so browsers normally send it
    only there; a client that does send one here keeps it if it is unbound.
    """
    result = await user_service.register(
        db=db,
        username=payload.username,
        email=payload.email,
        existing_token=session_id,
    )
    await commit_session(db)
    if result.token_issued:
        session_service.set_cookie(response, result.user.session_id)
    return UserCreatedResponse()
