"""
Daily Diet Backend — User Registration Service
================================================

What:  Creates users and binds each one to a session token.
Who:   Called by POST /users.

Registration Flow:
    1. Reject if a user with the same email exists (exact match)
    2. Pick the token: reuse the caller's cookie only if it is well-formed
       and not yet bound to anyone; otherwise mint a new one
    3. Insert the user in one statement
    4. A unique-constraint race on insert is reported as the same conflict
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.exceptions import ConflictError, DatabaseError
from dailydiet.models.user import User
from dailydiet.services.session_service import SessionService, parse_token, session_service

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    user: User
    # True when the token was minted here and must be sent back as a cookie
    token_issued: bool


class UserService:

    def __init__(self, sessions: SessionService = session_service):
        self.sessions = sessions

    async def register(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        existing_token: Optional[str] = None,
    ) -> RegistrationResult:
        """
        Register a user.

        Args:
            db: Async database session
            username: Display name
            email: Contact address, unique across users
            existing_token: Raw `sessionId` cookie sent with the request, if any

        Raises:
            ConflictError: email already registered (→ 400)
            DatabaseError: insert failed for another reason (→ 500)
        """
        try:
            result = await db.execute(select(User.id).where(User.email == email))
            if result.scalar_one_or_none() is not None:
                logger.info("Registration rejected: email already registered")
                raise ConflictError()

            token = parse_token(existing_token)
            token_issued = False
            if token is None or await self.sessions.find_user(db, token) is not None:
                token = self.sessions.mint_token()
                token_issued = True

            user = User(username=username, email=email, session_id=token)
            db.add(user)
            await db.flush()

        except ConflictError:
            raise
        except IntegrityError:
            # Lost a race against a concurrent registration
            await db.rollback()
            logger.info("Registration rejected: unique constraint violated")
            raise ConflictError()
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not register the user. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User registered: %s (new session=%s)", user.id, token_issued)
        return RegistrationResult(user=user, token_issued=token_issued)


user_service = UserService()
