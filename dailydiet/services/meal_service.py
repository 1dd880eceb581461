"""
Daily Diet Backend — Meal Service
===================================

What:  Owner-scoped meal CRUD and the per-owner diet summary.
Why:   Keeps the ownership rule in one place, independent of HTTP.
How:   Every statement carries `Meal.user_id == owner_id`. Update and delete
       are single UPDATE/DELETE statements whose affected row count decides
       success, so a request never applies half a change.
Who:   Called by the /meals route handlers with the resolved user's id.

Ownership:
    owner_id is always an explicit argument. A meal that exists under another
    owner is never read, so "does not exist" and "not yours" are the same
    outcome for the caller.

Lifecycle per meal:
    nonexistent → created → [updated]* → deleted
    Update or delete of a nonexistent or deleted meal matches zero rows and
    raises NotFoundOrUnauthorizedError every time.
"""

import logging
import uuid
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.exceptions import DatabaseError, NotFoundError, NotFoundOrUnauthorizedError
from dailydiet.models.meal import Meal
from dailydiet.schemas.meal import MealResponse, MealSummary

logger = logging.getLogger(__name__)


class MealService:
    """
    Business logic layer for meals.

    Error Handling Strategy:
        SQLAlchemy failures are wrapped in DatabaseError (generic message,
        details logged). Ownership misses raise NotFoundError (get) or
        NotFoundOrUnauthorizedError (update/delete).
    """

    async def create_meal(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        name: str,
        description: str,
        is_on_diet: bool = False,
    ) -> Meal:
        """Insert a meal for owner_id; id and created_at are assigned here."""
        meal = Meal(
            name=name,
            description=description,
            is_on_diet=is_on_diet,
            user_id=owner_id,
        )
        try:
            db.add(meal)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating meal: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the meal. Please try again.",
                context={"owner_id": str(owner_id)},
            )
        logger.info("Meal %s created for user %s", meal.id, owner_id)
        return meal

    async def list_meals(self, db: AsyncSession, owner_id: uuid.UUID) -> List[Meal]:
        """All of owner_id's meals, oldest first."""
        try:
            result = await db.execute(
                select(Meal)
                .where(Meal.user_id == owner_id)
                .order_by(Meal.created_at, Meal.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing meals: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve meals. Please try again.",
                context={"owner_id": str(owner_id)},
            )

    async def get_meal(
        self, db: AsyncSession, owner_id: uuid.UUID, meal_id: uuid.UUID
    ) -> Meal:
        """
        Fetch one meal owned by owner_id.

        Raises:
            NotFoundError: no meal with this id under this owner (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Meal).where(Meal.id == meal_id, Meal.user_id == owner_id)
            )
            meal = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching meal %s: %s", meal_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the meal. Please try again.",
                context={"meal_id": str(meal_id)},
            )

        if meal is None:
            raise NotFoundError(resource="meal", resource_id=str(meal_id))
        return meal

    async def update_meal(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        meal_id: uuid.UUID,
        name: str,
        description: str,
        is_on_diet: bool,
    ) -> None:
        """
        Replace name, description and is_on_diet of an owned meal.

        Raises:
            NotFoundOrUnauthorizedError: no row matched id + owner (→ 400)
        """
        try:
            result = await db.execute(
                update(Meal)
                .where(Meal.id == meal_id, Meal.user_id == owner_id)
                .values(name=name, description=description, is_on_diet=is_on_diet)
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating meal %s: %s", meal_id, str(e))
            raise DatabaseError(
                message="Could not update the meal. Please try again.",
                context={"meal_id": str(meal_id)},
            )

        if result.rowcount == 0:
            raise NotFoundOrUnauthorizedError(
                message="Meal not found",
                context={"meal_id": str(meal_id)},
            )
        logger.info("Meal %s updated", meal_id)

    async def delete_meal(
        self, db: AsyncSession, owner_id: uuid.UUID, meal_id: uuid.UUID
    ) -> None:
        """
        Remove an owned meal.

        Raises:
            NotFoundOrUnauthorizedError: no row matched id + owner (→ 400)
        """
        try:
            result = await db.execute(
                delete(Meal)
                .where(Meal.id == meal_id, Meal.user_id == owner_id)
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting meal %s: %s", meal_id, str(e))
            raise DatabaseError(
                message="Could not delete the meal. Please try again.",
                context={"meal_id": str(meal_id)},
            )

        if result.rowcount == 0:
            raise NotFoundOrUnauthorizedError(context={"meal_id": str(meal_id)})
        logger.info("Meal %s deleted", meal_id)

    async def summarize(self, db: AsyncSession, owner_id: uuid.UUID) -> MealSummary:
        """
        Counts and the on-diet listing for owner_id.

        One owner-scoped read feeds every figure, so the diet and non-diet
        counts always add up to the total.
        """
        meals = await self.list_meals(db, owner_id)
        on_diet = [meal for meal in meals if meal.is_on_diet]

        return MealSummary(
            count_all_meals=len(meals),
            diet_meals=len(on_diet),
            beston_diet_meals=[MealResponse.model_validate(meal) for meal in on_diet],
            non_diet_meals=len(meals) - len(on_diet),
        )


meal_service = MealService()
