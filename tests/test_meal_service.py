"""
Daily Diet Backend — Meal Service Unit Tests
==============================================

What:  Tests owner-scoped CRUD and the summary against a real (in-memory)
       database, plus storage-failure translation with a mock session.

What we test:
    ✅ create → get round-trip; update → get reflects new values
    ✅ Another owner cannot see, update or delete a meal
    ✅ Delete of unknown or already-deleted meals fails the same way
    ✅ list returns only the owner's meals
    ✅ Summary counts add up and list only on-diet meals
"""

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from dailydiet.exceptions import DatabaseError, NotFoundError, NotFoundOrUnauthorizedError
from dailydiet.models.user import User
from dailydiet.services.meal_service import MealService


async def make_user(db, email: str) -> User:
    user = User(username=email.split("@")[0], email=email, session_id=uuid.uuid4())
    db.add(user)
    await db.flush()
    return user


class TestMealCrud:

    def setup_method(self):
        self.service = MealService()

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, db_session):
        owner = await make_user(db_session, "a@x.com")

        created = await self.service.create_meal(db_session, owner.id, "Lunch", "rice", True)
        fetched = await self.service.get_meal(db_session, owner.id, created.id)

        assert fetched.name == "Lunch"
        assert fetched.description == "rice"
        assert fetched.is_on_diet is True
        assert fetched.user_id == owner.id
        assert fetched.created_at is not None

    @pytest.mark.asyncio
    async def test_create_defaults_to_off_diet(self, db_session):
        owner = await make_user(db_session, "a@x.com")

        meal = await self.service.create_meal(db_session, owner.id, "Cake", "chocolate")

        assert meal.is_on_diet is False

    @pytest.mark.asyncio
    async def test_get_is_not_found_for_other_owner(self, db_session):
        owner = await make_user(db_session, "a@x.com")
        intruder = await make_user(db_session, "b@x.com")
        meal = await self.service.create_meal(db_session, owner.id, "Lunch", "rice", True)

        with pytest.raises(NotFoundError):
            await self.service.get_meal(db_session, intruder.id, meal.id)

    @pytest.mark.asyncio
    async def test_get_unknown_id_is_not_found(self, db_session):
        owner = await make_user(db_session, "a@x.com")

        with pytest.raises(NotFoundError):
            await self.service.get_meal(db_session, owner.id, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_update_then_get_reflects_new_values(self, db_session):
        owner = await make_user(db_session, "a@x.com")
        meal = await self.service.create_meal(db_session, owner.id, "Lunch", "rice", True)

        await self.service.update_meal(db_session, owner.id, meal.id, "Dinner", "pizza", False)
        fetched = await self.service.get_meal(db_session, owner.id, meal.id)

        assert fetched.name == "Dinner"
        assert fetched.description == "pizza"
        assert fetched.is_on_diet is False
        assert fetched.user_id == owner.id

    @pytest.mark.asyncio
    async def test_update_by_other_owner_fails_and_changes_nothing(self, db_session):
        owner = await make_user(db_session, "a@x.com")
        intruder = await make_user(db_session, "b@x.com")
        meal = await self.service.create_meal(db_session, owner.id, "Lunch", "rice", True)

        with pytest.raises(NotFoundOrUnauthorizedError):
            await self.service.update_meal(db_session, intruder.id, meal.id, "Hacked", "x", False)

        fetched = await self.service.get_meal(db_session, owner.id, meal.id)
        assert fetched.name == "Lunch"

    @pytest.mark.asyncio
    async def test_update_unknown_id_fails(self, db_session):
        owner = await make_user(db_session, "a@x.com")

        with pytest.raises(NotFoundOrUnauthorizedError):
            await self.service.update_meal(db_session, owner.id, uuid.uuid4(), "a", "b", True)

    @pytest.mark.asyncio
    async def test_delete_succeeds_once_then_fails(self, db_session):
        owner = await make_user(db_session, "a@x.com")
        meal = await self.service.create_meal(db_session, owner.id, "Lunch", "rice", True)

        await self.service.delete_meal(db_session, owner.id, meal.id)

        with pytest.raises(NotFoundOrUnauthorizedError):
            await self.service.delete_meal(db_session, owner.id, meal.id)
        with pytest.raises(NotFoundError):
            await self.service.get_meal(db_session, owner.id, meal.id)
        with pytest.raises(NotFoundOrUnauthorizedError):
            await self.service.update_meal(db_session, owner.id, meal.id, "a", "b", True)

    @pytest.mark.asyncio
    async def test_delete_unknown_id_fails(self, db_session):
        owner = await make_user(db_session, "a@x.com")

        with pytest.raises(NotFoundOrUnauthorizedError) as exc_info:
            await self.service.delete_meal(db_session, owner.id, uuid.uuid4())
        assert exc_info.value.message == "Meal not found or unauthorized"

    @pytest.mark.asyncio
    async def test_delete_by_other_owner_keeps_meal(self, db_session):
        owner = await make_user(db_session, "a@x.com")
        intruder = await make_user(db_session, "b@x.com")
        meal = await self.service.create_meal(db_session, owner.id, "Lunch", "rice", True)

        with pytest.raises(NotFoundOrUnauthorizedError):
            await self.service.delete_meal(db_session, intruder.id, meal.id)

        assert (await self.service.get_meal(db_session, owner.id, meal.id)).id == meal.id

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_owner(self, db_session):
        owner = await make_user(db_session, "a@x.com")
        other = await make_user(db_session, "b@x.com")
        mine = {
            (await self.service.create_meal(db_session, owner.id, f"Meal {i}", "x", i % 2 == 0)).id
            for i in range(3)
        }
        await self.service.create_meal(db_session, other.id, "Not mine", "x", True)

        meals = await self.service.list_meals(db_session, owner.id)

        assert {meal.id for meal in meals} == mine
        assert all(meal.user_id == owner.id for meal in meals)

    @pytest.mark.asyncio
    async def test_list_storage_failure_is_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(DatabaseError):
            await self.service.list_meals(mock_db_session, uuid.uuid4())


class TestMealSummary:

    def setup_method(self):
        self.service = MealService()

    @pytest.mark.asyncio
    async def test_summary_of_no_meals(self, db_session):
        owner = await make_user(db_session, "a@x.com")

        summary = await self.service.summarize(db_session, owner.id)

        assert summary.count_all_meals == 0
        assert summary.diet_meals == 0
        assert summary.non_diet_meals == 0
        assert summary.beston_diet_meals == []

    @pytest.mark.asyncio
    async def test_summary_partitions_by_diet_flag(self, db_session):
        owner = await make_user(db_session, "a@x.com")
        other = await make_user(db_session, "b@x.com")
        flags = [True, False, True, True, False]
        for i, flag in enumerate(flags):
            await self.service.create_meal(db_session, owner.id, f"Meal {i}", "x", flag)
        await self.service.create_meal(db_session, other.id, "Other", "x", True)

        summary = await self.service.summarize(db_session, owner.id)

        assert summary.count_all_meals == 5
        assert summary.diet_meals == 3
        assert summary.non_diet_meals == 2
        assert summary.diet_meals + summary.non_diet_meals == summary.count_all_meals
        assert len(summary.beston_diet_meals) == 3
        assert all(meal.is_on_diet for meal in summary.beston_diet_meals)
        assert "Other" not in {meal.name for meal in summary.beston_diet_meals}
