"""
Daily Diet Backend — Meal Route Handlers
==========================================

What:  The /meals resource: create, list, summary, get, update, delete.
How:   Every handler depends on `get_current_user`, so a request without a
       resolvable session is rejected before any owner-scoped query. The
       owner's id is passed explicitly into MealService. Handlers that write
       commit before returning, so a failed commit is answered with a 500.

Route order:
    /meals/summary is declared before /meals/{meal_id} so "summary" is never
    parsed as a meal id.
"""

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dailydiet.database import commit_session, get_db_session
from dailydiet.dependencies import get_current_user
from dailydiet.models.user import User
from dailydiet.schemas.common import ErrorResponse
from dailydiet.schemas.meal import (
    MealCreateRequest,
    MealDeletedResponse,
    MealDetailResponse,
    MealListResponse,
    MealResponse,
    MealSummaryResponse,
    MealUpdateRequest,
)
from dailydiet.services.meal_service import meal_service

router = APIRouter(
    prefix="/meals",
    tags=["Meals"],
    responses={400: {"description": "Missing, invalid or unknown session", "model": ErrorResponse}},
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    summary="Log a meal",
)
async def create_meal(
    payload: MealCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await meal_service.create_meal(
        db=db,
        owner_id=user.id,
        name=payload.name,
        description=payload.description,
        is_on_diet=payload.is_on_diet,
    )
    await commit_session(db)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("", response_model=MealListResponse, summary="List my meals")
async def list_meals(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealListResponse:
    meals = await meal_service.list_meals(db=db, owner_id=user.id)
    return MealListResponse(data=[MealResponse.model_validate(meal) for meal in meals])


@router.get("/summary", response_model=MealSummaryResponse, summary="Diet summary of my meals")
async def meal_summary(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealSummaryResponse:
    summary = await meal_service.summarize(db=db, owner_id=user.id)
    return MealSummaryResponse(dados=summary)


@router.get(
    "/{meal_id}",
    response_model=MealDetailResponse,
    responses={404: {"description": "Meal not found", "model": ErrorResponse}},
    summary="Get one of my meals",
)
async def get_meal(
    meal_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealDetailResponse:
    meal = await meal_service.get_meal(db=db, owner_id=user.id, meal_id=meal_id)
    return MealDetailResponse(data=MealResponse.model_validate(meal))


@router.put(
    "/{meal_id}",
    status_code=status.HTTP_202_ACCEPTED,
    response_class=Response,
    summary="Replace one of my meals",
)
async def update_meal(
    meal_id: uuid.UUID,
    payload: MealUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await meal_service.update_meal(
        db=db,
        owner_id=user.id,
        meal_id=meal_id,
        name=payload.name,
        description=payload.description,
        is_on_diet=payload.is_on_diet,
    )
    await commit_session(db)
    return Response(status_code=status.HTTP_202_ACCEPTED)


@router.delete(
    "/{meal_id}",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=MealDeletedResponse,
    summary="Delete one of my meals",
)
async def delete_meal(
    meal_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MealDeletedResponse:
    await meal_service.delete_meal(db=db, owner_id=user.id, meal_id=meal_id)
    await commit_session(db)
    return MealDeletedResponse(message=f"Meal deleted id: {meal_id}", id=meal_id)
