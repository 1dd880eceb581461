"""
Daily Diet Backend — Meal Request/Response Schemas
====================================================

What:  Pydantic models defining the meal API contract.
Why:   Input is rejected before any storage call; output never exposes the
       owning user reference.
How:   Python attributes are snake_case; the wire names (`isOnDiet`,
       `countAllMeals`, ...) are aliases. FastAPI serializes response models
       by alias, and `populate_by_name` lets services build them by attribute.

Request models are strict: `isOnDiet` must be a JSON boolean and text fields
must be JSON strings.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class MealCreateRequest(BaseModel):
    """Body of POST /meals. `isOnDiet` defaults to false."""

    model_config = ConfigDict(strict=True, populate_by_name=True)

    name: str = Field(description="Meal name")
    description: str = Field(description="What was eaten")
    is_on_diet: bool = Field(
        default=False,
        alias="isOnDiet",
        description="Whether the meal fits the diet",
    )


class MealUpdateRequest(BaseModel):
    """Body of PUT /meals/{id}. Full replace: every field is required."""

    model_config = ConfigDict(strict=True, populate_by_name=True)

    name: str
    description: str
    is_on_diet: bool = Field(alias="isOnDiet")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class MealResponse(BaseModel):
    """A meal as exposed to its owner. user_id is intentionally absent."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    name: str
    description: str
    created_at: datetime
    is_on_diet: bool = Field(alias="isOnDiet")


class MealListResponse(BaseModel):
    """GET /meals envelope."""

    status: str = Field(default="success")
    data: List[MealResponse]


class MealDetailResponse(BaseModel):
    """GET /meals/{id} envelope."""

    data: MealResponse


class MealDeletedResponse(BaseModel):
    """DELETE /meals/{id} confirmation."""

    message: str
    id: uuid.UUID


class MealSummary(BaseModel):
    """
    Owner-scoped aggregation.

    diet_meals + non_diet_meals == count_all_meals always holds, because all
    figures are derived from one read of the owner's meals.
    """

    model_config = ConfigDict(populate_by_name=True)

    count_all_meals: int = Field(alias="countAllMeals")
    diet_meals: int = Field(alias="dietMeals")
    beston_diet_meals: List[MealResponse] = Field(alias="bestonDietMeals")
    non_diet_meals: int = Field(alias="nonDietMeals")


class MealSummaryResponse(BaseModel):
    """GET /meals/summary envelope."""

    dados: MealSummary
