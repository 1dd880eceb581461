"""
Daily Diet Backend — User Request/Response Schemas
====================================================

What:  Pydantic models for POST /users.
"""

from pydantic import BaseModel, ConfigDict, Field


class UserCreateRequest(BaseModel):
    """
    Registration body.

    email is the unique contact address; it is matched exactly, so
    "A@x.com" and "a@x.com" are different users.
    """

    model_config = ConfigDict(strict=True)

    username: str = Field(min_length=1, description="Display name")
    email: str = Field(min_length=1, description="Unique contact address")


class UserCreatedResponse(BaseModel):
    status: str = Field(default="success")
