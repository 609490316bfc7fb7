"""Pydantic schemas for account registration."""
from pydantic import BaseModel, Field


class UserCreateSchema(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
