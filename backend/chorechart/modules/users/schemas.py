from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from chorechart.core.schemas import PartialParams, PermittedParams, RejectNull, RequiredText


class UserOut(BaseModel):
    id: int
    username: str
    created_at: datetime


class UserCreatedOut(UserOut):
    api_key: str


class ApiKeyOut(BaseModel):
    api_key: str


class UserCreate(PermittedParams):
    username: RequiredText
    password: str | None = Field(default=None, min_length=8, max_length=256)


class UserUpdate(PartialParams):
    username: RequiredText | None = None
    password: str | None = Field(default=None, min_length=8, max_length=256)

    @field_validator("username", "password")
    @classmethod
    def RejectNullFields(cls, value):
        return RejectNull(value)
