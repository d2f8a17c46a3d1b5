from pydantic import BaseModel, Field, field_validator

from chorechart.core.schemas import PartialParams, PermittedParams, RejectNull, RequiredText


class TaskOut(BaseModel):
    id: int
    name: str
    points: int
    active: bool


class TaskCreate(PermittedParams):
    name: RequiredText
    points: int = Field(ge=0)
    active: bool = True


class TaskUpdate(PartialParams):
    name: RequiredText | None = None
    points: int | None = Field(default=None, ge=0)
    active: bool | None = None

    @field_validator("name", "points", "active")
    @classmethod
    def RejectNullFields(cls, value):
        return RejectNull(value)
