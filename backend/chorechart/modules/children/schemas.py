from pydantic import BaseModel, field_validator

from chorechart.core.schemas import PartialParams, PermittedParams, RejectNull, RequiredText
from chorechart.modules.chores.schemas import ChoreOut


class ChildOut(BaseModel):
    id: int
    name: str
    first_name: str
    last_name: str
    points_earned: int
    active: bool
    chores: list[ChoreOut]


class ChildCreate(PermittedParams):
    first_name: RequiredText
    last_name: RequiredText
    active: bool = True


class ChildUpdate(PartialParams):
    first_name: RequiredText | None = None
    last_name: RequiredText | None = None
    active: bool | None = None

    @field_validator("first_name", "last_name", "active")
    @classmethod
    def RejectNullFields(cls, value):
        return RejectNull(value)
