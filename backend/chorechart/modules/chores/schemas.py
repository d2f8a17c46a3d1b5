from datetime import date

from pydantic import BaseModel, field_validator

from chorechart.core.schemas import PartialParams, PermittedParams, RejectNull


class TaskPreviewOut(BaseModel):
    id: int
    name: str
    points: int


class ChoreChildOut(BaseModel):
    id: int
    name: str


class ChoreTaskOut(BaseModel):
    id: int
    name: str
    points: int


class ChoreOut(BaseModel):
    id: int
    child_id: int
    task: TaskPreviewOut
    due_on: date
    completed: bool


class ChoreV2Out(BaseModel):
    id: int
    child: ChoreChildOut
    task: ChoreTaskOut
    due_on: date
    completed: bool


class ChoreCreate(PermittedParams):
    child_id: int
    task_id: int
    due_on: date
    completed: bool = False


class ChoreUpdate(PartialParams):
    child_id: int | None = None
    task_id: int | None = None
    due_on: date | None = None
    completed: bool | None = None

    @field_validator("child_id", "task_id", "due_on", "completed")
    @classmethod
    def RejectNullFields(cls, value):
        return RejectNull(value)
