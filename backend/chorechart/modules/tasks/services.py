from typing import Mapping

from sqlalchemy.orm import Session

from chorechart.core.config import GetDependentChoresPolicy
from chorechart.core.query_filters import ApplyQueryFilters, Ordering, ParamDescriptions, StatusFilter
from chorechart.core.records import AssignPermitted, CommitRecord, DeleteWithDependents, FindRecord
from chorechart.modules.tasks.models import Task

TASK_COLUMNS = {
    "name": "Name",
    "points": "Points",
    "active": "IsActive",
}

TASK_FILTERS = [
    StatusFilter(
        Param="active",
        WhenTrue=lambda query: query.filter(Task.IsActive == True),
        WhenFalse=lambda query: query.filter(Task.IsActive == False),
        Description="Filter on whether or not the task is active",
    ),
]

TASK_ORDERINGS = [
    Ordering(Param="alphabetical", Columns=(Task.Name.asc(),), Description="Order tasks by alphabetical"),
]

TASK_PARAM_DESCRIPTIONS = ParamDescriptions(TASK_FILTERS, TASK_ORDERINGS)


def ListTasks(db: Session, params: Mapping[str, str | None]) -> list[Task]:
    query = ApplyQueryFilters(db.query(Task), params, TASK_FILTERS, TASK_ORDERINGS, Task.Id.asc())
    return query.all()


def GetTask(db: Session, task_id: int) -> Task:
    return FindRecord(db, Task, task_id, "Task")


def CreateTask(db: Session, values: dict) -> Task:
    task = Task()
    AssignPermitted(task, values, TASK_COLUMNS)
    return CommitRecord(db, task)


def UpdateTask(db: Session, task_id: int, values: dict) -> Task:
    task = GetTask(db, task_id)
    AssignPermitted(task, values, TASK_COLUMNS)
    return CommitRecord(db, task)


def DeleteTask(db: Session, task_id: int) -> None:
    task = GetTask(db, task_id)
    DeleteWithDependents(db, task, list(task.Chores), GetDependentChoresPolicy())
