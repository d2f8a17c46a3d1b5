from datetime import date
from typing import Mapping

from sqlalchemy.orm import Session

from chorechart.core.errors import RecordInvalidError
from chorechart.core.query_filters import ApplyQueryFilters, Ordering, ParamDescriptions, StatusFilter
from chorechart.core.records import AssignPermitted, CommitRecord, DeleteRecord, FindRecord
from chorechart.modules.children.models import Child
from chorechart.modules.chores.models import Chore
from chorechart.modules.tasks.models import Task

MISSING_REFERENCE_MESSAGE = "must exist"

CHORE_COLUMNS = {
    "child_id": "ChildId",
    "task_id": "TaskId",
    "due_on": "DueOn",
    "completed": "IsCompleted",
}

CHORE_FILTERS = [
    StatusFilter(
        Param="done",
        WhenTrue=lambda query: query.filter(Chore.IsCompleted == True),
        WhenFalse=lambda query: query.filter(Chore.IsCompleted == False),
        Description="Filter on whether or not the chore is done",
    ),
    StatusFilter(
        Param="upcoming",
        WhenTrue=lambda query: query.filter(Chore.DueOn >= date.today()),
        WhenFalse=lambda query: query.filter(Chore.DueOn < date.today()),
        Description="Filter on whether or not the chore is upcoming",
    ),
]

CHORE_ORDERINGS = [
    Ordering(
        Param="by_task",
        Columns=(Task.Name.asc(),),
        Joins=(Chore.Task,),
        Description="Order chores by task",
    ),
    Ordering(
        Param="chronological",
        Columns=(Chore.DueOn.asc(), Chore.IsCompleted.asc()),
        Description="Order chores by chronological",
    ),
]

CHORE_PARAM_DESCRIPTIONS = ParamDescriptions(CHORE_FILTERS, CHORE_ORDERINGS)


def ListChores(db: Session, params: Mapping[str, str | None]) -> list[Chore]:
    query = ApplyQueryFilters(db.query(Chore), params, CHORE_FILTERS, CHORE_ORDERINGS, Chore.Id.asc())
    return query.all()


def GetChore(db: Session, chore_id: int) -> Chore:
    return FindRecord(db, Chore, chore_id, "Chore")


def _EnsureReferencesExist(db: Session, chore: Chore) -> None:
    errors: dict[str, list[str]] = {}
    if chore.ChildId is None or db.get(Child, chore.ChildId) is None:
        errors["child"] = [MISSING_REFERENCE_MESSAGE]
    if chore.TaskId is None or db.get(Task, chore.TaskId) is None:
        errors["task"] = [MISSING_REFERENCE_MESSAGE]
    if errors:
        raise RecordInvalidError(errors)


def CreateChore(db: Session, values: dict) -> Chore:
    chore = Chore()
    AssignPermitted(chore, values, CHORE_COLUMNS)
    _EnsureReferencesExist(db, chore)
    return CommitRecord(db, chore)


def UpdateChore(db: Session, chore_id: int, values: dict) -> Chore:
    chore = GetChore(db, chore_id)
    AssignPermitted(chore, values, CHORE_COLUMNS)
    try:
        _EnsureReferencesExist(db, chore)
    except RecordInvalidError:
        db.rollback()
        raise
    return CommitRecord(db, chore)


def DeleteChore(db: Session, chore_id: int) -> None:
    DeleteRecord(db, GetChore(db, chore_id))
