from typing import Mapping

from sqlalchemy.orm import Session

from chorechart.core.config import GetDependentChoresPolicy
from chorechart.core.query_filters import ApplyQueryFilters, Ordering, ParamDescriptions, StatusFilter
from chorechart.core.records import AssignPermitted, CommitRecord, DeleteWithDependents, FindRecord
from chorechart.modules.children.models import Child

CHILD_COLUMNS = {
    "first_name": "FirstName",
    "last_name": "LastName",
    "active": "IsActive",
}

CHILD_FILTERS = [
    StatusFilter(
        Param="active",
        WhenTrue=lambda query: query.filter(Child.IsActive == True),
        WhenFalse=lambda query: query.filter(Child.IsActive == False),
        Description="Filter on whether or not the child is active",
    ),
]

CHILD_ORDERINGS = [
    Ordering(
        Param="alphabetical",
        Columns=(Child.LastName.asc(), Child.FirstName.asc()),
        Description="Order children by alphabetical",
    ),
]

CHILD_PARAM_DESCRIPTIONS = ParamDescriptions(CHILD_FILTERS, CHILD_ORDERINGS)


def ListChildren(db: Session, params: Mapping[str, str | None]) -> list[Child]:
    query = ApplyQueryFilters(db.query(Child), params, CHILD_FILTERS, CHILD_ORDERINGS, Child.Id.asc())
    return query.all()


def GetChild(db: Session, child_id: int) -> Child:
    return FindRecord(db, Child, child_id, "Child")


def CreateChild(db: Session, values: dict) -> Child:
    child = Child()
    AssignPermitted(child, values, CHILD_COLUMNS)
    return CommitRecord(db, child)


def UpdateChild(db: Session, child_id: int, values: dict) -> Child:
    child = GetChild(db, child_id)
    AssignPermitted(child, values, CHILD_COLUMNS)
    return CommitRecord(db, child)


def DeleteChild(db: Session, child_id: int) -> None:
    child = GetChild(db, child_id)
    DeleteWithDependents(db, child, list(child.Chores), GetDependentChoresPolicy())
