import logging
from datetime import datetime
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chorechart.core.config import DEPENDENT_POLICY_CASCADE
from chorechart.core.errors import BASE_FIELD, RecordInvalidError, RecordNotFoundError

logger = logging.getLogger("chorechart.records")

DEPENDENT_RECORDS_MESSAGE = "Cannot delete record because dependent chores exist"


def FindRecord(db: Session, model, record_id: int, label: str):
    record = db.get(model, record_id)
    if record is None:
        raise RecordNotFoundError(f"{label} not found")
    return record


def AssignPermitted(record: Any, values: Mapping[str, Any], columns: Mapping[str, str]) -> None:
    """Copy allow-listed request fields onto their mapped ORM attributes."""
    for field_name, value in values.items():
        column = columns.get(field_name)
        if column is None:
            continue
        setattr(record, column, value)


def CommitRecord(db: Session, record: Any, unique_errors: Mapping[str, str] | None = None) -> Any:
    record.UpdatedAt = datetime.utcnow()
    db.add(record)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("integrity error on %s: %s", type(record).__name__, exc.orig)
        message = str(exc.orig).lower()
        for column, field_name in (unique_errors or {}).items():
            if column.lower() in message:
                raise RecordInvalidError({field_name: ["has already been taken"]}) from exc
        raise RecordInvalidError({BASE_FIELD: ["could not be saved"]}) from exc
    db.refresh(record)
    return record


def DeleteRecord(db: Session, record: Any) -> None:
    db.delete(record)
    db.commit()


def DeleteWithDependents(db: Session, record: Any, dependents: list[Any], policy: str) -> None:
    """Delete a parent row, restricting or cascading over its dependent rows."""
    if dependents:
        if policy != DEPENDENT_POLICY_CASCADE:
            raise RecordInvalidError({BASE_FIELD: [DEPENDENT_RECORDS_MESSAGE]})
        for dependent in dependents:
            db.delete(dependent)
        logger.info("cascading delete of %s dependents for %s id=%s", len(dependents), type(record).__name__, record.Id)
    DeleteRecord(db, record)
