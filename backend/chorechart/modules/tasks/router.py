import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import ProgrammingError
from sqlalchemy.orm import Session

from chorechart.core.errors import RaiseHttpForRecordError, RecordNotFoundError
from chorechart.core.schemas import BodyDocs, PermittedBody
from chorechart.db import GetDb
from chorechart.modules.auth.deps import RequireApiToken, UserContext
from chorechart.modules.tasks.models import Task
from chorechart.modules.tasks.schemas import TaskCreate, TaskOut, TaskUpdate
from chorechart.modules.tasks.services import (
    TASK_PARAM_DESCRIPTIONS,
    CreateTask,
    DeleteTask,
    GetTask,
    ListTasks,
    UpdateTask,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])
logger = logging.getLogger("tasks")

NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"description": "Task not found"}}
INVALID_RESPONSE = {status.HTTP_422_UNPROCESSABLE_ENTITY: {"description": "Field errors, e.g. {\"name\": [\"...\"]}"}}


def _handle_db_error(exc: Exception) -> None:
    logger.exception("tasks database error")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Storage not initialized. Run alembic upgrade head.",
    ) from exc


def _BuildTaskOut(task: Task) -> TaskOut:
    return TaskOut(id=task.Id, name=task.Name, points=task.Points, active=task.IsActive)


@router.get("", response_model=list[TaskOut], summary="Fetches all Tasks", description="This lists all the tasks")
def ListTaskItems(
    active: str | None = Query(default=None, description=TASK_PARAM_DESCRIPTIONS["active"]),
    alphabetical: str | None = Query(default=None, description=TASK_PARAM_DESCRIPTIONS["alphabetical"]),
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> list[TaskOut]:
    try:
        tasks = ListTasks(db, {"active": active, "alphabetical": alphabetical})
        return [_BuildTaskOut(task) for task in tasks]
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Shows one Task",
    description="This lists details of one task",
    responses=NOT_FOUND_RESPONSE,
)
def ShowTaskItem(
    task_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> TaskOut:
    try:
        return _BuildTaskOut(GetTask(db, task_id))
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Creates a new Task",
    responses=INVALID_RESPONSE,
    openapi_extra=BodyDocs(TaskCreate),
)
def CreateTaskItem(
    request: Request,
    response: Response,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
    payload: TaskCreate = Depends(PermittedBody(TaskCreate)),
) -> TaskOut:
    try:
        task = CreateTask(db, payload.Values())
        logger.info("task created id=%s user=%s", task.Id, user.Id)
        response.headers["Location"] = f"{request.url.path.rstrip('/')}/{task.Id}"
        return _BuildTaskOut(task)
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.patch(
    "/{task_id}",
    response_model=TaskOut,
    summary="Updates an existing Task",
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
    openapi_extra=BodyDocs(TaskUpdate),
)
@router.put(
    "/{task_id}",
    response_model=TaskOut,
    summary="Updates an existing Task",
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
    openapi_extra=BodyDocs(TaskUpdate),
)
def UpdateTaskItem(
    task_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
    payload: TaskUpdate = Depends(PermittedBody(TaskUpdate)),
) -> TaskOut:
    try:
        task = UpdateTask(db, task_id, payload.Values())
        logger.info("task updated id=%s user=%s", task.Id, user.Id)
        return _BuildTaskOut(task)
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deletes an existing Task",
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
)
def DeleteTaskItem(
    task_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> None:
    try:
        DeleteTask(db, task_id)
        logger.info("task deleted id=%s user=%s", task_id, user.Id)
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)
