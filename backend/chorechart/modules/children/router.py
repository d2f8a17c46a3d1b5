import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import ProgrammingError
from sqlalchemy.orm import Session

from chorechart.core.errors import RaiseHttpForRecordError, RecordNotFoundError
from chorechart.core.schemas import BodyDocs, PermittedBody
from chorechart.db import GetDb
from chorechart.modules.auth.deps import RequireApiToken, UserContext
from chorechart.modules.children.models import Child
from chorechart.modules.children.schemas import ChildCreate, ChildOut, ChildUpdate
from chorechart.modules.children.services import (
    CHILD_PARAM_DESCRIPTIONS,
    CreateChild,
    DeleteChild,
    GetChild,
    ListChildren,
    UpdateChild,
)
from chorechart.modules.chores.serializers import BuildChoreOut

router = APIRouter(prefix="/children", tags=["children"])
logger = logging.getLogger("children")

NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"description": "Child not found"}}
INVALID_RESPONSE = {status.HTTP_422_UNPROCESSABLE_ENTITY: {"description": "Field errors, e.g. {\"first_name\": [\"...\"]}"}}


def _handle_db_error(exc: Exception) -> None:
    logger.exception("children database error")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Storage not initialized. Run alembic upgrade head.",
    ) from exc


def _BuildChildOut(child: Child) -> ChildOut:
    return ChildOut(
        id=child.Id,
        name=child.Name,
        first_name=child.FirstName,
        last_name=child.LastName,
        points_earned=child.PointsEarned,
        active=child.IsActive,
        chores=[BuildChoreOut(chore) for chore in child.Chores],
    )


@router.get("", response_model=list[ChildOut], summary="Fetches all Children", description="This lists all the children")
def ListChildItems(
    active: str | None = Query(default=None, description=CHILD_PARAM_DESCRIPTIONS["active"]),
    alphabetical: str | None = Query(default=None, description=CHILD_PARAM_DESCRIPTIONS["alphabetical"]),
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> list[ChildOut]:
    try:
        children = ListChildren(db, {"active": active, "alphabetical": alphabetical})
        return [_BuildChildOut(child) for child in children]
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.get(
    "/{child_id}",
    response_model=ChildOut,
    summary="Shows one Child",
    description="This lists details of one child",
    responses=NOT_FOUND_RESPONSE,
)
def ShowChildItem(
    child_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> ChildOut:
    try:
        return _BuildChildOut(GetChild(db, child_id))
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.post(
    "",
    response_model=ChildOut,
    status_code=status.HTTP_201_CREATED,
    summary="Creates a new Child",
    responses=INVALID_RESPONSE,
    openapi_extra=BodyDocs(ChildCreate),
)
def CreateChildItem(
    request: Request,
    response: Response,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
    payload: ChildCreate = Depends(PermittedBody(ChildCreate)),
) -> ChildOut:
    try:
        child = CreateChild(db, payload.Values())
        logger.info("child created id=%s user=%s", child.Id, user.Id)
        response.headers["Location"] = f"{request.url.path.rstrip('/')}/{child.Id}"
        return _BuildChildOut(child)
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.patch(
    "/{child_id}",
    response_model=ChildOut,
    summary="Updates an existing Child",
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
    openapi_extra=BodyDocs(ChildUpdate),
)
@router.put(
    "/{child_id}",
    response_model=ChildOut,
    summary="Updates an existing Child",
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
    openapi_extra=BodyDocs(ChildUpdate),
)
def UpdateChildItem(
    child_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
    payload: ChildUpdate = Depends(PermittedBody(ChildUpdate)),
) -> ChildOut:
    try:
        child = UpdateChild(db, child_id, payload.Values())
        logger.info("child updated id=%s user=%s", child.Id, user.Id)
        return _BuildChildOut(child)
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.delete(
    "/{child_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deletes an existing Child",
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
)
def DeleteChildItem(
    child_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> None:
    try:
        DeleteChild(db, child_id)
        logger.info("child deleted id=%s user=%s", child_id, user.Id)
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)
