import logging
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic import BaseModel
from sqlalchemy.exc import ProgrammingError
from sqlalchemy.orm import Session

from chorechart.core.errors import RaiseHttpForRecordError, RecordNotFoundError
from chorechart.core.schemas import BodyDocs, PermittedBody
from chorechart.db import GetDb
from chorechart.modules.auth.deps import RequireApiToken, UserContext
from chorechart.modules.chores.models import Chore
from chorechart.modules.chores.schemas import ChoreCreate, ChoreOut, ChoreUpdate, ChoreV2Out
from chorechart.modules.chores.serializers import BuildChoreOut, BuildChoreV2Out
from chorechart.modules.chores.services import (
    CHORE_PARAM_DESCRIPTIONS,
    CreateChore,
    DeleteChore,
    GetChore,
    ListChores,
    UpdateChore,
)

logger = logging.getLogger("chores")

NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"description": "Chore not found"}}
INVALID_RESPONSE = {status.HTTP_422_UNPROCESSABLE_ENTITY: {"description": "Field errors, e.g. {\"task\": [\"must exist\"]}"}}


def _handle_db_error(exc: Exception) -> None:
    logger.exception("chores database error")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Storage not initialized. Run alembic upgrade head.",
    ) from exc


def BuildChoresRouter(build_out: Callable[[Chore], BaseModel], out_model: type[BaseModel]) -> APIRouter:
    """Chores CRUD routes rendering each chore with `build_out`.

    The unversioned API embeds a task preview next to `child_id`; v2 embeds
    reduced child and task views instead.
    """
    router = APIRouter(prefix="/chores", tags=["chores"])

    @router.get("", response_model=list[out_model], summary="Fetches all Chores", description="This lists all the chores")
    def ListChoreItems(
        done: str | None = Query(default=None, description=CHORE_PARAM_DESCRIPTIONS["done"]),
        upcoming: str | None = Query(default=None, description=CHORE_PARAM_DESCRIPTIONS["upcoming"]),
        by_task: str | None = Query(default=None, description=CHORE_PARAM_DESCRIPTIONS["by_task"]),
        chronological: str | None = Query(default=None, description=CHORE_PARAM_DESCRIPTIONS["chronological"]),
        db: Session = Depends(GetDb),
        user: UserContext = Depends(RequireApiToken),
    ):
        try:
            chores = ListChores(
                db,
                {"done": done, "upcoming": upcoming, "by_task": by_task, "chronological": chronological},
            )
            return [build_out(chore) for chore in chores]
        except ProgrammingError as exc:
            _handle_db_error(exc)

    @router.get(
        "/{chore_id}",
        response_model=out_model,
        summary="Shows one Chore",
        description="This lists details of one chore",
        responses=NOT_FOUND_RESPONSE,
    )
    def ShowChoreItem(
        chore_id: int,
        db: Session = Depends(GetDb),
        user: UserContext = Depends(RequireApiToken),
    ):
        try:
            return build_out(GetChore(db, chore_id))
        except RecordNotFoundError as exc:
            RaiseHttpForRecordError(exc)
        except ProgrammingError as exc:
            _handle_db_error(exc)

    @router.post(
        "",
        response_model=out_model,
        status_code=status.HTTP_201_CREATED,
        summary="Creates a new Chore",
        responses=INVALID_RESPONSE,
        openapi_extra=BodyDocs(ChoreCreate),
    )
    def CreateChoreItem(
        request: Request,
        response: Response,
        db: Session = Depends(GetDb),
        user: UserContext = Depends(RequireApiToken),
        payload: ChoreCreate = Depends(PermittedBody(ChoreCreate)),
    ):
        try:
            chore = CreateChore(db, payload.Values())
            logger.info("chore created id=%s user=%s", chore.Id, user.Id)
            response.headers["Location"] = f"{request.url.path.rstrip('/')}/{chore.Id}"
            return build_out(chore)
        except ProgrammingError as exc:
            _handle_db_error(exc)

    @router.patch(
        "/{chore_id}",
        response_model=out_model,
        summary="Updates an existing Chore",
        responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
        openapi_extra=BodyDocs(ChoreUpdate),
    )
    @router.put(
        "/{chore_id}",
        response_model=out_model,
        summary="Updates an existing Chore",
        responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
        openapi_extra=BodyDocs(ChoreUpdate),
    )
    def UpdateChoreItem(
        chore_id: int,
        db: Session = Depends(GetDb),
        user: UserContext = Depends(RequireApiToken),
        payload: ChoreUpdate = Depends(PermittedBody(ChoreUpdate)),
    ):
        try:
            chore = UpdateChore(db, chore_id, payload.Values())
            logger.info("chore updated id=%s user=%s", chore.Id, user.Id)
            return build_out(chore)
        except RecordNotFoundError as exc:
            RaiseHttpForRecordError(exc)
        except ProgrammingError as exc:
            _handle_db_error(exc)

    @router.delete(
        "/{chore_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Deletes an existing Chore",
        responses=NOT_FOUND_RESPONSE,
    )
    def DeleteChoreItem(
        chore_id: int,
        db: Session = Depends(GetDb),
        user: UserContext = Depends(RequireApiToken),
    ) -> None:
        try:
            DeleteChore(db, chore_id)
            logger.info("chore deleted id=%s user=%s", chore_id, user.Id)
        except RecordNotFoundError as exc:
            RaiseHttpForRecordError(exc)
        except ProgrammingError as exc:
            _handle_db_error(exc)

    return router


router = BuildChoresRouter(BuildChoreOut, ChoreOut)
router_v2 = BuildChoresRouter(BuildChoreV2Out, ChoreV2Out)
