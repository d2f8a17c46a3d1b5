import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import ProgrammingError
from sqlalchemy.orm import Session

from chorechart.core.errors import RaiseHttpForRecordError, RecordNotFoundError
from chorechart.core.schemas import BodyDocs, PermittedBody
from chorechart.db import GetDb
from chorechart.modules.auth.deps import RequireApiToken, UserContext
from chorechart.modules.auth.models import User
from chorechart.modules.users.schemas import ApiKeyOut, UserCreate, UserCreatedOut, UserOut, UserUpdate
from chorechart.modules.users.services import (
    CreateUser,
    DeleteUser,
    GetUser,
    ListUsers,
    RotateApiKey,
    UpdateUser,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger("users")

NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"description": "User not found"}}
INVALID_RESPONSE = {status.HTTP_422_UNPROCESSABLE_ENTITY: {"description": "Field errors, e.g. {\"username\": [\"...\"]}"}}


def _handle_db_error(exc: Exception) -> None:
    logger.exception("users database error")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Storage not initialized. Run alembic upgrade head.",
    ) from exc


def _BuildUserOut(user: User) -> UserOut:
    return UserOut(id=user.Id, username=user.Username, created_at=user.CreatedAt)


@router.get("", response_model=list[UserOut], summary="Fetches all Users")
def ListUserItems(
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> list[UserOut]:
    try:
        return [_BuildUserOut(record) for record in ListUsers(db)]
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.get("/{user_id}", response_model=UserOut, summary="Shows one User", responses=NOT_FOUND_RESPONSE)
def ShowUserItem(
    user_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> UserOut:
    try:
        return _BuildUserOut(GetUser(db, user_id))
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.post(
    "",
    response_model=UserCreatedOut,
    status_code=status.HTTP_201_CREATED,
    summary="Creates a new User",
    description="The response carries the new user's api key",
    responses=INVALID_RESPONSE,
    openapi_extra=BodyDocs(UserCreate),
)
def CreateUserItem(
    request: Request,
    response: Response,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
    payload: UserCreate = Depends(PermittedBody(UserCreate)),
) -> UserCreatedOut:
    try:
        record = CreateUser(db, payload.Values())
        logger.info("user created id=%s user=%s", record.Id, user.Id)
        response.headers["Location"] = f"{request.url.path.rstrip('/')}/{record.Id}"
        return UserCreatedOut(
            id=record.Id,
            username=record.Username,
            created_at=record.CreatedAt,
            api_key=record.ApiKey,
        )
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.patch(
    "/{user_id}",
    response_model=UserOut,
    summary="Updates an existing User",
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
    openapi_extra=BodyDocs(UserUpdate),
)
@router.put(
    "/{user_id}",
    response_model=UserOut,
    summary="Updates an existing User",
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
    openapi_extra=BodyDocs(UserUpdate),
)
def UpdateUserItem(
    user_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
    payload: UserUpdate = Depends(PermittedBody(UserUpdate)),
) -> UserOut:
    try:
        record = UpdateUser(db, user_id, payload.Values())
        logger.info("user updated id=%s user=%s", record.Id, user.Id)
        return _BuildUserOut(record)
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deletes an existing User",
    responses=NOT_FOUND_RESPONSE,
)
def DeleteUserItem(
    user_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> None:
    try:
        DeleteUser(db, user_id)
        logger.info("user deleted id=%s user=%s", user_id, user.Id)
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)


@router.post(
    "/{user_id}/api_key",
    response_model=ApiKeyOut,
    summary="Rotates a User's api key",
    description="The previous key stops working immediately",
    responses=NOT_FOUND_RESPONSE,
)
def RotateUserApiKey(
    user_id: int,
    db: Session = Depends(GetDb),
    user: UserContext = Depends(RequireApiToken),
) -> ApiKeyOut:
    try:
        record = RotateApiKey(db, user_id)
        return ApiKeyOut(api_key=record.ApiKey)
    except RecordNotFoundError as exc:
        RaiseHttpForRecordError(exc)
    except ProgrammingError as exc:
        _handle_db_error(exc)
