import logging

from sqlalchemy.orm import Session

from chorechart.core.errors import BASE_FIELD, RecordInvalidError
from chorechart.core.records import CommitRecord, DeleteRecord, FindRecord
from chorechart.modules.auth.models import User
from chorechart.modules.auth.service import CreateApiKey, HashPassword

logger = logging.getLogger("users")

TAKEN_MESSAGE = "has already been taken"
LAST_USER_MESSAGE = "Cannot delete the last user"
UNIQUE_USER_COLUMNS = {"username": "username"}


def _EnsureUsernameAvailable(db: Session, username: str, user_id: int | None = None) -> None:
    query = db.query(User.Id).filter(User.Username == username)
    if user_id is not None:
        query = query.filter(User.Id != user_id)
    if query.first() is not None:
        raise RecordInvalidError({"username": [TAKEN_MESSAGE]})


def _ApplyUserValues(db: Session, user: User, values: dict) -> None:
    if "username" in values:
        _EnsureUsernameAvailable(db, values["username"], user.Id)
        user.Username = values["username"]
    if values.get("password"):
        user.PasswordHash = HashPassword(values["password"])


def ListUsers(db: Session) -> list[User]:
    return db.query(User).order_by(User.Id.asc()).all()


def GetUser(db: Session, user_id: int) -> User:
    return FindRecord(db, User, user_id, "User")


def CreateUser(db: Session, values: dict) -> User:
    user = User(ApiKey=CreateApiKey())
    _ApplyUserValues(db, user, values)
    return CommitRecord(db, user, unique_errors=UNIQUE_USER_COLUMNS)


def UpdateUser(db: Session, user_id: int, values: dict) -> User:
    user = GetUser(db, user_id)
    try:
        _ApplyUserValues(db, user, values)
    except RecordInvalidError:
        db.rollback()
        raise
    return CommitRecord(db, user, unique_errors=UNIQUE_USER_COLUMNS)


def DeleteUser(db: Session, user_id: int) -> None:
    user = GetUser(db, user_id)
    if db.query(User.Id).filter(User.Id != user.Id).first() is None:
        raise RecordInvalidError({BASE_FIELD: [LAST_USER_MESSAGE]})
    DeleteRecord(db, user)


def RotateApiKey(db: Session, user_id: int) -> User:
    user = GetUser(db, user_id)
    user.ApiKey = CreateApiKey()
    user = CommitRecord(db, user)
    logger.info("api key rotated user=%s", user.Id)
    return user
