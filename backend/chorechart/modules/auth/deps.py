import logging
from dataclasses import dataclass

from fastapi import Depends, Header
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.orm import Session

from chorechart.core.config import GetAuthRealm
from chorechart.core.errors import BadCredentialsError
from chorechart.db import GetDb
from chorechart.modules.auth.models import User
from chorechart.modules.auth.service import ParseTokenHeader, VerifyPassword

logger = logging.getLogger("auth")

AUTHORIZATION_DESCRIPTION = "Authentication token in the format of: Token token=<token>"

basic_credentials = HTTPBasic(auto_error=False, realm="Application")


@dataclass
class UserContext:
    Id: int
    Username: str


def FindUserByApiKey(db: Session, token: str) -> User | None:
    return db.query(User).filter(User.ApiKey == token).first()


def RequireApiToken(
    authorization: str | None = Header(default=None, description=AUTHORIZATION_DESCRIPTION),
    db: Session = Depends(GetDb),
) -> UserContext:
    token = ParseTokenHeader(authorization)
    user = FindUserByApiKey(db, token) if token else None
    if user is None:
        raise BadCredentialsError(scheme="Token", realm=GetAuthRealm())
    logger.debug("authenticated user=%s", user.Id)
    return UserContext(Id=user.Id, Username=user.Username)


def RequireBasicCredentials(
    credentials: HTTPBasicCredentials | None = Depends(basic_credentials),
    db: Session = Depends(GetDb),
) -> User:
    if credentials is None:
        raise BadCredentialsError(scheme="Basic", realm=GetAuthRealm())
    user = db.query(User).filter(User.Username == credentials.username).first()
    if not user or not VerifyPassword(credentials.password, user.PasswordHash):
        raise BadCredentialsError(scheme="Basic", realm=GetAuthRealm())
    return user