import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("chorechart.errors")

BAD_CREDENTIALS = "Bad Credentials"
BASE_FIELD = "base"


class RecordNotFoundError(ValueError):
    pass


class RecordInvalidError(ValueError):
    """Validation failure carrying a field -> messages map."""

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("; ".join(f"{field} {', '.join(messages)}" for field, messages in errors.items()))
        self.Errors = errors


class BadCredentialsError(Exception):
    def __init__(self, scheme: str = "Token", realm: str = "Application"):
        super().__init__(BAD_CREDENTIALS)
        self.Scheme = scheme
        self.Realm = realm


def BuildAuthenticateHeader(scheme: str, realm: str) -> str:
    return '%s realm="%s"' % (scheme, realm.replace('"', ""))


def ValidationErrorsToFields(errors) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}
    for error in errors:
        loc = [part for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[0] if loc and isinstance(loc[0], str) else BASE_FIELD
        message = error.get("msg", "is invalid")
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        fields.setdefault(field, []).append(message)
    return fields


def RaiseHttpForRecordError(exc: Exception) -> None:
    if isinstance(exc, RecordNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    raise exc


def RegisterExceptionHandlers(app: FastAPI) -> None:
    @app.exception_handler(BadCredentialsError)
    async def _bad_credentials(request: Request, exc: BadCredentialsError) -> JSONResponse:
        logger.warning("rejected credentials for %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": BAD_CREDENTIALS},
            headers={"WWW-Authenticate": BuildAuthenticateHeader(exc.Scheme, exc.Realm)},
        )

    @app.exception_handler(RecordInvalidError)
    async def _record_invalid(request: Request, exc: RecordInvalidError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=exc.Errors)

    @app.exception_handler(RequestValidationError)
    async def _request_invalid(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ValidationErrorsToFields(exc.errors()),
        )
