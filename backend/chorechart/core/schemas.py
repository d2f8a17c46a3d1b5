import json
from typing import Annotated, Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError

BLANK_MESSAGE = "can't be blank"
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class PermittedParams(BaseModel):
    """Allow-list of client-writable fields; anything else in the body is dropped."""

    model_config = ConfigDict(extra="ignore")

    def Values(self) -> dict:
        return self.model_dump(exclude_unset=False)


class PartialParams(PermittedParams):
    def Values(self) -> dict:
        return self.model_dump(exclude_unset=True)


def RejectNull(value):
    if value is None:
        raise ValueError(BLANK_MESSAGE)
    return value


async def _ReadBody(request: Request) -> Any:
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "is not valid JSON", "input": None}]
        ) from exc


def PermittedBody(model: type[PermittedParams]):
    """Dependency validating a JSON or form-encoded body through `model`.

    Declare it after the auth dependency so rejected requests never reach
    body validation.
    """

    async def _validate(request: Request) -> PermittedParams:
        data = await _ReadBody(request)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise RequestValidationError(
                [{**error, "loc": ("body", *error["loc"])} for error in exc.errors()]
            ) from exc

    return _validate


def BodyDocs(model: type[PermittedParams]) -> dict:
    schema = model.model_json_schema()
    return {
        "requestBody": {
            "required": True,
            "content": {content_type: {"schema": schema} for content_type in ("application/json", *FORM_CONTENT_TYPES)},
        }
    }
