import logging

from fastapi import APIRouter, Depends

from chorechart.modules.auth.deps import RequireBasicCredentials
from chorechart.modules.auth.models import User
from chorechart.modules.users.schemas import ApiKeyOut

router = APIRouter(tags=["auth"])
logger = logging.getLogger("auth")


@router.get(
    "/token",
    response_model=ApiKeyOut,
    summary="Exchanges HTTP Basic credentials for an api key",
)
def ExchangeToken(user: User = Depends(RequireBasicCredentials)) -> ApiKeyOut:
    logger.info("token issued user=%s", user.Id)
    return ApiKeyOut(api_key=user.ApiKey)
