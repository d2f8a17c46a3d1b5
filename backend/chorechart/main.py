import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from chorechart.core.config import GetBool, GetDependentChoresPolicy, GetEnv
from chorechart.core.errors import RegisterExceptionHandlers
from chorechart.core.logging import setup_logging
from chorechart.core.migrations import RunMigrations
from chorechart.modules.auth.router import router as token_router
from chorechart.modules.children.router import router as children_router
from chorechart.modules.chores.router import router as chores_router, router_v2 as chores_v2_router
from chorechart.modules.core.router import router as core_router
from chorechart.modules.tasks.router import router as tasks_router
from chorechart.modules.users.router import router as users_router

setup_logging()

logger = logging.getLogger("chorechart.request")
startup_logger = logging.getLogger("chorechart.startup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    GetDependentChoresPolicy()
    if GetBool("RUN_MIGRATIONS_ON_STARTUP"):
        RunMigrations()
    startup_logger.info("startup complete")
    yield


app = FastAPI(
    title="Chore Tracker API",
    description="Track children, the tasks they can do and the chores assigned to them.",
    lifespan=lifespan,
)

allowed_origins = GetEnv("ALLOWED_ORIGINS", "")
origin_list = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
if origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_logger(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = int((time.perf_counter() - start) * 1000)

    parts = [f"{request.method} {request.url.path}"]
    if request.url.query:
        parts.append(f"query={request.url.query}")

    status = response.status_code
    if status >= 500:
        parts.append("ERROR: server error")
    elif status == 404:
        parts.append("ERROR: not found")
    elif status >= 400:
        parts.append("ERROR: client error")

    parts.append(f"status={status}")
    parts.append(f"{duration_ms}ms")
    parts.append(f"request_id={request_id}")

    log_msg = " | ".join(parts)
    if status >= 500:
        logger.error(log_msg)
    elif status >= 400:
        logger.warning(log_msg)
    else:
        logger.info(log_msg)

    response.headers["X-Request-Id"] = request_id
    return response


RegisterExceptionHandlers(app)

app.include_router(core_router)
app.include_router(tasks_router, prefix="/api/v1")
app.include_router(children_router, prefix="/api/v2")
app.include_router(chores_v2_router, prefix="/api/v2")
app.include_router(children_router)
app.include_router(tasks_router)
app.include_router(chores_router)
app.include_router(users_router)
app.include_router(token_router)
