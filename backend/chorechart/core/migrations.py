import logging
import threading
import time
import traceback
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine

from chorechart.db import BuildConnectionUrl, _read_int_env

logger = logging.getLogger("chorechart.migrations")

BACKEND_DIR = Path(__file__).resolve().parents[2]
ALEMBIC_INI = BACKEND_DIR / "alembic.ini"
SCRIPT_LOCATION = BACKEND_DIR / "alembic"


def BuildAlembicConfig() -> Config:
    if not ALEMBIC_INI.exists():
        raise RuntimeError(f"Missing {ALEMBIC_INI.name} for migrations")

    alembic_cfg = Config(str(ALEMBIC_INI))
    # configparser interpolation would swallow url-encoded password characters
    alembic_cfg.set_main_option("sqlalchemy.url", BuildConnectionUrl().replace("%", "%%"))
    alembic_cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    return alembic_cfg


def GetRevisionState(alembic_cfg: Config) -> tuple[str | None, str | None]:
    """Return (current, head) revision ids for the configured database."""
    head = ScriptDirectory.from_config(alembic_cfg).get_current_head()
    engine = create_engine(BuildConnectionUrl())
    try:
        with engine.connect() as connection:
            current = MigrationContext.configure(connection).get_current_revision()
    finally:
        engine.dispose()
    return current, head


def RunMigrations(target: str = "head") -> None:
    alembic_cfg = BuildAlembicConfig()
    timeout_seconds = _read_int_env("MIGRATIONS_TIMEOUT_SECONDS", 600)
    progress_seconds = max(_read_int_env("MIGRATIONS_PROGRESS_LOG_SECONDS", 20), 1)

    current, head = GetRevisionState(alembic_cfg)
    if target == "head" and current == head:
        logger.info("schema already at head revision=%s", head)
        return

    logger.info(
        "upgrading schema from=%s to=%s (timeout=%ss)",
        current or "empty",
        target,
        timeout_seconds,
    )

    failure: list[str] = []
    finished = threading.Event()

    def _upgrade() -> None:
        try:
            command.upgrade(alembic_cfg, target)
        except Exception:  # noqa: BLE001
            failure.append(traceback.format_exc())
        finally:
            finished.set()

    worker = threading.Thread(target=_upgrade, name="alembic-upgrade", daemon=True)
    worker.start()
    started = time.monotonic()

    while not finished.wait(timeout=progress_seconds):
        elapsed = int(time.monotonic() - started)
        logger.info("schema upgrade in progress (%ss elapsed)", elapsed)
        if timeout_seconds > 0 and elapsed >= timeout_seconds:
            logger.error("schema upgrade timed out after %ss", elapsed)
            raise TimeoutError(f"schema upgrade timed out after {elapsed}s")

    if failure:
        logger.error("schema upgrade failed:\n%s", failure[0])
        raise RuntimeError("schema upgrade failed")

    logger.info("schema upgraded to revision=%s", GetRevisionState(alembic_cfg)[0])
