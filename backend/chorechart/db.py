import os
from urllib.parse import quote_plus

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()
engine = None
SessionLocal = None


def _read_int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _build_sqlserver_url() -> str:
    driver = os.getenv("SQLSERVER_DRIVER", "")
    host = os.getenv("SQLSERVER_HOST", "")
    port = os.getenv("SQLSERVER_PORT", "")
    database = os.getenv("SQLSERVER_DB", "")
    user = os.getenv("SQLSERVER_LOGIN", "")
    password = os.getenv("SQLSERVER_PASSWORD", "")

    missing = [key for key, value in {
        "SQLSERVER_HOST": host,
        "SQLSERVER_PORT": port,
        "SQLSERVER_DB": database,
        "SQLSERVER_DRIVER": driver,
        "SQLSERVER_LOGIN": user,
        "SQLSERVER_PASSWORD": password,
    }.items() if not value]
    if missing:
        raise RuntimeError(f"Missing database configuration: {', '.join(missing)}")

    driver_encoded = quote_plus(driver)
    password_encoded = quote_plus(password)
    return (
        f"mssql+pyodbc://{user}:{password_encoded}@{host}:{port}/{database}"
        f"?driver={driver_encoded}&Encrypt=yes&TrustServerCertificate=yes"
    )


def BuildConnectionUrl() -> str:
    url = os.getenv("DATABASE_URL", "").strip()
    if url:
        return url
    return _build_sqlserver_url()


def _ensure_engine():
    global engine, SessionLocal
    if engine is None:
        url = BuildConnectionUrl()
        options = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            options["connect_args"] = {"check_same_thread": False}
        else:
            options["pool_size"] = _read_int_env("SQLALCHEMY_POOL_SIZE", 10)
            options["max_overflow"] = _read_int_env("SQLALCHEMY_MAX_OVERFLOW", 20)
            options["pool_timeout"] = _read_int_env("SQLALCHEMY_POOL_TIMEOUT", 60)
        engine = create_engine(url, **options)
        SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def GetSession():
    if SessionLocal is None:
        _ensure_engine()
    return SessionLocal()


def GetDb():
    db = GetSession()
    try:
        yield db
    finally:
        db.close()
