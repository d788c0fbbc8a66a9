import logging
import time
from typing import Any, Dict, Optional, Union

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, Result
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.expression import Executable

from .config import Settings

logger = logging.getLogger(__name__)


def create_db_engine(settings: Settings) -> Engine:
    """Crea el engine con su pool de conexiones según el tipo de base de datos."""
    url = settings.database_url

    if url.startswith("sqlite"):
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        # Una base en memoria solo existe mientras viva su única conexión
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    connect_args = {"sslmode": "require"} if settings.database_ssl else {}
    # Ajusta pool_size y max_overflow según tus necesidades
    return create_engine(
        url,
        pool_size=10,          # Conexiones activas máximas en el pool
        max_overflow=20,       # Conexiones adicionales si pool_size se agota
        pool_pre_ping=True,    # Verifica conexiones antes de usarlas
        connect_args=connect_args,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def execute_query(
    db: Session,
    statement: Union[str, Executable],
    params: Optional[Dict[str, Any]] = None,
) -> Result:
    """
    Ejecuta una sentencia parametrizada y registra su duración.

    Args:
        db: Sesión de base de datos
        statement: SQL en texto o sentencia ya construida (text(), select(), ...)
        params: Parámetros con nombre de la sentencia
    """
    if isinstance(statement, str):
        statement = text(statement)

    start = time.perf_counter()
    result = db.execute(statement, params or {})
    duration_ms = (time.perf_counter() - start) * 1000

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("db %s", {"sql": " ".join(str(statement).split()), "duration_ms": round(duration_ms, 2), "rows": result.rowcount})
    return result
