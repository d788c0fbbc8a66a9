import logging
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .auth import get_current_user
from .config import Settings
from .database import create_db_engine, create_session_factory, execute_query, get_db
from .errors import register_exception_handlers
from .models import Base
from .routes import auth, clientes, imagenes, reparaciones, reportes, vehiculos

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Los tiempos de cada consulta solo se registran fuera de producción
    if settings.is_production:
        logging.getLogger("taller.database").setLevel(logging.INFO)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Raíz de composición: arma configuración, engine, sesiones y rutas.
    El engine y la configuración quedan en `app.state`.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings)

    engine = create_db_engine(settings)

    # --- Creación de la Aplicación FastAPI ---
    app = FastAPI(
        title="Taller API",
        description="API para la gestión de clientes, vehículos y reparaciones de un taller mecánico.",
        version="1.0.0"
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # --- Middlewares ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # --- Creación de Tablas en la Base de Datos (para desarrollo; en producción usar Alembic) ---
    if settings.create_tables:
        Base.metadata.create_all(bind=engine)

    @app.get("/health", tags=["health"])
    def health(db: Session = Depends(get_db)):
        try:
            row = execute_query(db, "SELECT 1 AS ok").first()
        except SQLAlchemyError as e:
            logger.error(f"Healthcheck sin base de datos: {e}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"status": "error", "db": False, "error": "base de datos no disponible"},
            )
        return {"status": "ok", "db": row is not None and row.ok == 1}

    # --- Inclusión de Routers ---
    app.include_router(auth.router)

    # Todas las rutas /api requieren un token válido
    api_dependencies = [Depends(get_current_user)]
    for module in (clientes, vehiculos, reparaciones, imagenes, reportes):
        app.include_router(module.router, prefix="/api", dependencies=api_dependencies)

    logger.info(f"Aplicación creada (entorno {settings.app_env})")
    return app


def run() -> None:
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
