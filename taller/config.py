# taller/config.py

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _database_url_from_env() -> str:
    """Arma la URL de PostgreSQL a partir de las variables PG* si no hay DATABASE_URL."""
    url = os.getenv("DATABASE_URL")
    if url:
        # Algunos proveedores (Render, Heroku) entregan el esquema antiguo
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url
    user = os.getenv("PGUSER", "postgres")
    password = os.getenv("PGPASSWORD", "")
    host = os.getenv("PGHOST", "localhost")
    port = os.getenv("PGPORT", "5432")
    database = os.getenv("PGDATABASE", "crv")
    return f"postgresql://{user}:{password}@{host}:{port}/{database}"


class Settings(BaseModel):
    """
    Configuración de la aplicación. Se construye una sola vez al arrancar
    (ver `create_app`) y se pasa explícitamente a los servicios.
    """
    database_url: str = "postgresql://postgres:@localhost:5432/crv"
    database_ssl: bool = False
    secret_key: str = "dev-secret-change-me"
    algorithm: str = "HS256"
    access_token_expire_hours: int = 8
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    create_tables: bool = False
    port: int = 4000

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            database_url=_database_url_from_env(),
            database_ssl=_parse_bool(os.getenv("PGSSL")),
            secret_key=os.getenv("JWT_SECRET", "dev-secret-change-me"),
            algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_hours=int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", 8)),
            app_env=os.getenv("APP_ENV", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            create_tables=_parse_bool(os.getenv("CREATE_TABLES")),
            port=int(os.getenv("PORT", 4000)),
        )
