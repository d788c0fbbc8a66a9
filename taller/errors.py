# taller/errors.py

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

MENSAJE_ERROR_INTERNO = "error interno del servidor"


# --- Taxonomía de errores de la API ---
# Todas heredan de HTTPException para poder lanzarse desde rutas y dependencias.

class ValidationError(HTTPException):
    def __init__(self, detail: str = "datos inválidos"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class MissingRangeError(ValidationError):
    def __init__(self):
        super().__init__("desde y hasta son requeridos (YYYY-MM-DD)")


class AuthError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class UnauthorizedError(AuthError):
    def __init__(self):
        super().__init__("unauthorized")


class InvalidTokenError(AuthError):
    def __init__(self):
        super().__init__("invalid_token")


class InvalidCredentialsError(AuthError):
    def __init__(self):
        super().__init__("credenciales inválidas")


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "recurso no encontrado"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class PersistenceError(HTTPException):
    """Fallo de base de datos. El detalle del driver solo va al log."""
    def __init__(self, detail: str = MENSAJE_ERROR_INTERNO):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


# --- Handlers: todas las respuestas de error son {"error": "..."} ---

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errores = []
    for error in exc.errors():
        campo = ".".join(str(parte) for parte in error.get("loc", ()) if parte not in ("body", "query", "path"))
        errores.append(f"{campo}: {error.get('msg')}" if campo else str(error.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "; ".join(errores) or "datos inválidos"},
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Error de base de datos en {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": MENSAJE_ERROR_INTERNO},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Error no controlado en {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": MENSAJE_ERROR_INTERNO},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
