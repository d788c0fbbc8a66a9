import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from fastapi import Depends, Header, Request
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from .config import Settings
from .database import get_settings
from .errors import ForbiddenError, InvalidCredentialsError, InvalidTokenError, UnauthorizedError
from .models.usuario import Usuario
from .schemas.token import TokenData

logger = logging.getLogger(__name__)

# Costo fijo del hash bcrypt
BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

# Lista de roles del sistema para facilitar la referencia
ROLES = ["admin", "owner"]
ADMIN_ROLES = ["admin"] # Roles que pueden eliminar registros


# Funciones de hashing y verificación de contraseñas
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica si una contraseña plana coincide con un hash (comparación de tiempo constante)."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Genera el hash de una contraseña plana."""
    return pwd_context.hash(password)


# Funciones para crear y verificar tokens JWT
def create_access_token(usuario: Usuario, settings: Settings, issued_at: Optional[datetime] = None) -> str:
    """
    Crea un token JWT con los claims id, role, name y email.
    Vence `settings.access_token_expire_hours` horas después de `issued_at`.
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    to_encode = {
        "id": usuario.id,
        "role": usuario.role,
        "name": usuario.name,
        "email": usuario.email,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.access_token_expire_hours),
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

def verify_access_token(token: str, settings: Settings) -> TokenData:
    """
    Decodifica y valida un token. Lanza InvalidTokenError si la firma no es
    válida, el token está mal formado, venció o le faltan claims.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return TokenData(**payload)
    except (JWTError, PydanticValidationError, TypeError):
        raise InvalidTokenError()


def authenticate_user(db: Session, email: str, password: str) -> Usuario:
    """Busca el usuario por email y valida su contraseña."""
    user = db.query(Usuario).filter(Usuario.email == email).first()
    if user is None:
        logger.warning(f"Intento de login con email inexistente: {email}")
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.warning(f"Login fallido: contraseña incorrecta para {email}")
        raise InvalidCredentialsError()
    return user


# --- DEPENDENCIAS DE USUARIO Y ROL ---

def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> TokenData:
    """
    Exige el header `Authorization: Bearer <token>` y devuelve los claims verificados.
    Los claims quedan también en `request.state.usuario`.
    """
    # Exactamente dos partes: "Bearer" y el token
    partes = authorization.split(" ") if authorization else []
    if len(partes) != 2 or partes[0] != "Bearer" or not partes[1]:
        raise UnauthorizedError()
    token = partes[1]

    current_user = verify_access_token(token, settings)
    request.state.usuario = current_user
    return current_user

def get_current_user_with_role(required_roles: List[str]):
    """
    Dependencia que verifica que el usuario autenticado tenga uno de los roles requeridos.
    """
    def _get_current_user_with_role_inner(current_user: TokenData = Depends(get_current_user)) -> TokenData:
        if current_user.role not in required_roles:
            logger.warning(f"Acceso denegado a {current_user.email} (rol '{current_user.role}', requiere {required_roles})")
            raise ForbiddenError()
        return current_user
    return _get_current_user_with_role_inner

require_admin = get_current_user_with_role(ADMIN_ROLES)
