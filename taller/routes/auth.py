# taller/routes/auth.py

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import auth as auth_utils
from ..config import Settings
from ..database import get_db, get_settings
from ..errors import NotFoundError, ValidationError
from ..models.usuario import Usuario
from ..schemas.token import LoginRequest, LoginResponse, TokenData
from ..schemas.usuario import UsuarioPublico

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Auth"]
)


@router.post("/login", response_model=LoginResponse)
def login(
    credenciales: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Autentica un usuario por email y contraseña y devuelve un token JWT
    junto con la vista pública del usuario.
    """
    if not credenciales.email or not credenciales.password:
        raise ValidationError("email y password son requeridos")

    user = auth_utils.authenticate_user(db, credenciales.email, credenciales.password)
    token = auth_utils.create_access_token(user, settings)
    logger.info(f"Login exitoso: {user.email} (rol {user.role})")
    return {"token": token, "user": user}


@router.get("/me", response_model=UsuarioPublico)
def read_users_me(
    current_user: TokenData = Depends(auth_utils.get_current_user),
    db: Session = Depends(get_db),
):
    """Devuelve el perfil del usuario dueño del token."""
    user = db.query(Usuario).filter(Usuario.id == current_user.id).first()
    if user is None:
        raise NotFoundError("usuario no encontrado")
    return user
