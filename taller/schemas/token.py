# taller/schemas/token.py
from pydantic import BaseModel

from .usuario import UsuarioPublico


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    token: str
    user: UsuarioPublico


class TokenData(BaseModel):
    """Claims que viajan dentro del token."""
    id: int
    role: str
    name: str
    email: str
