# taller/schemas/usuario.py
from pydantic import BaseModel, ConfigDict

from ..models.enums import RolEnum


class UsuarioPublico(BaseModel):
    """Vista pública del usuario: nunca incluye el hash de la contraseña."""
    id: int
    name: str
    email: str
    role: RolEnum

    model_config = ConfigDict(from_attributes=True)
