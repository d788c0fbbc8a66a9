# taller/schemas/cliente.py
from typing import Optional
from pydantic import BaseModel, ConfigDict


class ClienteBase(BaseModel):
    nombre: Optional[str] = None
    cedula: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[str] = None
    direccion: Optional[str] = None


class ClienteCreate(ClienteBase):
    pass # nombre es obligatorio, se valida en la ruta


class ClienteUpdate(ClienteBase):
    """Todos los campos son opcionales; los que no se envían conservan su valor."""
    pass


class Cliente(ClienteBase):
    id: int
    nombre: str

    model_config = ConfigDict(from_attributes=True)
