# taller/schemas/imagen.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class ImagenReparacionCreate(BaseModel):
    nombre_archivo: Optional[str] = None
    tipo_mime: Optional[str] = None
    datos_base64: Optional[str] = None
    tamano_bytes: Optional[int] = None # Se recalcula a partir de los datos decodificados
    descripcion: Optional[str] = None


class ImagenReparacion(BaseModel):
    id: int
    reparacion_id: int
    nombre_archivo: str
    tipo_mime: str
    tamano_bytes: int
    datos_base64: str
    descripcion: Optional[str] = None
    creado_en: datetime

    model_config = ConfigDict(from_attributes=True)
