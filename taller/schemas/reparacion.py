# taller/schemas/reparacion.py
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import EstadoReparacionEnum


class ReparacionBase(BaseModel):
    vehiculo_id: Optional[int] = None
    descripcion: Optional[str] = None
    estado: Optional[EstadoReparacionEnum] = None
    costo_estimado: Optional[float] = Field(None, ge=0)
    costo_final: Optional[float] = Field(None, ge=0)
    fecha_ingreso: Optional[date] = None
    fecha_salida: Optional[date] = None
    tecnico: Optional[str] = None
    tipo_servicio: Optional[str] = None
    kms: Optional[int] = Field(None, ge=0)


class ReparacionCreate(ReparacionBase):
    pass # vehiculo_id y descripcion son obligatorios, se validan en la ruta


class ReparacionUpdate(ReparacionBase):
    pass


class Reparacion(ReparacionBase):
    id: int
    vehiculo_id: int
    descripcion: str
    estado: EstadoReparacionEnum
    fecha_ingreso: date
    # Datos del vehículo
    placa: Optional[str] = None
    marca: Optional[str] = None
    modelo: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
