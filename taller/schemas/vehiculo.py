# taller/schemas/vehiculo.py
from typing import Optional
from pydantic import BaseModel, ConfigDict


class VehiculoBase(BaseModel):
    cliente_id: Optional[int] = None
    placa: Optional[str] = None
    marca: Optional[str] = None
    modelo: Optional[str] = None
    anio: Optional[int] = None
    vin: Optional[str] = None


class VehiculoCreate(VehiculoBase):
    pass # cliente_id y placa son obligatorios, se validan en la ruta


class VehiculoUpdate(VehiculoBase):
    pass


class Vehiculo(VehiculoBase):
    id: int
    cliente_id: int
    placa: str
    cliente_nombre: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
