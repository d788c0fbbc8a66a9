from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date


class FiltroReporteReparaciones(BaseModel):
    tecnico: Optional[str] = Field(None, description="Técnico (coincidencia parcial, sin distinguir mayúsculas)")
    tipo_servicio: Optional[str] = Field(None, description="Tipo de servicio")
    placa: Optional[str] = Field(None, description="Placa del vehículo")
    marca: Optional[str] = Field(None, description="Marca del vehículo")
    modelo: Optional[str] = Field(None, description="Modelo del vehículo")
    cliente: Optional[str] = Field(None, description="Nombre o ID del cliente")


class ReporteReparacionItem(BaseModel):
    id: int
    vehiculo_id: int
    descripcion: str
    estado: str
    costo_estimado: Optional[float] = None
    costo_final: Optional[float] = None
    fecha_ingreso: date
    fecha_salida: Optional[date] = None
    tecnico: Optional[str] = None
    tipo_servicio: Optional[str] = None
    kms: Optional[int] = None
    placa: str
    marca: Optional[str] = None
    modelo: Optional[str] = None
    cliente_id: Optional[int] = None
    cliente_nombre: Optional[str] = None


class ReporteReparacionesResponse(BaseModel):
    items: List[ReporteReparacionItem]
    total_reparaciones: int
    total_ingresos: float
