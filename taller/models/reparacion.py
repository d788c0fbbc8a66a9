# taller/models/reparacion.py

from datetime import date

from sqlalchemy import Column, Integer, String, Text, Date, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base
from .enums import EstadoReparacionEnum


class Reparacion(Base):
    __tablename__ = "reparaciones"

    id = Column(Integer, primary_key=True, index=True)
    vehiculo_id = Column(Integer, ForeignKey("vehiculos.id", ondelete="CASCADE"), nullable=False, index=True)
    descripcion = Column(Text, nullable=False)
    estado = Column(String(20), nullable=False, default=EstadoReparacionEnum.pendiente.value)
    costo_estimado = Column(Numeric(12, 2), nullable=True)
    costo_final = Column(Numeric(12, 2), nullable=True)
    fecha_ingreso = Column(Date, nullable=False, default=date.today, index=True)
    fecha_salida = Column(Date, nullable=True)
    tecnico = Column(String(100))
    tipo_servicio = Column(String(100))
    kms = Column(Integer)

    vehiculo = relationship("Vehiculo", back_populates="reparaciones")
    imagenes = relationship("ImagenReparacion", back_populates="reparacion", cascade="all, delete-orphan")

    # Datos del vehículo que se devuelven junto a la reparación
    @property
    def placa(self):
        return self.vehiculo.placa if self.vehiculo else None

    @property
    def marca(self):
        return self.vehiculo.marca if self.vehiculo else None

    @property
    def modelo(self):
        return self.vehiculo.modelo if self.vehiculo else None

    def __repr__(self):
        return f"<Reparacion(id={self.id}, vehiculo_id={self.vehiculo_id}, estado='{self.estado}')>"
