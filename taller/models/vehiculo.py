# taller/models/vehiculo.py

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base


class Vehiculo(Base):
    __tablename__ = "vehiculos"

    id = Column(Integer, primary_key=True, index=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id", ondelete="CASCADE"), nullable=False, index=True)
    placa = Column(String(20), unique=True, nullable=False, index=True)
    marca = Column(String(60))
    modelo = Column(String(60))
    anio = Column(Integer)
    vin = Column(String(40))

    cliente = relationship("Cliente", back_populates="vehiculos")
    reparaciones = relationship("Reparacion", back_populates="vehiculo", cascade="all, delete-orphan")

    @property
    def cliente_nombre(self):
        return self.cliente.nombre if self.cliente else None

    def __repr__(self):
        return f"<Vehiculo(id={self.id}, placa='{self.placa}', cliente_id={self.cliente_id})>"
