# taller/models/cliente.py

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from .base import Base


class Cliente(Base):
    __tablename__ = "clientes"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(150), nullable=False)
    cedula = Column(String(20), unique=True, nullable=True)
    telefono = Column(String(30))
    email = Column(String(150))
    direccion = Column(Text)

    # Un cliente puede tener muchos vehículos; se eliminan junto con él
    vehiculos = relationship("Vehiculo", back_populates="cliente", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Cliente(id={self.id}, nombre='{self.nombre}')>"
