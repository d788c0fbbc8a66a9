# taller/models/imagen_reparacion.py

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class ImagenReparacion(Base):
    __tablename__ = "imagenes_reparacion"

    id = Column(Integer, primary_key=True, index=True)
    reparacion_id = Column(Integer, ForeignKey("reparaciones.id", ondelete="CASCADE"), nullable=False, index=True)
    nombre_archivo = Column(String(255), nullable=False)
    tipo_mime = Column(String(100), nullable=False)
    tamano_bytes = Column(Integer, nullable=False)
    datos_base64 = Column(Text, nullable=False)
    descripcion = Column(Text)
    creado_en = Column(DateTime, default=func.now(), nullable=False)

    reparacion = relationship("Reparacion", back_populates="imagenes")

    def __repr__(self):
        return f"<ImagenReparacion(id={self.id}, reparacion_id={self.reparacion_id}, nombre_archivo='{self.nombre_archivo}')>"
