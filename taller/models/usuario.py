# taller/models/usuario.py

from sqlalchemy import Column, Integer, String
from .base import Base
from .enums import RolEnum


class Usuario(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False) # Solo el hash bcrypt, nunca la contraseña
    role = Column(String(20), nullable=False, default=RolEnum.owner.value)

    def __repr__(self):
        return f"<Usuario(id={self.id}, email='{self.email}', role='{self.role}')>"
