# Importa todos los modelos para que Base (y Alembic) los conozca
from .base import Base
from .enums import RolEnum, EstadoReparacionEnum
from .usuario import Usuario
from .cliente import Cliente
from .vehiculo import Vehiculo
from .reparacion import Reparacion
from .imagen_reparacion import ImagenReparacion
