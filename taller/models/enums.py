from enum import Enum


class RolEnum(str, Enum):
    admin = "admin"
    owner = "owner"


class EstadoReparacionEnum(str, Enum):
    pendiente = "pendiente"
    en_progreso = "en_progreso"
    completada = "completada"
    cancelada = "cancelada"


# Estados de los que una reparación ya no sale
ESTADOS_TERMINALES = (EstadoReparacionEnum.completada, EstadoReparacionEnum.cancelada)
