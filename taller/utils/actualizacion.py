# taller/utils/actualizacion.py

from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel


def campos_a_actualizar(datos: BaseModel, permitidos: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """
    Extrae del esquema de actualización solo los campos enviados y con valor.

    Un campo ausente o enviado como null conserva el valor actual del registro.
    Si se indica `permitidos`, cualquier otro campo se descarta.
    """
    cambios = datos.model_dump(exclude_unset=True, exclude_none=True)
    if permitidos is not None:
        permitidos = set(permitidos)
        cambios = {campo: valor for campo, valor in cambios.items() if campo in permitidos}
    return cambios


def aplicar_cambios(registro: Any, cambios: Dict[str, Any]) -> Any:
    """
    Aplica los cambios sobre un modelo SQLAlchemy. Solo se escriben columnas
    reales de su tabla, nunca nombres arbitrarios.
    """
    columnas = set(registro.__table__.columns.keys())
    for campo, valor in cambios.items():
        if campo not in columnas or campo == "id":
            continue
        if hasattr(valor, "value"): # Enums
            valor = valor.value
        setattr(registro, campo, valor)
    return registro
