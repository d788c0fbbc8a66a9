# taller/routes/reparaciones.py

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .. import auth as auth_utils
from ..database import get_db
from ..errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from ..models.enums import ESTADOS_TERMINALES, EstadoReparacionEnum
from ..models.reparacion import Reparacion as DBReparacion
from ..models.vehiculo import Vehiculo as DBVehiculo
from ..schemas.reparacion import Reparacion, ReparacionCreate, ReparacionUpdate
from ..schemas.token import TokenData
from ..utils.actualizacion import aplicar_cambios, campos_a_actualizar

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reparaciones",
    tags=["reparaciones"]
)


def get_reparacion_or_404(
    reparacion_id: int = Path(..., title="El ID de la reparación"),
    db: Session = Depends(get_db)
) -> DBReparacion:
    reparacion = db.query(DBReparacion).options(
        joinedload(DBReparacion.vehiculo)
    ).filter(DBReparacion.id == reparacion_id).first()
    if reparacion is None:
        raise NotFoundError("reparacion no encontrada")
    return reparacion


def _verificar_vehiculo(db: Session, vehiculo_id: int) -> None:
    if db.query(DBVehiculo.id).filter(DBVehiculo.id == vehiculo_id).first() is None:
        raise NotFoundError("vehiculo no encontrado")


def validar_transicion_estado(reparacion: DBReparacion, cambios: dict) -> None:
    """
    Una reparación completada o cancelada no vuelve a otro estado.
    Al completarse se sella la fecha de salida si no se indicó una.
    """
    nuevo_estado = cambios.get("estado")
    if nuevo_estado is None:
        return
    nuevo_estado = EstadoReparacionEnum(nuevo_estado)
    estado_actual = EstadoReparacionEnum(reparacion.estado)

    if estado_actual in ESTADOS_TERMINALES and nuevo_estado != estado_actual:
        raise ConflictError(f"la reparacion ya está {estado_actual.value} y no puede pasar a {nuevo_estado.value}")

    if nuevo_estado == EstadoReparacionEnum.completada and not reparacion.fecha_salida and "fecha_salida" not in cambios:
        cambios["fecha_salida"] = date.today()


def _guardar(db: Session, reparacion: DBReparacion, accion: str) -> None:
    try:
        db.commit()
        db.refresh(reparacion)
    except IntegrityError:
        db.rollback()
        # El vehículo desapareció entre la verificación y el insert
        raise NotFoundError("vehiculo no encontrado")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error al {accion} reparacion: {e}")
        raise PersistenceError()


@router.get("", response_model=List[Reparacion])
def read_reparaciones(db: Session = Depends(get_db)):
    """Lista todas las reparaciones con placa, marca y modelo del vehículo."""
    return db.query(DBReparacion).options(
        joinedload(DBReparacion.vehiculo)
    ).order_by(DBReparacion.id.desc()).all()


@router.get("/{reparacion_id}", response_model=Reparacion)
def read_reparacion(reparacion: DBReparacion = Depends(get_reparacion_or_404)):
    return reparacion


@router.post("", response_model=Reparacion, status_code=status.HTTP_201_CREATED)
def create_reparacion(reparacion_data: ReparacionCreate, db: Session = Depends(get_db)):
    """
    Crea una orden de reparación. Requiere `vehiculo_id` y `descripcion`.
    El estado por defecto es `pendiente` y la fecha de ingreso, hoy.
    """
    if not reparacion_data.vehiculo_id or not reparacion_data.descripcion:
        raise ValidationError("vehiculo_id y descripcion son requeridos")

    _verificar_vehiculo(db, reparacion_data.vehiculo_id)

    datos = reparacion_data.model_dump(exclude_none=True)
    datos["estado"] = EstadoReparacionEnum(datos.get("estado", EstadoReparacionEnum.pendiente)).value
    datos.setdefault("fecha_ingreso", date.today())
    if datos["estado"] == EstadoReparacionEnum.completada.value:
        datos.setdefault("fecha_salida", date.today())

    new_reparacion = DBReparacion(**datos)
    db.add(new_reparacion)
    _guardar(db, new_reparacion, "crear")

    logger.info(f"Reparacion creada: {new_reparacion.id} (vehiculo {new_reparacion.vehiculo_id})")
    return new_reparacion


@router.put("/{reparacion_id}", response_model=Reparacion)
def update_reparacion(
    reparacion_update: ReparacionUpdate,
    db_reparacion: DBReparacion = Depends(get_reparacion_or_404),
    db: Session = Depends(get_db),
):
    """
    Actualiza parcialmente una reparación: cambios de estado, costo final,
    fecha de salida, etc. Los campos no enviados conservan su valor.
    """
    cambios = campos_a_actualizar(reparacion_update)
    if "vehiculo_id" in cambios and cambios["vehiculo_id"] != db_reparacion.vehiculo_id:
        _verificar_vehiculo(db, cambios["vehiculo_id"])
    validar_transicion_estado(db_reparacion, cambios)

    aplicar_cambios(db_reparacion, cambios)
    _guardar(db, db_reparacion, "actualizar")
    return db_reparacion


@router.delete("/{reparacion_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reparacion(
    reparacion_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(auth_utils.require_admin),
):
    """
    Elimina físicamente una reparación y sus imágenes. Solo administradores.
    """
    db_reparacion = db.query(DBReparacion).filter(DBReparacion.id == reparacion_id).first()
    if db_reparacion is None:
        raise NotFoundError("reparacion no encontrada")

    try:
        db.delete(db_reparacion)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error al eliminar reparacion {reparacion_id}: {e}")
        raise PersistenceError()

    logger.info(f"Reparacion {reparacion_id} eliminada por {current_user.email}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
