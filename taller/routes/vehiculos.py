# taller/routes/vehiculos.py

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .. import auth as auth_utils
from ..database import get_db
from ..errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from ..models.cliente import Cliente as DBCliente
from ..models.vehiculo import Vehiculo as DBVehiculo
from ..schemas.token import TokenData
from ..schemas.vehiculo import Vehiculo, VehiculoCreate, VehiculoUpdate
from ..utils.actualizacion import aplicar_cambios, campos_a_actualizar

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/vehiculos",
    tags=["vehiculos"]
)


def get_vehiculo_or_404(
    vehiculo_id: int = Path(..., title="El ID del vehículo"),
    db: Session = Depends(get_db)
) -> DBVehiculo:
    vehiculo = db.query(DBVehiculo).options(
        joinedload(DBVehiculo.cliente)
    ).filter(DBVehiculo.id == vehiculo_id).first()
    if vehiculo is None:
        raise NotFoundError("vehiculo no encontrado")
    return vehiculo


def _verificar_cliente(db: Session, cliente_id: int) -> None:
    if db.query(DBCliente.id).filter(DBCliente.id == cliente_id).first() is None:
        raise NotFoundError("cliente no encontrado")


def _guardar(db: Session, vehiculo: DBVehiculo, accion: str) -> None:
    try:
        db.commit()
        db.refresh(vehiculo)
    except IntegrityError as e:
        db.rollback()
        # Placa duplicada o cliente eliminado entre la verificación y el insert
        if "placa" in str(e.orig).lower():
            raise ConflictError("ya existe un vehiculo con esa placa")
        raise NotFoundError("cliente no encontrado")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error al {accion} vehiculo: {e}")
        raise PersistenceError()


@router.get("", response_model=List[Vehiculo])
def read_vehiculos(db: Session = Depends(get_db)):
    """Lista todos los vehículos con el nombre de su dueño, los más recientes primero."""
    return db.query(DBVehiculo).options(
        joinedload(DBVehiculo.cliente)
    ).order_by(DBVehiculo.id.desc()).all()


@router.get("/{vehiculo_id}", response_model=Vehiculo)
def read_vehiculo(vehiculo: DBVehiculo = Depends(get_vehiculo_or_404)):
    return vehiculo


@router.post("", response_model=Vehiculo, status_code=status.HTTP_201_CREATED)
def create_vehiculo(vehiculo_data: VehiculoCreate, db: Session = Depends(get_db)):
    """
    Crea un vehículo. Requiere `cliente_id` y `placa`; el cliente debe existir.
    """
    if not vehiculo_data.cliente_id or not vehiculo_data.placa:
        raise ValidationError("cliente_id y placa son requeridos")

    _verificar_cliente(db, vehiculo_data.cliente_id)

    new_vehiculo = DBVehiculo(**vehiculo_data.model_dump())
    db.add(new_vehiculo)
    _guardar(db, new_vehiculo, "crear")

    logger.info(f"Vehiculo creado: {new_vehiculo.id} ({new_vehiculo.placa})")
    return new_vehiculo


@router.put("/{vehiculo_id}", response_model=Vehiculo)
def update_vehiculo(
    vehiculo_update: VehiculoUpdate,
    db_vehiculo: DBVehiculo = Depends(get_vehiculo_or_404),
    db: Session = Depends(get_db),
):
    """
    Actualiza parcialmente un vehículo. Si cambia de dueño, el nuevo cliente debe existir.
    """
    cambios = campos_a_actualizar(vehiculo_update)
    if "cliente_id" in cambios and cambios["cliente_id"] != db_vehiculo.cliente_id:
        _verificar_cliente(db, cambios["cliente_id"])

    aplicar_cambios(db_vehiculo, cambios)
    _guardar(db, db_vehiculo, "actualizar")
    return db_vehiculo


@router.delete("/{vehiculo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vehiculo(
    vehiculo_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(auth_utils.require_admin),
):
    """
    Elimina físicamente un vehículo y sus reparaciones. Solo administradores.
    """
    db_vehiculo = db.query(DBVehiculo).filter(DBVehiculo.id == vehiculo_id).first()
    if db_vehiculo is None:
        raise NotFoundError("vehiculo no encontrado")

    try:
        db.delete(db_vehiculo)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error al eliminar vehiculo {vehiculo_id}: {e}")
        raise PersistenceError()

    logger.info(f"Vehiculo {vehiculo_id} eliminado por {current_user.email}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
