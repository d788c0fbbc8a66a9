# taller/routes/clientes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import auth as auth_utils
from ..database import get_db
from ..errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from ..models.cliente import Cliente as DBCliente
from ..schemas.cliente import Cliente, ClienteCreate, ClienteUpdate
from ..schemas.token import TokenData
from ..utils.actualizacion import aplicar_cambios, campos_a_actualizar

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/clientes",
    tags=["clientes"]
)


def get_cliente_or_404(
    cliente_id: int = Path(..., title="El ID del cliente"),
    db: Session = Depends(get_db)
) -> DBCliente:
    """
    Dependencia para obtener un cliente por su ID.
    Lanza un error 404 si no se encuentra.
    """
    cliente = db.query(DBCliente).filter(DBCliente.id == cliente_id).first()
    if cliente is None:
        raise NotFoundError("cliente no encontrado")
    return cliente


@router.get("", response_model=List[Cliente])
def read_clientes(db: Session = Depends(get_db)):
    """Lista todos los clientes, los más recientes primero."""
    return db.query(DBCliente).order_by(DBCliente.id.desc()).all()


@router.get("/{cliente_id}", response_model=Cliente)
def read_cliente(cliente: DBCliente = Depends(get_cliente_or_404)):
    return cliente


@router.post("", response_model=Cliente, status_code=status.HTTP_201_CREATED)
def create_cliente(cliente_data: ClienteCreate, db: Session = Depends(get_db)):
    """
    Crea un nuevo cliente. `nombre` es obligatorio.
    """
    if not cliente_data.nombre:
        raise ValidationError("nombre es requerido")

    new_cliente = DBCliente(**cliente_data.model_dump())
    try:
        db.add(new_cliente)
        db.commit()
        db.refresh(new_cliente)
    except IntegrityError:
        db.rollback()
        raise ConflictError("ya existe un cliente con esa cédula")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error al crear cliente: {e}")
        raise PersistenceError()

    logger.info(f"Cliente creado: {new_cliente.id}")
    return new_cliente


@router.put("/{cliente_id}", response_model=Cliente)
def update_cliente(
    cliente_update: ClienteUpdate,
    db_cliente: DBCliente = Depends(get_cliente_or_404),
    db: Session = Depends(get_db),
):
    """
    Actualiza parcialmente un cliente: los campos no enviados conservan su valor.
    """
    aplicar_cambios(db_cliente, campos_a_actualizar(cliente_update))
    try:
        db.commit()
        db.refresh(db_cliente)
    except IntegrityError:
        db.rollback()
        raise ConflictError("ya existe un cliente con esa cédula")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error al actualizar cliente {db_cliente.id}: {e}")
        raise PersistenceError()
    return db_cliente


@router.delete("/{cliente_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cliente(
    cliente_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(auth_utils.require_admin),
):
    """
    Elimina físicamente un cliente junto con sus vehículos y reparaciones.
    Solo accesible por administradores.
    """
    db_cliente = db.query(DBCliente).filter(DBCliente.id == cliente_id).first()
    if db_cliente is None:
        raise NotFoundError("cliente no encontrado")

    try:
        db.delete(db_cliente)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error al eliminar cliente {cliente_id}: {e}")
        raise PersistenceError()

    logger.info(f"Cliente {cliente_id} eliminado por {current_user.email}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
