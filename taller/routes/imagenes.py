# taller/routes/imagenes.py

import base64
import binascii
import logging
from io import BytesIO
from typing import List

from fastapi import APIRouter, Depends, Response, status
from PIL import Image, UnidentifiedImageError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import auth as auth_utils
from ..database import get_db
from ..errors import NotFoundError, PersistenceError, ValidationError
from ..models.imagen_reparacion import ImagenReparacion as DBImagenReparacion
from ..models.reparacion import Reparacion as DBReparacion
from ..schemas.imagen import ImagenReparacion, ImagenReparacionCreate
from ..schemas.token import TokenData

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reparaciones/{reparacion_id}/imagenes",
    tags=["imagenes"]
)


def _verificar_reparacion(db: Session, reparacion_id: int) -> None:
    if db.query(DBReparacion.id).filter(DBReparacion.id == reparacion_id).first() is None:
        raise NotFoundError("reparacion no encontrada")


def decodificar_imagen(datos_base64: str) -> bytes:
    """
    Decodifica el contenido en base64 (acepta el prefijo `data:image/...;base64,`)
    y verifica con Pillow que sea una imagen.
    """
    if datos_base64.startswith("data:") and "," in datos_base64:
        datos_base64 = datos_base64.split(",", 1)[1]
    try:
        contenido = base64.b64decode(datos_base64, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("datos_base64 no es base64 válido")
    if not contenido:
        raise ValidationError("datos_base64 está vacío")

    try:
        with Image.open(BytesIO(contenido)) as image:
            image.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError):
        raise ValidationError("el archivo no es una imagen válida")
    return contenido


@router.get("", response_model=List[ImagenReparacion])
def read_imagenes(reparacion_id: int, db: Session = Depends(get_db)):
    """Lista las imágenes de una reparación, las más recientes primero."""
    _verificar_reparacion(db, reparacion_id)
    return db.query(DBImagenReparacion).filter(
        DBImagenReparacion.reparacion_id == reparacion_id
    ).order_by(DBImagenReparacion.id.desc()).all()


@router.post("", response_model=ImagenReparacion, status_code=status.HTTP_201_CREATED)
def create_imagen(
    reparacion_id: int,
    imagen_data: ImagenReparacionCreate,
    db: Session = Depends(get_db),
):
    """
    Adjunta una imagen (en base64) a una reparación existente.
    Requiere `nombre_archivo`, `tipo_mime` y `datos_base64`.
    """
    if not imagen_data.nombre_archivo or not imagen_data.tipo_mime or not imagen_data.datos_base64:
        raise ValidationError("nombre_archivo, tipo_mime y datos_base64 son requeridos")
    if not imagen_data.tipo_mime.startswith("image/"):
        raise ValidationError("Solo se aceptan imágenes.")

    contenido = decodificar_imagen(imagen_data.datos_base64)

    # Verificación e insert van en la misma transacción de la sesión
    _verificar_reparacion(db, reparacion_id)

    new_imagen = DBImagenReparacion(
        reparacion_id=reparacion_id,
        nombre_archivo=imagen_data.nombre_archivo,
        tipo_mime=imagen_data.tipo_mime,
        tamano_bytes=len(contenido),
        datos_base64=imagen_data.datos_base64,
        descripcion=imagen_data.descripcion,
    )
    try:
        db.add(new_imagen)
        db.commit()
        db.refresh(new_imagen)
    except IntegrityError:
        db.rollback()
        raise NotFoundError("reparacion no encontrada")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error al guardar imagen de la reparacion {reparacion_id}: {e}")
        raise PersistenceError()

    logger.info(f"Imagen {new_imagen.id} ({new_imagen.tamano_bytes} bytes) agregada a la reparacion {reparacion_id}")
    return new_imagen


@router.delete("/{imagen_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_imagen(
    reparacion_id: int,
    imagen_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(auth_utils.require_admin),
):
    """Elimina una imagen de la reparación indicada. Solo administradores."""
    db_imagen = db.query(DBImagenReparacion).filter(
        DBImagenReparacion.id == imagen_id,
        DBImagenReparacion.reparacion_id == reparacion_id,
    ).first()
    if db_imagen is None:
        raise NotFoundError("imagen no encontrada")

    try:
        db.delete(db_imagen)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error al eliminar imagen {imagen_id}: {e}")
        raise PersistenceError()

    logger.info(f"Imagen {imagen_id} de la reparacion {reparacion_id} eliminada por {current_user.email}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
