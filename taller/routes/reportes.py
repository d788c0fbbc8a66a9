from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from .. import auth as auth_utils
from ..database import get_db
from ..errors import ValidationError
from ..schemas.reportes import FiltroReporteReparaciones, ReporteReparacionesResponse
from ..schemas.token import TokenData
from ..services.reporte_pdf import create_report_pdf
from ..services.reporte_service import generar_reporte

router = APIRouter(
    prefix="/reportes",
    tags=["reportes"]
)


@router.get("", response_model=ReporteReparacionesResponse, summary="Reporte de reparaciones por rango de fechas en JSON o PDF")
def get_repairs_report(
    desde: Optional[date] = Query(None, description="Fecha de inicio (YYYY-MM-DD), inclusive"),
    hasta: Optional[date] = Query(None, description="Fecha de fin (YYYY-MM-DD), inclusive"),
    tecnico: Optional[str] = Query(None, description="Técnico"),
    tipo_servicio: Optional[str] = Query(None, description="Tipo de servicio"),
    placa: Optional[str] = Query(None, description="Placa del vehículo"),
    marca: Optional[str] = Query(None, description="Marca del vehículo"),
    modelo: Optional[str] = Query(None, description="Modelo del vehículo"),
    cliente: Optional[str] = Query(None, description="Nombre o ID del cliente"),
    formato: str = Query("json", description="Formato de salida: 'json' o 'pdf'"),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(auth_utils.get_current_user),
):
    """
    Endpoint para obtener el reporte de reparaciones ingresadas en un rango de fechas.
    - **desde, hasta**: Rango de fechas (obligatorio).
    - **tecnico, tipo_servicio, placa, marca, modelo, cliente**: Filtros opcionales por coincidencia parcial.
    - **formato**: Devuelve 'json' por defecto o 'pdf' para descargar un archivo.

    Sin paginación: todas las filas del rango van en una sola respuesta.
    """
    formato = formato.lower()
    if formato not in ("json", "pdf"):
        raise ValidationError("formato debe ser 'json' o 'pdf'")

    filtros = FiltroReporteReparaciones(
        tecnico=tecnico,
        tipo_servicio=tipo_servicio,
        placa=placa,
        marca=marca,
        modelo=modelo,
        cliente=cliente,
    )
    reporte = generar_reporte(db, desde, hasta, filtros)

    if formato == "pdf":
        pdf_buffer = create_report_pdf(reporte, desde, hasta, generado_por=current_user.name)
        headers = {
            'Content-Disposition': f'attachment; filename="reporte_{desde.isoformat()}_a_{hasta.isoformat()}.pdf"'
        }
        return Response(content=pdf_buffer.getvalue(), media_type='application/pdf', headers=headers)

    return reporte
