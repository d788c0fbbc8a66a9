# taller/services/reporte_service.py

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import Date, Integer, Numeric, bindparam, text
from sqlalchemy.orm import Session

from ..database import execute_query
from ..errors import MissingRangeError
from ..schemas.reportes import FiltroReporteReparaciones

logger = logging.getLogger(__name__)

BASE_QUERY = """
    SELECT
        r.id,
        r.vehiculo_id,
        r.descripcion,
        r.estado,
        r.costo_estimado,
        r.costo_final,
        r.fecha_ingreso,
        r.fecha_salida,
        r.tecnico,
        r.tipo_servicio,
        r.kms,
        v.placa,
        v.marca,
        v.modelo,
        c.id AS cliente_id,
        c.nombre AS cliente_nombre
    FROM
        reparaciones r
    JOIN
        vehiculos v ON v.id = r.vehiculo_id
    LEFT JOIN
        clientes c ON c.id = v.cliente_id
    WHERE
        r.fecha_ingreso BETWEEN :desde AND :hasta
"""

# Filtro de texto -> columna sobre la que se busca
COLUMNAS_FILTRO = {
    "tecnico": "r.tecnico",
    "tipo_servicio": "r.tipo_servicio",
    "placa": "v.placa",
    "marca": "v.marca",
    "modelo": "v.modelo",
}


def construir_consulta_reporte(
    desde: date,
    hasta: date,
    filtros: Optional[FiltroReporteReparaciones] = None,
) -> Tuple[str, Dict[str, Any]]:
    """
    Arma el SQL del reporte y sus parámetros. Cada filtro presente agrega un
    predicado AND; los de texto buscan por subcadena sin distinguir mayúsculas.
    """
    filtros = filtros or FiltroReporteReparaciones()
    conditions = []
    params: Dict[str, Any] = {"desde": desde, "hasta": hasta}

    for campo, columna in COLUMNAS_FILTRO.items():
        # Un filtro en blanco no filtra
        valor = (getattr(filtros, campo) or "").strip()
        if valor:
            conditions.append(f"LOWER({columna}) LIKE LOWER(:{campo})")
            params[campo] = f"%{valor}%"

    cliente = (filtros.cliente or "").strip()
    if cliente:
        params["cliente"] = f"%{cliente}%"
        if cliente.isdigit():
            conditions.append("(c.id = :cliente_id OR LOWER(c.nombre) LIKE LOWER(:cliente))")
            params["cliente_id"] = int(cliente)
        else:
            conditions.append("LOWER(c.nombre) LIKE LOWER(:cliente)")

    sql = BASE_QUERY
    if conditions:
        sql += " AND " + " AND ".join(conditions)

    # Orden cronológico: el reporte se lee como un libro de ingresos
    sql += " ORDER BY r.fecha_ingreso ASC, r.id ASC"
    return sql, params


def ingreso_de(row: Mapping[str, Any]) -> Decimal:
    """Ingreso de una reparación: costo final, si no el estimado, si no cero."""
    for campo in ("costo_final", "costo_estimado"):
        valor = row.get(campo)
        if valor is not None:
            return Decimal(str(valor))
    return Decimal("0")


def calcular_total_ingresos(rows: Iterable[Mapping[str, Any]]) -> Decimal:
    return sum((ingreso_de(row) for row in rows), Decimal("0"))


def generar_reporte(
    db: Session,
    desde: Optional[date],
    hasta: Optional[date],
    filtros: Optional[FiltroReporteReparaciones] = None,
) -> Dict[str, Any]:
    """
    Genera el reporte de reparaciones ingresadas entre `desde` y `hasta` (inclusive).

    Returns:
        {"items": [...], "total_reparaciones": int, "total_ingresos": float}
    """
    if desde is None or hasta is None:
        raise MissingRangeError()

    sql, params = construir_consulta_reporte(desde, hasta, filtros)
    statement = text(sql).bindparams(
        bindparam("desde", type_=Date),
        bindparam("hasta", type_=Date),
    ).columns(
        fecha_ingreso=Date,
        fecha_salida=Date,
        costo_estimado=Numeric(12, 2),
        costo_final=Numeric(12, 2),
        kms=Integer,
    )
    result = execute_query(db, statement, params)

    items: List[Dict[str, Any]] = [dict(row) for row in result.mappings()]
    total_ingresos = calcular_total_ingresos(items)

    logger.info(f"Reporte {desde} a {hasta}: {len(items)} reparaciones, ingresos {total_ingresos}")
    return {
        "items": items,
        "total_reparaciones": len(items),
        "total_ingresos": float(total_ingresos),
    }
