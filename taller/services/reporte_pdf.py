# taller/services/reporte_pdf.py

import io
from datetime import date, datetime
from typing import Any, Dict, Optional

# Importaciones de ReportLab
from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .reporte_service import ingreso_de


def _formatear_fecha(valor: Any) -> str:
    if isinstance(valor, (date, datetime)):
        return valor.strftime('%d/%m/%Y')
    return str(valor)[:10] if valor else "-"


def _formatear_monto(valor: Any) -> str:
    return f"{float(valor):.2f}" if valor is not None else "-"


def create_report_pdf(reporte: Dict[str, Any], desde: date, hasta: date, generado_por: Optional[str] = None) -> io.BytesIO:
    """
    Genera el reporte de reparaciones en PDF: encabezado, resumen y detalle
    en orden cronológico.
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(letter), leftMargin=0.5*inch, rightMargin=0.5*inch,
                           topMargin=0.75*inch, bottomMargin=0.75*inch)

    styles = getSampleStyleSheet()
    elements = []

    # Título principal del reporte
    elements.append(Paragraph("<b>REPORTE DE REPARACIONES</b>", styles['h1']))

    info_reporte = [
        ["Período:", f"{_formatear_fecha(desde)} al {_formatear_fecha(hasta)}"],
        ["Fecha de Generación:", datetime.now().strftime('%d/%m/%Y %H:%M:%S')],
        ["Generado por:", generado_por or 'Sistema'],
    ]
    info_table = Table(info_reporte, colWidths=[2*inch, 4*inch])
    info_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
    ]))
    elements.append(info_table)
    elements.append(Spacer(1, 20))

    # Resumen
    elements.append(Paragraph("<b>RESUMEN</b>", styles['h2']))
    elements.append(Spacer(1, 10))
    resumen_table = Table([
        ["Total de Reparaciones:", str(reporte.get('total_reparaciones', 0))],
        ["Total de Ingresos:", f"{reporte.get('total_ingresos', 0):.2f}"],
    ], colWidths=[3*inch, 2*inch])
    resumen_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (0, -1), colors.lightgrey),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ('GRID', (0, 0), (-1, -1), 1, colors.black),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
    ]))
    elements.append(resumen_table)
    elements.append(Spacer(1, 20))

    # Detalle del reporte
    elements.append(Paragraph("<b>DETALLE</b>", styles['h2']))
    elements.append(Spacer(1, 10))

    headers = ["ID", "Ingreso", "Salida", "Placa", "Vehículo", "Cliente", "Técnico", "Servicio", "Estado", "C.Estimado", "C.Final", "Ingreso $"]
    table_data = [headers]
    for row in reporte.get('items', []):
        vehiculo = f"{row.get('marca') or ''} {row.get('modelo') or ''}".strip() or "-"
        table_data.append([
            str(row['id']),
            _formatear_fecha(row.get('fecha_ingreso')),
            _formatear_fecha(row.get('fecha_salida')),
            row.get('placa') or "-",
            vehiculo,
            row.get('cliente_nombre') or "-",
            row.get('tecnico') or "-",
            row.get('tipo_servicio') or "-",
            row.get('estado') or "-",
            _formatear_monto(row.get('costo_estimado')),
            _formatear_monto(row.get('costo_final')),
            _formatear_monto(ingreso_de(row)),
        ])

    table = Table(table_data, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.darkblue),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, 0), 8),
        ('FONTSIZE', (0, 1), (-1, -1), 7),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.lightgrey]),
    ]))
    elements.append(table)

    elements.append(Spacer(1, 15))
    elements.append(Paragraph(
        "<i>Los ingresos usan el costo final de cada reparación; si no existe, el costo estimado.</i>",
        styles['Normal']
    ))

    doc.build(elements)
    buffer.seek(0)
    return buffer
