"""PDF rendering for quotations, service orders and purchase orders."""
import logging
from io import BytesIO
from typing import Any, Dict, List, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from envirops.utils.formatters import money_pe, qty_pe, date_pe

logger = logging.getLogger(__name__)

TITLES = {
    'quotations': 'COTIZACIÓN',
    'service-orders': 'ORDEN DE SERVICIO',
    'purchase-orders': 'ORDEN DE COMPRA',
}

PRIMARY = colors.HexColor('#1E6B52')
MUTED = colors.HexColor('#7F8C8D')
TEXT = colors.HexColor('#34495E')


def _styles() -> Dict[str, ParagraphStyle]:
    styles = getSampleStyleSheet()
    return {
        'title': ParagraphStyle(
            'DocTitle', parent=styles['Heading1'], fontSize=20, textColor=PRIMARY,
            spaceAfter=10, alignment=TA_CENTER, fontName='Helvetica-Bold'
        ),
        'header': ParagraphStyle(
            'DocHeader', parent=styles['Normal'], fontSize=9, textColor=MUTED,
            alignment=TA_CENTER, spaceAfter=4
        ),
        'cell': ParagraphStyle('DocCell', parent=styles['Normal'], fontSize=8, leading=10),
        'footer': ParagraphStyle(
            'DocFooter', parent=styles['Normal'], fontSize=9, textColor=TEXT, alignment=TA_LEFT
        ),
    }


def _metadata_rows(kind_name: str, document) -> List[Tuple[str, str]]:
    rows = [('N°:', document.number), ('Fecha:', date_pe(document.date))]
    client = document.client
    if client:
        rows += [
            ('Cliente:', client.name),
            ('RUC:', client.ruc),
            ('Dirección:', client.address),
        ]
        if client.contact_person:
            rows.append(('Contacto:', client.contact_person))
    rows.append(('Moneda:', document.currency))

    if kind_name == 'quotations':
        if document.equipment_release_date:
            rows.append(('Salida de equipos:', date_pe(document.equipment_release_date)))
        if document.monitoring_location:
            rows.append(('Lugar de monitoreo:', document.monitoring_location))
    else:
        if document.gestor:
            rows.append(('Gestor:', document.gestor.name))
        if document.attendant_name:
            rows.append(('Atendido por:', document.attendant_name))
        if document.payment_terms:
            rows.append(('Condiciones de pago:', document.payment_terms))
    return rows


def render_document_pdf(kind_name: str, document, company: Dict[str, Any]) -> BytesIO:
    """
    Render a persisted document (with its client and items loaded) as PDF.

    Args:
        kind_name: 'quotations', 'service-orders' or 'purchase-orders'
        document: Quotation / ServiceOrder / PurchaseOrder instance
        company: name, ruc, address, email and phone printed in the header
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=0.6*inch,
        leftMargin=0.6*inch,
        topMargin=0.6*inch,
        bottomMargin=0.6*inch,
        title=f"{TITLES[kind_name]} {document.number}",
    )
    styles = _styles()
    elements = []

    # 1. Company header
    elements.append(Paragraph(TITLES[kind_name], styles['title']))
    company_line = company.get('name', '')
    if company.get('ruc'):
        company_line = f"{company_line} - RUC {company['ruc']}"
    elements.append(Paragraph(f"<b>{company_line}</b>", styles['header']))
    if company.get('address'):
        elements.append(Paragraph(company['address'], styles['header']))
    contact_parts = []
    if company.get('phone'):
        contact_parts.append(f"Tel: {company['phone']}")
    if company.get('email'):
        contact_parts.append(f"Email: {company['email']}")
    if contact_parts:
        elements.append(Paragraph(" | ".join(contact_parts), styles['header']))
    elements.append(Spacer(1, 0.25*inch))

    # 2. Document and client block
    info_table = Table(
        [[label, Paragraph(escape(str(value or "-")), styles['cell'])] for label, value in _metadata_rows(kind_name, document)],
        colWidths=[1.8*inch, 4.9*inch]
    )
    info_table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (0, -1), 'RIGHT'),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('TEXTCOLOR', (0, 0), (-1, -1), TEXT),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ]))
    elements.append(info_table)
    elements.append(Spacer(1, 0.25*inch))

    # 3. Items
    currency = document.currency
    table_data = [['Código', 'Servicio', 'Cant.', 'Días', 'P. Unit.', 'Importe']]
    for item in document.items:
        description = escape(item.name)
        if item.description:
            description += f"<br/><font size=7>{escape(item.description)}</font>"
        table_data.append([
            item.code,
            Paragraph(description, styles['cell']),
            qty_pe(item.quantity),
            str(item.days or 1),
            money_pe(item.unit_price, currency),
            money_pe(item.line_total, currency),
        ])

    items_table = Table(
        table_data,
        colWidths=[0.8*inch, 2.7*inch, 0.6*inch, 0.5*inch, 1.05*inch, 1.05*inch],
        repeatRows=1
    )
    items_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), PRIMARY),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
        ('ALIGN', (2, 1), (3, -1), 'CENTER'),
        ('ALIGN', (4, 1), (5, -1), 'RIGHT'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#BDC3C7')),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#ECF0F1')]),
    ]))
    elements.append(items_table)
    elements.append(Spacer(1, 0.15*inch))

    # 4. Totals
    totals_table = Table([
        ['Sub total', money_pe(document.subtotal, currency)],
        ['IGV 18%', money_pe(document.tax, currency)],
        ['Total con IGV', money_pe(document.total, currency)],
    ], colWidths=[5.65*inch, 1.05*inch])
    totals_table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('FONTNAME', (0, 2), (-1, 2), 'Helvetica-Bold'),
        ('TEXTCOLOR', (0, 2), (-1, 2), PRIMARY),
        ('LINEABOVE', (0, 2), (-1, 2), 1, PRIMARY),
    ]))
    elements.append(totals_table)
    elements.append(Spacer(1, 0.3*inch))

    # 5. Footer
    footer_parts = []
    if kind_name == 'quotations':
        footer_parts.append(f"<b>Validez de la oferta:</b> {document.validity_days} días")
        if document.notes:
            footer_parts.append(f"<b>Notas:</b> {escape(document.notes)}")
    else:
        if document.description:
            footer_parts.append(f"<b>Descripción:</b> {escape(document.description)}")
        if document.comments:
            footer_parts.append(f"<b>Comentarios:</b> {escape(document.comments)}")
    if footer_parts:
        elements.append(Paragraph("<br/>".join(footer_parts), styles['footer']))

    doc.build(elements)
    buffer.seek(0)
    logger.info(f"[PDF] Rendered {kind_name} {document.number} ({len(document.items)} items)")
    return buffer
