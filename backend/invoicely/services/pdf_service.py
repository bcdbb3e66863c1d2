"""
PDF Invoice Generation Service
Creates invoices with business details, line items and totals, styled by the invoice's template
"""
import logging
from io import BytesIO
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, Image
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_CENTER, TA_RIGHT, TA_LEFT

from invoicely.core.config import settings
from invoicely.models.business_settings import BusinessSettings
from invoicely.models.invoice import Invoice
from invoicely.services.invoice_templates import get_template

logger = logging.getLogger(__name__)

_ALIGNMENTS = {"left": TA_LEFT, "center": TA_CENTER, "right": TA_RIGHT}


def _money(value) -> str:
    return f"${Decimal(str(value or 0)):,.2f}"


def _quantity(value) -> str:
    return f"{Decimal(str(value)).normalize():f}"


def _logo_flowable(business: Optional[BusinessSettings]) -> Optional[Image]:
    """Logo image from the uploads directory, or None if unavailable."""
    if not business or not business.logo or not business.logo.startswith("/uploads/"):
        return None
    path = Path(settings.UPLOAD_DIR) / Path(business.logo).name
    if not path.is_file():
        return None
    try:
        width, height = ImageReader(str(path)).getSize()
    except Exception as e:
        logger.warning(f"Skipping unreadable logo {path}: {e}")
        return None
    target_width = 1.2 * inch
    return Image(str(path), width=target_width, height=target_width * height / width)


def _business_block(business: Optional[BusinessSettings]) -> str:
    if not business:
        return ""
    lines = [
        f"<b>{escape(business.business_name)}</b>",
        escape(business.address),
        escape(f"{business.city}, {business.state} {business.zip_code}"),
    ]
    if business.phone:
        lines.append(escape(business.phone))
    if business.email:
        lines.append(escape(business.email))
    return "<br/>".join(lines)


def generate_invoice_pdf(invoice: Invoice, business: Optional[BusinessSettings] = None) -> BytesIO:
    """
    Generate PDF for an invoice

    Args:
        invoice: Invoice with line items loaded
        business: Sender details for the "from" block (optional)

    Returns:
        BytesIO buffer containing PDF data
    """
    style = get_template(invoice.template)
    accent = colors.HexColor(style.accent_color)

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        topMargin=0.5*inch,
        bottomMargin=0.5*inch,
        title=f"Invoice {invoice.invoice_number}",
    )

    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'InvoiceTitle',
        parent=styles['Heading1'],
        fontSize=24,
        textColor=accent,
        alignment=_ALIGNMENTS.get(style.title_alignment, TA_CENTER),
        spaceAfter=12
    )

    heading_style = ParagraphStyle(
        'InvoiceHeading',
        parent=styles['Heading2'],
        fontSize=14,
        textColor=colors.HexColor('#1f2937'),
        spaceAfter=6
    )

    normal_style = ParagraphStyle(
        'InvoiceNormal',
        parent=styles['Normal'],
        fontSize=10,
        textColor=colors.HexColor('#374151')
    )

    header_cell_style = ParagraphStyle(
        'InvoiceHeaderCell',
        parent=normal_style,
        textColor=colors.HexColor(style.header_text_color),
    )

    total_style = ParagraphStyle(
        'InvoiceTotal',
        parent=heading_style,
        textColor=accent,
        alignment=TA_RIGHT,
    )

    right_style = ParagraphStyle('InvoiceRight', parent=normal_style, alignment=TA_RIGHT)

    logo = _logo_flowable(business)
    if logo is not None:
        elements.append(logo)
        elements.append(Spacer(1, 0.1*inch))

    elements.append(Paragraph(escape(style.title), title_style))
    elements.append(Spacer(1, 0.2*inch))

    # Sender and invoice info side by side
    created = invoice.created_at or datetime.now()
    info_data = [
        [
            Paragraph(_business_block(business), normal_style),
            Paragraph(f"<b>Invoice #:</b> {escape(invoice.invoice_number)}<br/>"
                      f"<b>Date:</b> {created.strftime('%d %b %Y')}<br/>"
                      f"<b>Due Date:</b> {invoice.due_date.strftime('%d %b %Y')}<br/>"
                      f"<b>Status:</b> {escape(invoice.status.upper())}", normal_style)
        ]
    ]

    info_table = Table(info_data, colWidths=[3.5*inch, 3*inch])
    info_table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    elements.append(info_table)
    elements.append(Spacer(1, 0.3*inch))

    elements.append(Paragraph("<b>Bill To:</b>", heading_style))
    elements.append(Paragraph(f"<b>{escape(invoice.client_name)}</b>", normal_style))
    if invoice.description:
        elements.append(Spacer(1, 0.1*inch))
        elements.append(Paragraph(escape(invoice.description), normal_style))
    elements.append(Spacer(1, 0.3*inch))

    # Line items
    items_data = [
        [Paragraph("<b>Description</b>", header_cell_style),
         Paragraph("<b>Qty</b>", header_cell_style),
         Paragraph("<b>Rate</b>", header_cell_style),
         Paragraph("<b>Amount</b>", header_cell_style)]
    ]
    for item in invoice.line_items:
        items_data.append([
            Paragraph(escape(item.description), normal_style),
            Paragraph(_quantity(item.quantity), right_style),
            Paragraph(_money(item.unit_price), right_style),
            Paragraph(_money(item.amount), right_style),
        ])

    items_table = Table(items_data, colWidths=[3*inch, 1*inch, 1.2*inch, 1.3*inch], repeatRows=1)
    items_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor(style.header_background)),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('TOPPADDING', (0, 0), (-1, 0), 8),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor(style.stripe_color)]),
        ('TOPPADDING', (0, 1), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 1), (-1, -1), 6),
    ]))
    elements.append(items_table)
    elements.append(Spacer(1, 0.2*inch))

    # Totals
    tax_rate_percent = Decimal(str(invoice.tax_rate or 0)) * 100
    total_data = [
        ['', '', Paragraph("<b>Subtotal:</b>", right_style), Paragraph(_money(invoice.subtotal), right_style)],
        ['', '', Paragraph(f"<b>Tax ({tax_rate_percent.normalize():f}%):</b>", right_style),
         Paragraph(_money(invoice.tax_amount), right_style)],
        ['', '', Paragraph("<b>TOTAL:</b>", total_style), Paragraph(f"<b>{_money(invoice.amount)}</b>", total_style)]
    ]

    total_table = Table(total_data, colWidths=[3*inch, 1*inch, 1.2*inch, 1.3*inch])
    total_table.setStyle(TableStyle([
        ('LINEABOVE', (2, 2), (-1, 2), 1, accent),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
    ]))
    elements.append(total_table)
    elements.append(Spacer(1, 0.5*inch))

    footer_style = ParagraphStyle(
        'Footer',
        parent=styles['Normal'],
        fontSize=8,
        textColor=colors.grey,
        alignment=TA_CENTER
    )
    elements.append(Paragraph("Thank you for your business!", footer_style))
    elements.append(Paragraph("Payment is due within 30 days of invoice date.", footer_style))

    doc.build(elements)

    buffer.seek(0)
    return buffer


def pdf_filename(invoice: Invoice) -> str:
    safe = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in invoice.invoice_number)
    return f"invoice_{safe or invoice.id}.pdf"
