"""
PDF Report Generation Service

Renders the sales summary as a PDF with ReportLab.
"""

from io import BytesIO
from typing import Dict

from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
import logging

logger = logging.getLogger(__name__)


class PDFReportService:

    TABLE_STYLE = TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#4a5568')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, 0), 10),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 1), (-1, -1), 9),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#cbd5e0')),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f7fafc')]),
    ])

    @staticmethod
    def _format_currency(amount) -> str:
        # Helvetica has no rupee glyph
        return f"Rs. {float(amount):,.2f}"

    @staticmethod
    def generate_sales_report_pdf(summary: Dict) -> BytesIO:
        """
        Generate the sales report PDF.

        Args:
            summary: Output of ReportService.sales_summary

        Returns:
            BytesIO object containing the PDF
        """
        logger.info("Generating sales report PDF")

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=54,
            leftMargin=54,
            topMargin=54,
            bottomMargin=36,
        )

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            'ReportTitle',
            parent=styles['Heading1'],
            fontSize=22,
            textColor=colors.HexColor('#1a202c'),
            spaceAfter=20,
            alignment=TA_CENTER
        )
        heading_style = ParagraphStyle(
            'ReportHeading',
            parent=styles['Heading2'],
            fontSize=14,
            textColor=colors.HexColor('#2d3748'),
            spaceAfter=10,
            spaceBefore=14
        )

        period = f"{summary.get('dateFrom') or 'All time'} to {summary.get('dateTo') or 'today'}"
        elements = [
            Paragraph(f"Sales Report<br/>{period}", title_style),
            Paragraph(f"Generated: {timezone.now().strftime('%Y-%m-%d %H:%M')}", styles['Normal']),
            Spacer(1, 12),
            Paragraph("Summary", heading_style),
        ]

        summary_table = Table([
            ['Metric', 'Value'],
            ['Total Revenue', PDFReportService._format_currency(summary['totalRevenue'])],
            ['Total Orders', str(summary['totalOrders'])],
            ['Confirmed Orders', str(summary['confirmedOrders'])],
            ['Pending Orders', str(summary['pendingOrders'])],
            ['Average Order Value', PDFReportService._format_currency(summary['averageOrderValue'])],
        ], colWidths=[3 * inch, 3 * inch])
        summary_table.setStyle(PDFReportService.TABLE_STYLE)
        elements.append(summary_table)

        sections = [
            (
                "Monthly Performance",
                ['Month', 'Revenue', 'Orders'],
                [
                    [m['month'], PDFReportService._format_currency(m['revenue']), str(m['orders'])]
                    for m in summary['monthlyPerformance']
                ],
                [2.5 * inch, 2 * inch, 1.5 * inch],
            ),
            (
                "Top Products",
                ['Product', 'Quantity', 'Revenue', 'Orders'],
                [
                    [p['productName'], f"{p['quantity']:g}", PDFReportService._format_currency(p['revenue']), str(p['orders'])]
                    for p in summary['topProducts']
                ],
                [2.5 * inch, 1 * inch, 1.5 * inch, 1 * inch],
            ),
            (
                "Top Customers",
                ['Customer', 'City', 'Orders', 'Revenue'],
                [
                    [c['customerName'], c['city'], str(c['orderCount']), PDFReportService._format_currency(c['revenue'])]
                    for c in summary['topCustomers']
                ],
                [2.5 * inch, 1.25 * inch, 0.75 * inch, 1.5 * inch],
            ),
        ]

        for title, headers, rows, widths in sections:
            elements.append(Paragraph(title, heading_style))
            if not rows:
                elements.append(Paragraph("No data for this period.", styles['Normal']))
                continue
            table = Table([headers] + rows, colWidths=widths, repeatRows=1)
            table.setStyle(PDFReportService.TABLE_STYLE)
            elements.append(table)

        doc.build(elements)
        buffer.seek(0)

        logger.info("Sales report PDF generated")
        return buffer
