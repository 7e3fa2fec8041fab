"""
Sales Report Export Service

Generates CSV and XLSX downloads of the sales summary produced by
ReportService.
"""

import csv
from io import BytesIO, StringIO
from typing import Dict, List

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
import logging

logger = logging.getLogger(__name__)


class ReportExportService:
    """
    Service for exporting the sales summary to CSV and XLSX formats.

    Sections:
    - Summary totals
    - Monthly performance
    - Top products
    - Top customers
    """

    SUMMARY_ROWS = [
        ('Total Revenue', 'totalRevenue'),
        ('Total Orders', 'totalOrders'),
        ('Confirmed Orders', 'confirmedOrders'),
        ('Pending Orders', 'pendingOrders'),
        ('Average Order Value', 'averageOrderValue'),
    ]

    MONTHLY_HEADERS = ['Month', 'Revenue (INR)', 'Orders']
    PRODUCT_HEADERS = ['Product', 'Quantity', 'Revenue (INR)', 'Orders']
    CUSTOMER_HEADERS = ['Customer', 'City', 'Orders', 'Revenue (INR)']

    @staticmethod
    def _sections(summary: Dict) -> List[tuple]:
        """Tabular sections as (title, headers, rows, money column indexes)."""
        return [
            (
                'Monthly Performance',
                ReportExportService.MONTHLY_HEADERS,
                [[m['month'], m['revenue'], m['orders']] for m in summary['monthlyPerformance']],
                {1},
            ),
            (
                'Top Products',
                ReportExportService.PRODUCT_HEADERS,
                [[p['productName'], p['quantity'], p['revenue'], p['orders']] for p in summary['topProducts']],
                {2},
            ),
            (
                'Top Customers',
                ReportExportService.CUSTOMER_HEADERS,
                [[c['customerName'], c['city'], c['orderCount'], c['revenue']] for c in summary['topCustomers']],
                {3},
            ),
        ]

    @staticmethod
    def export_to_csv(summary: Dict) -> StringIO:
        """
        Export the sales summary to CSV, one block per section.

        Returns:
            StringIO object containing CSV data
        """
        logger.info("Generating sales report CSV export")

        output = StringIO()
        writer = csv.writer(output)

        writer.writerow(['Sales Summary'])
        writer.writerow(['Period', summary.get('dateFrom') or 'All time', summary.get('dateTo') or 'Today'])
        for label, key in ReportExportService.SUMMARY_ROWS:
            writer.writerow([label, summary[key]])

        for title, headers, rows, _ in ReportExportService._sections(summary):
            writer.writerow([])
            writer.writerow([title])
            writer.writerow(headers)
            writer.writerows(rows)

        output.seek(0)
        logger.info("CSV export completed successfully")
        return output

    @staticmethod
    def export_to_xlsx(summary: Dict) -> BytesIO:
        """
        Export the sales summary to XLSX, one worksheet per section.

        Returns:
            BytesIO object containing XLSX data
        """
        logger.info("Generating sales report XLSX export")

        wb = Workbook()
        ws = wb.active
        ws.title = "Summary"

        # Define styles
        header_font = Font(name='Calibri', size=11, bold=True, color='FFFFFF')
        header_fill = PatternFill(start_color='4A5568', end_color='4A5568', fill_type='solid')
        header_alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
        number_alignment = Alignment(horizontal='right', vertical='center')
        border = Border(
            left=Side(style='thin', color='CBD5E0'),
            right=Side(style='thin', color='CBD5E0'),
            top=Side(style='thin', color='CBD5E0'),
            bottom=Side(style='thin', color='CBD5E0')
        )

        # Summary sheet
        ws.cell(row=1, column=1, value='Sales Summary').font = Font(name='Calibri', size=14, bold=True)
        ws.cell(row=2, column=1, value='Period')
        ws.cell(row=2, column=2, value=f"{summary.get('dateFrom') or 'All time'} to {summary.get('dateTo') or 'today'}")
        for offset, (label, key) in enumerate(ReportExportService.SUMMARY_ROWS):
            label_cell = ws.cell(row=4 + offset, column=1, value=label)
            label_cell.font = Font(name='Calibri', size=11, bold=True)
            label_cell.border = border
            value_cell = ws.cell(row=4 + offset, column=2, value=summary[key])
            value_cell.alignment = number_alignment
            value_cell.border = border
            if key in ('totalRevenue', 'averageOrderValue'):
                value_cell.number_format = '#,##0.00'
        ws.column_dimensions['A'].width = 24
        ws.column_dimensions['B'].width = 28

        # One sheet per section
        for title, headers, rows, money_columns in ReportExportService._sections(summary):
            sheet = wb.create_sheet(title=title)

            for col_num, header in enumerate(headers, 1):
                cell = sheet.cell(row=1, column=col_num, value=header)
                cell.font = header_font
                cell.fill = header_fill
                cell.alignment = header_alignment
                cell.border = border
                sheet.column_dimensions[get_column_letter(col_num)].width = 30 if col_num == 1 else 16

            for row_num, row in enumerate(rows, 2):
                for col_index, value in enumerate(row):
                    cell = sheet.cell(row=row_num, column=col_index + 1, value=value)
                    cell.border = border
                    if isinstance(value, (int, float)):
                        cell.alignment = number_alignment
                    if col_index in money_columns:
                        cell.number_format = '#,##0.00'

            sheet.freeze_panes = 'A2'

        output = BytesIO()
        wb.save(output)
        output.seek(0)

        logger.info("XLSX export completed successfully")
        return output
