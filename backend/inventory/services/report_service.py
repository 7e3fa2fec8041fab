"""
Report Service

Sales summaries for the reports page and the daily WhatsApp report.
"""

import logging
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Optional

from django.utils import timezone

from inventory.models import Customer, Order, Stock
from utils.constants import CURRENCY_SYMBOL, MONTH_LABELS
from .order_service import OrderService

logger = logging.getLogger(__name__)


class ReportService:

    @staticmethod
    def get_orders(date_from: Optional[date] = None, date_to: Optional[date] = None):
        orders = Order.objects.select_related('customer').order_by('order_date', 'created_at')
        if date_from:
            orders = orders.filter(order_date__gte=date_from)
        if date_to:
            orders = orders.filter(order_date__lte=date_to)
        return orders

    @staticmethod
    def sales_summary(date_from: Optional[date] = None, date_to: Optional[date] = None) -> dict:
        """
        Sales summary over an optional order date range.

        Returns:
            Dictionary with totals, monthly performance, top products and
            top customers
        """
        orders = ReportService.get_orders(date_from, date_to)

        total_revenue = Decimal('0.00')
        confirmed = 0
        monthly = OrderedDict()

        for order in orders:
            amount = order.total_amount
            total_revenue += amount
            if order.is_confirmed:
                confirmed += 1

            label = f"{MONTH_LABELS[order.order_date.month - 1]} {order.order_date.year}"
            bucket = monthly.setdefault(label, {'month': label, 'revenue': Decimal('0.00'), 'orders': 0})
            bucket['revenue'] += amount
            bucket['orders'] += 1

        total_orders = orders.count()
        average = (total_revenue / total_orders).quantize(Decimal('0.01')) if total_orders else Decimal('0.00')

        return {
            'dateFrom': date_from.isoformat() if date_from else None,
            'dateTo': date_to.isoformat() if date_to else None,
            'totalRevenue': float(total_revenue),
            'totalOrders': total_orders,
            'confirmedOrders': confirmed,
            'pendingOrders': total_orders - confirmed,
            'averageOrderValue': float(average),
            'monthlyPerformance': [
                {'month': bucket['month'], 'revenue': float(bucket['revenue']), 'orders': bucket['orders']}
                for bucket in monthly.values()
            ],
            'topProducts': OrderService.top_products(limit=10, orders=orders),
            'topCustomers': OrderService.top_customers(limit=10, orders=orders),
        }

    @staticmethod
    def daily_report_message(report_date: Optional[date] = None) -> str:
        report_date = report_date or timezone.localdate()

        orders = Order.objects.filter(order_date=report_date)
        revenue = sum((order.total_amount for order in orders), Decimal('0.00'))
        confirmed = orders.filter(status=Order.Status.CONFIRMED).count()
        new_customers = Customer.objects.filter(created_at__date=report_date).count()
        low_stock = Stock.objects.filter(status=Stock.Status.LOW).count()
        out_of_stock = Stock.objects.filter(status=Stock.Status.OUT).count()

        return (
            f"Daily Report - {report_date.strftime('%d %b %Y')}\n\n"
            f"Orders: {orders.count()} ({confirmed} confirmed)\n"
            f"Revenue: {CURRENCY_SYMBOL}{revenue:,.2f}\n"
            f"New Customers: {new_customers}\n"
            f"Low Stock: {low_stock}\n"
            f"Out of Stock: {out_of_stock}"
        )
