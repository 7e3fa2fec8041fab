"""
Dashboard Service

Read-only views for the dashboard: headline counts with trends against the
previous period, latest orders and products, and stock alerts.
"""

from datetime import timedelta

from django.utils import timezone

from inventory.models import Customer, Order, Product, Stock
from utils.constants import (
    CURRENCY_SYMBOL, DEFAULT_MINIMUM_STOCK, HIGH_PRIORITY_DAYS,
    MEDIUM_PRIORITY_DAYS, STOCK_TYPE_LABELS, TREND_WINDOW_DAYS
)


class DashboardService:

    @staticmethod
    def percentage_change(current: int, previous: int) -> tuple:
        """
        Returns:
            (change, trend) e.g. ("+25%", "up"); a rise from zero counts as +100%
        """
        if previous == 0:
            percent = 100.0 if current > 0 else 0.0
        else:
            percent = (current - previous) / previous * 100

        if percent > 0:
            return f"+{percent:.0f}%", 'up'
        if percent < 0:
            return f"{percent:.0f}%", 'down'
        return "0%", 'neutral'

    @staticmethod
    def _period_trend(queryset, now=None) -> tuple:
        now = now or timezone.now()
        window = timedelta(days=TREND_WINDOW_DAYS)
        current_start = now - window
        previous_start = current_start - window

        current = queryset.filter(created_at__gte=current_start, created_at__lte=now).count()
        previous = queryset.filter(created_at__gte=previous_start, created_at__lt=current_start).count()
        return DashboardService.percentage_change(current, previous)

    @staticmethod
    def get_stats() -> dict:
        now = timezone.now()

        products = Product.objects.all()
        active_orders = Order.objects.filter(status=Order.Status.PENDING)
        customers = Customer.objects.all()
        low_stock = Stock.objects.filter(status=Stock.Status.LOW)

        product_change, product_trend = DashboardService._period_trend(products, now)
        order_change, order_trend = DashboardService._period_trend(active_orders, now)
        customer_change, customer_trend = DashboardService._period_trend(customers, now)
        stock_change, stock_trend = DashboardService._period_trend(low_stock, now)

        return {
            'totalProducts': products.count(),
            'activeOrders': active_orders.count(),
            'totalCustomers': customers.count(),
            'lowStockItems': low_stock.count(),
            'productChange': product_change,
            'productTrend': product_trend,
            'orderChange': order_change,
            'orderTrend': order_trend,
            'customerChange': customer_change,
            'customerTrend': customer_trend,
            'stockChange': stock_change,
            'stockTrend': stock_trend,
        }

    @staticmethod
    def order_priority(delivery_date, today=None) -> str:
        today = today or timezone.localdate()
        days_left = (delivery_date - today).days
        if days_left <= HIGH_PRIORITY_DAYS:
            return 'high'
        if days_left <= MEDIUM_PRIORITY_DAYS:
            return 'medium'
        return 'low'

    @staticmethod
    def stock_type_label(stock) -> str:
        """E.g. "Surat Mills Gray Stock" or "Floral Print Design"."""
        if stock.stock_type not in STOCK_TYPE_LABELS:
            return stock.stock_type
        key, suffix = STOCK_TYPE_LABELS[stock.stock_type]
        prefix = (stock.stock_details or {}).get(key) or ''
        return f"{prefix} {suffix}".strip()

    @staticmethod
    def get_recent_orders(limit: int = 5) -> list:
        today = timezone.localdate()
        recent = []
        for order in Order.objects.select_related('customer').order_by('-created_at')[:limit]:
            first_item = order.order_items[0] if order.order_items else {}
            quantity = float(first_item.get('quantity') or 0)
            recent.append({
                'id': str(order.id),
                'orderNumber': order.order_number,
                'customer': order.customer.customer_name,
                'product': first_item.get('product', 'N/A'),
                'quantity': f"{quantity:g} {first_item.get('unit', '')}".strip(),
                'status': order.status,
                'priority': DashboardService.order_priority(order.delivery_date, today),
                'amount': f"{CURRENCY_SYMBOL}{order.total_amount:,.2f}",
                'orderDate': order.order_date.isoformat(),
                'deliveryDate': order.delivery_date.isoformat(),
            })
        return recent

    @staticmethod
    def get_latest_products(limit: int = 5) -> list:
        return [
            {
                'id': str(product.id),
                'name': product.product_name,
                'category': product.category,
                'createdAt': product.created_at.isoformat(),
            }
            for product in Product.objects.order_by('-created_at')[:limit]
        ]

    @staticmethod
    def get_stock_alerts(limit: int = 5) -> list:
        """
        Stocks that are low or out, or hold a variant under the product's minimum.
        """
        minimums = dict(Product.objects.values_list('product_name', 'minimum_stock'))
        alerts = []

        for stock in Stock.objects.order_by('-updated_at'):
            minimum = minimums.get(stock.product_name, DEFAULT_MINIMUM_STOCK)
            variants = [
                {
                    'color': variant.get('color'),
                    'quantity': float(variant.get('quantity') or 0),
                    'unit': variant.get('unit', ''),
                    'belowMinimum': float(variant.get('quantity') or 0) < minimum,
                }
                for variant in stock.variants
            ]
            flagged = stock.status in (Stock.Status.LOW, Stock.Status.OUT)
            if not flagged and not any(v['belowMinimum'] for v in variants):
                continue

            critical = stock.status == Stock.Status.OUT or any(v['quantity'] == 0 for v in variants)
            alerts.append({
                'id': str(stock.id),
                'product': stock.product_name,
                'stockType': stock.stock_type,
                'stockTypeLabel': DashboardService.stock_type_label(stock),
                'status': stock.status,
                'totalQuantity': stock.total_quantity,
                'variantsDetails': variants,
                'minimum': minimum,
                'severity': 'critical' if critical else 'warning',
                'updatedAt': stock.updated_at.isoformat(),
            })
            if len(alerts) >= limit:
                break

        return alerts
