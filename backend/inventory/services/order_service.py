"""
Order Service

Order lifecycle with credit limit enforcement and stock deduction.

Status flow: pending -> confirmed. Confirming an order deducts its line
items from stock; deleting a confirmed order puts them back. There is no
way back from confirmed to pending.
"""

import logging
from collections import defaultdict
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from inventory.models import Customer, Order
from utils.constants import MONTH_LABELS
from utils.exceptions import CreditLimitExceededError, InvalidStatusTransitionError
from .notification_service import NotificationService
from .stock_service import StockService

logger = logging.getLogger(__name__)


class OrderService:

    @staticmethod
    def check_credit(customer: Customer, items: list, exclude_order: Order = None):
        """
        Raise CreditLimitExceededError when the customer's existing order value
        plus ``items`` would exceed their credit limit.
        """
        existing = Order.objects.filter(customer=customer)
        if exclude_order is not None:
            existing = existing.exclude(pk=exclude_order.pk)

        used = sum((order.total_amount for order in existing), Decimal('0.00'))
        order_total = Order.items_total(items)

        if used + order_total > customer.credit_limit:
            available = max(customer.credit_limit - used, Decimal('0.00'))
            raise CreditLimitExceededError(
                f"Credit limit exceeded for {customer.customer_name}. "
                f"Available credit: {available}, order total: {order_total}"
            )

    @staticmethod
    def _items_signature(items):
        return [
            (
                item.get('product'), item.get('color'), float(item.get('quantity') or 0),
                item.get('unit'), float(item.get('price_per_meter') or 0),
            )
            for item in items
        ]

    @staticmethod
    def _notify_stock_levels(stock_changes):
        for stock, previous_status in stock_changes:
            NotificationService.stock_level_dropped(stock, previous_status)

    @staticmethod
    def create_order(customer: Customer, order_items: list, delivery_date, order_date=None,
                     status: str = Order.Status.PENDING, notes: str = '') -> Order:
        """
        Create an order after the credit check; deduct stock if it starts confirmed.

        Raises:
            CreditLimitExceededError, StockNotFoundError,
            VariantNotFoundError, InsufficientStockError
        """
        stock_changes = []

        with transaction.atomic():
            # Lock the customer so concurrent orders see each other's totals
            customer = Customer.objects.select_for_update().get(pk=customer.pk)
            OrderService.check_credit(customer, order_items)

            order = Order(
                customer=customer,
                order_items=order_items,
                delivery_date=delivery_date,
                order_date=order_date or timezone.localdate(),
                status=status,
                notes=notes or '',
            )
            if order.is_confirmed:
                stock_changes = StockService.deduct_for_items(order.order_items)
            order.save()

        logger.info(
            f"Created order {order.order_number} for {customer.customer_name} "
            f"({order.status}, total {order.total_amount})"
        )
        NotificationService.order_changed(order, 'Created')
        OrderService._notify_stock_levels(stock_changes)
        return order

    @staticmethod
    def update_order(order: Order, data: dict) -> Order:
        """
        Apply a partial update.

        ``pending -> confirmed`` deducts stock. Confirmed orders cannot go
        back to pending and cannot change their line items.
        """
        data = dict(data)
        new_status = data.pop('status', order.status)
        new_items = data.pop('order_items', None)

        if order.is_confirmed and new_status != Order.Status.CONFIRMED:
            raise InvalidStatusTransitionError(
                f"Order {order.order_number} is confirmed and cannot move back to {new_status}"
            )

        if (new_items is not None and order.is_confirmed and
                OrderService._items_signature(new_items) != OrderService._items_signature(order.order_items)):
            raise ValidationError({'orderItems': 'Line items of a confirmed order cannot be changed'})

        stock_changes = []
        with transaction.atomic():
            order = Order.objects.select_for_update().select_related('customer').get(pk=order.pk)
            was_confirmed = order.is_confirmed

            for field, value in data.items():
                setattr(order, field, value)
            if new_items is not None and not was_confirmed:
                order.order_items = new_items

            if new_items is not None or 'customer' in data:
                OrderService.check_credit(order.customer, order.order_items, exclude_order=order)

            confirming = not was_confirmed and new_status == Order.Status.CONFIRMED
            if confirming:
                stock_changes = StockService.deduct_for_items(order.order_items)
                order.status = Order.Status.CONFIRMED

            order.save()

        if confirming:
            logger.info(f"Order {order.order_number} confirmed; stock deducted")
        NotificationService.order_changed(order, 'Confirmed' if confirming else 'Updated')
        OrderService._notify_stock_levels(stock_changes)
        return order

    @staticmethod
    def delete_order(order: Order):
        with transaction.atomic():
            if order.is_confirmed:
                StockService.restore_for_items(order.order_items)
            order_number = order.order_number
            order.delete()

        logger.info(f"Deleted order {order_number}")
        NotificationService.order_changed(order, 'Deleted')

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    @staticmethod
    def total_revenue() -> Decimal:
        return sum((order.total_amount for order in Order.objects.all()), Decimal('0.00'))

    @staticmethod
    def delivered_count() -> int:
        return Order.objects.filter(status=Order.Status.CONFIRMED).count()

    @staticmethod
    def monthly_sales(year: int = None) -> list:
        year = year or timezone.localdate().year
        revenue = [Decimal('0.00')] * 12
        counts = [0] * 12

        for order in Order.objects.filter(order_date__year=year):
            index = order.order_date.month - 1
            revenue[index] += order.total_amount
            counts[index] += 1

        return [
            {'month': MONTH_LABELS[index], 'revenue': float(revenue[index]), 'orders': counts[index]}
            for index in range(12)
        ]

    @staticmethod
    def top_products(limit: int = 5, orders=None) -> list:
        """Line items grouped by product name, ranked by revenue."""
        totals = defaultdict(lambda: {'quantity': 0.0, 'revenue': Decimal('0.00'), 'orders': 0})
        orders = Order.objects.all() if orders is None else orders

        for order in orders:
            seen = set()
            for item in order.order_items:
                name = item.get('product')
                entry = totals[name]
                entry['quantity'] += float(item.get('quantity') or 0)
                entry['revenue'] += Order.items_total([item])
                if name not in seen:
                    entry['orders'] += 1
                    seen.add(name)

        ranked = sorted(totals.items(), key=lambda pair: pair[1]['revenue'], reverse=True)
        return [
            {
                'productName': name,
                'quantity': entry['quantity'],
                'revenue': float(entry['revenue']),
                'orders': entry['orders'],
            }
            for name, entry in ranked[:limit]
        ]

    @staticmethod
    def top_customers(limit: int = 10, orders=None) -> list:
        totals = defaultdict(lambda: {'orderCount': 0, 'revenue': Decimal('0.00'), 'city': 'Unknown'})
        orders = Order.objects.all() if orders is None else orders

        for order in orders.select_related('customer'):
            entry = totals[order.customer.customer_name]
            entry['orderCount'] += 1
            entry['revenue'] += order.total_amount
            entry['city'] = order.customer.city or 'Unknown'
            entry['customerId'] = str(order.customer_id)

        ranked = sorted(totals.items(), key=lambda pair: pair[1]['revenue'], reverse=True)
        return [
            {
                'customerId': entry['customerId'],
                'customerName': name,
                'orderCount': entry['orderCount'],
                'revenue': float(entry['revenue']),
                'city': entry['city'],
            }
            for name, entry in ranked[:limit]
        ]

    @staticmethod
    def orders_for_product(product_name: str, limit: int = 5) -> list:
        """
        Most recent orders with a line item for ``product_name``.

        Falls back to a case-insensitive match on the first word of the
        name when nothing matches exactly.
        """
        orders = list(Order.objects.select_related('customer').order_by('-order_date', '-created_at'))

        def matching(order, predicate):
            return [item for item in order.order_items if predicate(item.get('product') or '')]

        exact = [(order, matching(order, lambda name: name == product_name)) for order in orders]
        exact = [(order, items) for order, items in exact if items]

        if not exact and product_name.split():
            first_word = product_name.split()[0].lower()
            exact = [(order, matching(order, lambda name: first_word in name.lower())) for order in orders]
            exact = [(order, items) for order, items in exact if items]

        return exact[:limit]
