"""
Stock Service

Stock lifecycle (create/update/delete with notifications), deduction and
restoration of variant quantities for orders, and the aggregate views
behind the stock dashboard.
"""

import logging
from collections import defaultdict

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from inventory.models import Adjustment, Order, Stock
from utils.constants import (
    LOW_VARIANT_THRESHOLD, MONTH_LABELS, STOCK_TYPE_COLORS, STOCK_UNIT_VALUE
)
from utils.exceptions import InsufficientStockError, StockNotFoundError, VariantNotFoundError
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class StockService:

    @staticmethod
    def create_stock(data: dict) -> Stock:
        stock = Stock(**data)
        stock.save()
        logger.info(f"Created {stock.stock_type} {stock.id} for '{stock.product_name}' ({stock.status})")

        NotificationService.stock_changed(stock, 'Added')
        NotificationService.stock_level_dropped(stock, previous_status=None)
        return stock

    @staticmethod
    def update_stock(stock: Stock, data: dict) -> Stock:
        previous_status = stock.status
        for field, value in data.items():
            setattr(stock, field, value)
        stock.save()
        logger.info(f"Updated stock {stock.id}: status {previous_status} -> {stock.status}")

        NotificationService.stock_changed(stock, 'Updated')
        NotificationService.stock_level_dropped(stock, previous_status)
        return stock

    @staticmethod
    def delete_stock(stock: Stock):
        NotificationService.stock_changed(stock, 'Deleted')
        logger.info(f"Deleting stock {stock.id} ({stock.product_name})")
        stock.delete()

    # ------------------------------------------------------------------
    # Order fulfilment
    # ------------------------------------------------------------------

    @staticmethod
    def find_stock_for_item(item: dict) -> Stock:
        """
        Locate (and lock) the stock a line item draws from.

        Uses ``stock_id`` when present, otherwise the oldest available or
        low stock of the product that carries the colour, preferring one
        with enough quantity.
        """
        queryset = Stock.objects.select_for_update()
        stock_id = item.get('stock_id')

        if stock_id:
            try:
                return queryset.get(pk=stock_id)
            except (Stock.DoesNotExist, ValidationError):
                raise StockNotFoundError(f"Stock {stock_id} not found for {item.get('product')}")

        candidates = [
            stock for stock in queryset.filter(
                stock_details__product=item.get('product'),
                status__in=[Stock.Status.AVAILABLE, Stock.Status.LOW]
            ).order_by('created_at')
            if stock.get_variant(item.get('color')) is not None
        ]
        if not candidates:
            raise StockNotFoundError(
                f"No available stock found for {item.get('product')} ({item.get('color')})"
            )

        needed = float(item.get('quantity') or 0)
        for stock in candidates:
            if float(stock.get_variant(item.get('color')).get('quantity') or 0) >= needed:
                return stock
        return candidates[0]

    @staticmethod
    def deduct_for_items(items: list) -> list:
        """
        Deduct every line item from its stock.

        Must run inside ``transaction.atomic()``. Each item is stamped with
        the ``stock_id`` it was taken from so the deduction can be reversed.

        Returns:
            list of (stock, previous_status) tuples for the stocks touched

        Raises:
            StockNotFoundError, VariantNotFoundError, InsufficientStockError
        """
        touched = {}
        previous = {}

        for item in items:
            stock = StockService.find_stock_for_item(item)
            stock = touched.setdefault(stock.pk, stock)
            previous.setdefault(stock.pk, stock.status)

            color = item.get('color')
            variant = stock.get_variant(color)
            if variant is None:
                raise VariantNotFoundError(
                    f"Color '{color}' not found in stock for {item.get('product')}"
                )

            requested = float(item.get('quantity') or 0)
            available = float(variant.get('quantity') or 0)
            if requested > available:
                raise InsufficientStockError(
                    f"Insufficient stock for {item.get('product')} ({color}): "
                    f"requested {requested:g}, available {available:g}"
                )

            variant['quantity'] = available - requested
            item['stock_id'] = str(stock.pk)

        for stock in touched.values():
            stock.save()
            logger.info(f"Deducted order items from stock {stock.id}; status now {stock.status}")

        return [(stock, previous[pk]) for pk, stock in touched.items()]

    @staticmethod
    def restore_for_items(items: list) -> list:
        """
        Put the quantities of previously deducted line items back.

        Items whose stock no longer exists are skipped with a warning.
        """
        touched = {}

        for item in items:
            stock_id = item.get('stock_id')
            if not stock_id:
                logger.warning(f"Line item for {item.get('product')} has no stock reference; not restored")
                continue

            stock = touched.get(stock_id)
            if stock is None:
                stock = Stock.objects.select_for_update().filter(pk=stock_id).first()
                if stock is None:
                    logger.warning(f"Stock {stock_id} no longer exists; {item.get('product')} not restored")
                    continue
                touched[stock_id] = stock

            quantity = float(item.get('quantity') or 0)
            variant = stock.get_variant(item.get('color'))
            if variant is None:
                stock.variants.append({
                    'color': item.get('color'),
                    'quantity': quantity,
                    'unit': item.get('unit') or 'METERS',
                })
            else:
                variant['quantity'] = float(variant.get('quantity') or 0) + quantity

        for stock in touched.values():
            stock.save()
            logger.info(f"Restored order items to stock {stock.id}; status now {stock.status}")

        return list(touched.values())

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    @staticmethod
    def get_summary() -> dict:
        stocks = list(Stock.objects.all())

        status_counts = {value: 0 for value in Stock.Status.values}
        for stock in stocks:
            status_counts[stock.status] = status_counts.get(stock.status, 0) + 1

        total_quantity = sum(stock.total_quantity for stock in stocks)
        total_value = total_quantity * STOCK_UNIT_VALUE

        today = timezone.localdate()
        monthly_sales = sum(
            float(order.total_amount) for order in Order.objects.filter(
                status=Order.Status.CONFIRMED,
                order_date__gte=today.replace(day=1),
                order_date__lte=today,
            )
        )
        turnover = round(monthly_sales / (total_value or 1), 2)

        low_stock_items = sum(
            1 for stock in stocks
            if any(0 < float(v.get('quantity') or 0) < LOW_VARIANT_THRESHOLD for v in stock.variants)
        )
        out_of_stock_items = sum(
            1 for stock in stocks
            if stock.variants and all(float(v.get('quantity') or 0) == 0 for v in stock.variants)
        )

        return {
            'totalStocks': len(stocks),
            'statusCounts': status_counts,
            'totalQuantity': total_quantity,
            'totalStockValue': total_value,
            'stockTurnover': turnover,
            'lowStockItems': low_stock_items,
            'outOfStockItems': out_of_stock_items,
        }

    @staticmethod
    def get_category_breakdown() -> list:
        totals = defaultdict(float)
        for stock in Stock.objects.all():
            totals[stock.stock_type] += stock.total_quantity

        breakdown = [
            {
                'name': stock_type,
                'value': quantity,
                'fill': STOCK_TYPE_COLORS.get(stock_type, '#8884d8'),
            }
            for stock_type, quantity in totals.items()
        ]
        breakdown.sort(key=lambda entry: entry['value'], reverse=True)
        return breakdown

    @staticmethod
    def get_movement_report(year: int = None) -> list:
        """
        Monthly inbound/outbound quantities for ``year``.

        Inbound comes from the adjustment log (positive deltas), outbound
        from confirmed order line items by order date.
        """
        year = year or timezone.localdate().year
        inbound = [0.0] * 12
        outbound = [0.0] * 12

        for adjustment in Adjustment.objects.filter(created_at__year=year):
            month = timezone.localtime(adjustment.created_at).month
            inbound[month - 1] += max(adjustment.quantity_change, 0)

        for order in Order.objects.filter(status=Order.Status.CONFIRMED, order_date__year=year):
            outbound[order.order_date.month - 1] += sum(
                float(item.get('quantity') or 0) for item in order.order_items
            )

        return [
            {
                'month': MONTH_LABELS[index],
                'inbound': inbound[index],
                'outbound': outbound[index],
                'net': inbound[index] - outbound[index],
            }
            for index in range(12)
        ]

    @staticmethod
    @transaction.atomic
    def recompute_all_statuses(dry_run: bool = False) -> list:
        """Re-derive every stock status; returns (stock, old, new) for the ones that changed."""
        changes = []
        for stock in Stock.objects.select_for_update():
            old_status = stock.status
            new_status = Stock.derive_status(stock.total_quantity, old_status)
            if new_status != old_status:
                changes.append((stock, old_status, new_status))
                if not dry_run:
                    stock.save(update_fields=['status', 'updated_at'])
        return changes
