"""
Adjustment Service

Manual stock corrections. An adjustment may only increase a variant's
quantity; the stock is updated in place and an audit record appended.
"""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from inventory.models import Adjustment, Stock
from utils.exceptions import InvalidAdjustmentError, StockNotFoundError, VariantNotFoundError

logger = logging.getLogger(__name__)


class AdjustmentService:

    @staticmethod
    def create_adjustment(stock_id, color: str, new_quantity: float, reason: str) -> Adjustment:
        """
        Raise one stock variant to ``new_quantity`` and log the change.

        Args:
            stock_id: Stock primary key
            color: Variant colour to adjust
            new_quantity: Target quantity, must exceed the current one
            reason: Free text justification

        Returns:
            The created Adjustment

        Raises:
            StockNotFoundError: Unknown stock
            VariantNotFoundError: Colour not on the stock
            InvalidAdjustmentError: new_quantity <= current quantity
        """
        with transaction.atomic():
            try:
                stock = Stock.objects.select_for_update().get(pk=stock_id)
            except (Stock.DoesNotExist, ValidationError):
                raise StockNotFoundError()

            variant = stock.get_variant(color)
            if variant is None:
                raise VariantNotFoundError(f"Color '{color}' not found in stock variants")

            prev_quantity = float(variant.get('quantity') or 0)
            new_quantity = float(new_quantity)
            if new_quantity <= prev_quantity:
                raise InvalidAdjustmentError()

            previous_status = stock.status
            variant['quantity'] = new_quantity
            stock.save()

            adjustment = Adjustment.objects.create(
                stock=stock,
                product=stock.product_name or '',
                stock_type=stock.stock_type,
                color=color,
                prev_quantity=prev_quantity,
                new_quantity=new_quantity,
                reason=reason,
            )

        logger.info(
            f"Adjusted stock {stock.id} {color}: {prev_quantity:g} -> {new_quantity:g} "
            f"(status {previous_status} -> {stock.status})"
        )
        return adjustment
