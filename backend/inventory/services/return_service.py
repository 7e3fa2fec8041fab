"""
Return Service

Return requests move from pending to approved or rejected. Both outcomes
are terminal.
"""

import logging

from django.core.exceptions import ValidationError

from inventory.models import Order, Return
from utils.exceptions import OrderNotFoundError, ReturnLockedError
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class ReturnService:

    @staticmethod
    def create_return(order_id, product: str, color: str, quantity_in_meters: float,
                      return_reason: str) -> Return:
        try:
            order = Order.objects.select_related('customer').get(pk=order_id)
        except (Order.DoesNotExist, ValidationError):
            raise OrderNotFoundError('Order not found!')

        return_request = Return.objects.create(
            order=order,
            product=product,
            color=color,
            quantity_in_meters=quantity_in_meters,
            return_reason=return_reason,
        )
        logger.info(
            f"Created return {return_request.return_id} for order {order.order_number} "
            f"({product}, {color}, {quantity_in_meters:g}m)"
        )

        NotificationService.return_changed(return_request, 'Request Received')
        return return_request

    @staticmethod
    def update_return(return_request: Return, data: dict) -> Return:
        """
        Update a pending return. Approving or rejecting locks it.

        Raises:
            ReturnLockedError: the return was already approved or rejected
            ValidationError: approve and reject requested together
        """
        if return_request.is_locked:
            raise ReturnLockedError(
                f"Return {return_request.return_id} is already {return_request.status}"
            )

        approve = data.get('is_approved', False)
        reject = data.get('is_rejected', False)
        if approve and reject:
            raise ValidationError('A return cannot be both approved and rejected')

        for field, value in data.items():
            setattr(return_request, field, value)
        return_request.save()

        if approve:
            action = 'Approved'
        elif reject:
            action = 'Rejected'
        else:
            action = 'Updated'

        logger.info(f"Return {return_request.return_id} {action.lower()}")
        NotificationService.return_changed(return_request, action)
        return return_request

    @staticmethod
    def delete_return(return_request: Return):
        return_request.delete()
        logger.info(f"Deleted return {return_request.return_id}")
        NotificationService.return_changed(return_request, 'Deleted')
