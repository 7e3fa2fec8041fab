"""
Notification Dispatcher

Composes WhatsApp notifications for inventory events and fans them out to
every active admin contact. Delivery is best effort: a failure for one
recipient is logged and the remaining recipients are still tried.
"""

import logging

from django.conf import settings

from inventory.models import AdminContact, NotificationSettings, Stock, WhatsAppMessage
from .whatsapp_client import WhatsAppClient

logger = logging.getLogger(__name__)


class NotificationService:

    @staticmethod
    def dispatch(message: str, message_type: str, client: WhatsAppClient = None) -> WhatsAppMessage:
        """
        Send ``message`` to all active admins and log the outcome.

        Recipients are tried sequentially. The log entry records how many
        deliveries succeeded; it is marked "Not Delivered" when none did.
        """
        client = client or WhatsAppClient()
        recipients = list(AdminContact.objects.filter(active=True))

        if not recipients:
            logger.warning("No active admins found to send WhatsApp message")

        delivered = 0
        for admin in recipients:
            try:
                sent, info = client.send(admin.number, message)
            except Exception as e:
                sent, info = False, str(e)
            if sent:
                delivered += 1
            else:
                logger.error(f"Failed to send WhatsApp to {admin.name} ({admin.number}): {info}")

        status = (
            WhatsAppMessage.DeliveryStatus.DELIVERED if delivered
            else WhatsAppMessage.DeliveryStatus.NOT_DELIVERED
        )
        log_entry = WhatsAppMessage.objects.create(
            message=message,
            message_type=message_type,
            sent_to_count=delivered,
            status=status,
        )
        logger.info(f"Dispatched {message_type} notification to {delivered}/{len(recipients)} admins")
        return log_entry

    @staticmethod
    def notify(toggle: str, message: str, message_type: str) -> bool:
        """
        Queue a notification if its category is switched on.

        Returns True when the message was handed to the dispatcher.
        """
        if not NotificationSettings.load().is_enabled(toggle):
            return False

        from inventory.tasks import dispatch_whatsapp_message

        try:
            dispatch_whatsapp_message.delay(message, message_type)
        except Exception as e:
            logger.exception(f"WhatsApp notification failed ({message_type}): {e}")
            return False
        return True

    # ------------------------------------------------------------------
    # Message builders
    # ------------------------------------------------------------------

    @staticmethod
    def _link(path):
        return f"{settings.CLIENT_URL.rstrip('/')}/{path.lstrip('/')}"

    @staticmethod
    def product_changed(product, action: str) -> bool:
        variants = ", ".join(
            f"{v.get('color')} ({v.get('stock_in_meters')} {product.unit})" for v in product.variants
        )
        message = (
            f"Product {action}!\n\n"
            f"Name: {product.product_name}\n"
            f"SKU: {product.sku}\n"
            f"Category: {product.category}\n"
            f"Variants: {variants}"
        )
        if action != 'Deleted':
            message += f"\n\nView details: {NotificationService._link(f'products/{product.id}')}"
        return NotificationService.notify(
            'product_updates', message, WhatsAppMessage.MessageType.PRODUCT_UPDATE
        )

    @staticmethod
    def stock_changed(stock, action: str) -> bool:
        variants = ", ".join(
            f"{v.get('color')} ({v.get('quantity')} {v.get('unit', '')})".replace(' )', ')')
            for v in stock.variants
        )
        message = (
            f"Stock {action}!\n\n"
            f"Stock Type: {stock.stock_type}\n"
            f"Product: {stock.product_name}\n"
            f"Status: {stock.status}\n"
            f"Variants: {variants}"
        )
        if action != 'Deleted':
            message += f"\n\nView details: {NotificationService._link(f'stock/{stock.id}')}"
        return NotificationService.notify(
            'stock_alerts', message, WhatsAppMessage.MessageType.STOCK_ALERT
        )

    @staticmethod
    def stock_level_dropped(stock, previous_status) -> bool:
        """Warn when a write moves a stock into ``low`` or ``out``."""
        if stock.status not in (Stock.Status.LOW, Stock.Status.OUT):
            return False
        if stock.status == previous_status:
            return False

        headline = "Out of Stock" if stock.status == Stock.Status.OUT else "Low Stock Warning"
        variants = ", ".join(f"{v.get('color')}: {v.get('quantity')}" for v in stock.variants)
        message = (
            f"{headline}!\n\n"
            f"Product: {stock.product_name}\n"
            f"Stock Type: {stock.stock_type}\n"
            f"Total Quantity: {stock.total_quantity:g}\n"
            f"Variants: {variants}\n\n"
            f"View details: {NotificationService._link(f'stock/{stock.id}')}"
        )
        return NotificationService.notify(
            'low_stock_warnings', message, WhatsAppMessage.MessageType.STOCK_ALERT
        )

    @staticmethod
    def order_changed(order, action: str) -> bool:
        items = ", ".join(
            f"{item.get('product')} - {item.get('color')} ({item.get('quantity')} {item.get('unit', '')})".rstrip()
            for item in order.order_items
        )
        message = (
            f"Order {action}!\n\n"
            f"Order: {order.order_number}\n"
            f"Customer: {order.customer.customer_name}\n"
            f"Status: {order.status}\n"
            f"Delivery Date: {order.delivery_date}\n"
            f"Items: {items}\n"
            f"Total: {order.total_amount}"
        )
        if action != 'Deleted':
            message += f"\n\nView details: {NotificationService._link(f'orders/{order.id}')}"
        return NotificationService.notify(
            'order_updates', message, WhatsAppMessage.MessageType.ORDER_UPDATE
        )

    @staticmethod
    def return_changed(return_request, action: str) -> bool:
        message = (
            f"Return {action}!\n\n"
            f"Return ID: *{return_request.return_id}*\n"
            f"Customer: {return_request.customer}\n"
            f"Product: {return_request.product}\n"
            f"Color: {return_request.color}\n"
            f"Qty (m): {return_request.quantity_in_meters:g}\n"
            f"Reason: {return_request.return_reason}"
        )
        if action != 'Deleted':
            message += f"\n\nView details: {NotificationService._link('returns/')}"
        return NotificationService.notify(
            'return_requests', message, WhatsAppMessage.MessageType.RETURN_REQUEST
        )

    @staticmethod
    def customer_added(customer) -> bool:
        message = (
            f"New Customer Added!\n\n"
            f"Name: {customer.customer_name}\n"
            f"Type: {customer.customer_type}\n"
            f"City: {customer.city}\n"
            f"Phone: {customer.phone}\n"
            f"Credit Limit: {customer.credit_limit}\n\n"
            f"View details: {NotificationService._link('customers/')}"
        )
        return NotificationService.notify(
            'new_customers', message, WhatsAppMessage.MessageType.ORDER_UPDATE
        )
