import logging

from inventory.models import Customer
from .notification_service import NotificationService
from .order_service import OrderService

logger = logging.getLogger(__name__)


class CustomerService:

    @staticmethod
    def create_customer(data: dict) -> Customer:
        customer = Customer.objects.create(**data)
        logger.info(f"Created customer '{customer.customer_name}' ({customer.city})")

        NotificationService.customer_added(customer)
        return customer

    @staticmethod
    def credit_position(customer: Customer) -> dict:
        """Outstanding order value against the customer's credit limit."""
        total = customer.total_order_value
        remaining = customer.credit_limit - total
        return {
            'totalOrderValue': float(total),
            'remainingCredit': float(remaining),
            'creditExceeded': remaining < 0,
        }

    @staticmethod
    def top_customers(limit: int = 10) -> list:
        return OrderService.top_customers(limit=limit)
