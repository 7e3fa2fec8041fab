"""
Services package for textile inventory business logic.
"""
from .notification_service import NotificationService
from .stock_service import StockService
from .adjustment_service import AdjustmentService
from .order_service import OrderService
from .product_service import ProductService
from .customer_service import CustomerService
from .return_service import ReturnService
from .dashboard_service import DashboardService
from .report_service import ReportService

__all__ = [
    'NotificationService', 'StockService', 'AdjustmentService', 'OrderService',
    'ProductService', 'CustomerService', 'ReturnService', 'DashboardService',
    'ReportService',
]
