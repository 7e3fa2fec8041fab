from django.urls import path
from .views import (
    # Products
    ProductListCreateView, ProductDetailView, product_names, upload_product_images,
    top_products, product_recent_orders, fix_renamed_products, fix_stock_inconsistencies,
    sync_product_stocks,
    # Stock
    StockListCreateView, StockDetailView, stock_summary, stock_category_breakdown, stock_movement,
    # Orders and customers
    OrderListCreateView, OrderDetailView, order_total_revenue, order_delivered_count,
    order_monthly_sales, CustomerListCreateView, CustomerDetailView, top_customers,
    # Returns and adjustments
    ReturnListCreateView, ReturnDetailView, AdjustmentListCreateView,
    # Admins, agents, notifications
    AdminListCreateView, AdminDetailView, AdminActiveStatusView,
    AgentListCreateView, AgentDetailView,
    WhatsAppMessageListCreateView, whatsapp_today_stats, NotificationSettingsView,
    # Dashboard and reports
    dashboard_stats, dashboard_recent_orders, dashboard_latest_products, dashboard_stock_alerts,
    report_summary, report_export
)

urlpatterns = [
    # Products
    path('products/', ProductListCreateView.as_view(), name='product-list'),
    path('products/names/', product_names, name='product-names'),
    path('products/upload-images/', upload_product_images, name='product-upload-images'),
    path('products/top/', top_products, name='product-top'),
    path('products/fix-renamed/', fix_renamed_products, name='product-fix-renamed'),
    path('products/fix-stock-inconsistencies/', fix_stock_inconsistencies, name='product-fix-stock'),
    path('products/sync-stocks/', sync_product_stocks, name='product-sync-stocks'),
    path('products/<uuid:pk>/', ProductDetailView.as_view(), name='product-detail'),
    path('products/<uuid:pk>/recent-orders/', product_recent_orders, name='product-recent-orders'),

    # Stock
    path('stock/', StockListCreateView.as_view(), name='stock-list'),
    path('stock/summary/', stock_summary, name='stock-summary'),
    path('stock/category-breakdown/', stock_category_breakdown, name='stock-category-breakdown'),
    path('stock/movement/', stock_movement, name='stock-movement'),
    path('stock/<uuid:pk>/', StockDetailView.as_view(), name='stock-detail'),

    # Orders
    path('orders/', OrderListCreateView.as_view(), name='order-list'),
    path('orders/total-revenue/', order_total_revenue, name='order-total-revenue'),
    path('orders/delivered-count/', order_delivered_count, name='order-delivered-count'),
    path('orders/monthly-sales/', order_monthly_sales, name='order-monthly-sales'),
    path('orders/<uuid:pk>/', OrderDetailView.as_view(), name='order-detail'),

    # Customers
    path('customers/', CustomerListCreateView.as_view(), name='customer-list'),
    path('customers/top/', top_customers, name='customer-top'),
    path('customers/<uuid:pk>/', CustomerDetailView.as_view(), name='customer-detail'),

    # Returns and adjustments
    path('returns/', ReturnListCreateView.as_view(), name='return-list'),
    path('returns/<uuid:pk>/', ReturnDetailView.as_view(), name='return-detail'),
    path('adjustments/', AdjustmentListCreateView.as_view(), name='adjustment-list'),

    # Admins and agents
    path('admins/', AdminListCreateView.as_view(), name='admin-list'),
    path('admins/active-status/', AdminActiveStatusView.as_view(), name='admin-active-status'),
    path('admins/<uuid:pk>/', AdminDetailView.as_view(), name='admin-detail'),
    path('agents/', AgentListCreateView.as_view(), name='agent-list'),
    path('agents/<uuid:pk>/', AgentDetailView.as_view(), name='agent-detail'),

    # WhatsApp
    path('whatsapp-messages/', WhatsAppMessageListCreateView.as_view(), name='whatsapp-message-list'),
    path('whatsapp-messages/today-stats/', whatsapp_today_stats, name='whatsapp-today-stats'),
    path('whatsapp-notification-settings/', NotificationSettingsView.as_view(), name='notification-settings'),

    # Dashboard
    path('dashboard/stats/', dashboard_stats, name='dashboard-stats'),
    path('dashboard/recent-orders/', dashboard_recent_orders, name='dashboard-recent-orders'),
    path('dashboard/latest-products/', dashboard_latest_products, name='dashboard-latest-products'),
    path('dashboard/stock-alerts/', dashboard_stock_alerts, name='dashboard-stock-alerts'),

    # Reports
    path('reports/summary/', report_summary, name='report-summary'),
    path('reports/export/', report_export, name='report-export'),
]
