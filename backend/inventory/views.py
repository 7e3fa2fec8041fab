import logging
import os

from django.conf import settings
from django.http import FileResponse, Http404, HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_date
from django.views.static import serve
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, status
from rest_framework.decorators import api_view, parser_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from utils.constants import PAGE_SIZES
from utils.pagination import PageLimitPagination, parse_positive_int
from .filters import (
    AdjustmentFilter, CustomerFilter, OrderFilter, ProductFilter, StockFilter, WhatsAppMessageFilter
)
from .models import (
    Adjustment, AdminContact, Agent, Customer, NotificationSettings,
    Order, Product, Return, Stock, WhatsAppMessage
)
from .serializers import (
    AdjustmentCreateSerializer, AdjustmentSerializer, AdminActiveStatusSerializer,
    AdminContactSerializer, AgentSerializer, CustomerSerializer, NotificationSettingsSerializer,
    OrderItemSerializer, OrderSerializer, ProductListSerializer, ProductSerializer,
    ReturnSerializer, StockSerializer, WhatsAppBroadcastSerializer, WhatsAppMessageSerializer
)
from .services import (
    AdjustmentService, CustomerService, DashboardService, NotificationService,
    OrderService, ProductService, ReportService, ReturnService, StockService
)
from .services.export_service import ReportExportService
from .services.pdf_report_service import PDFReportService

logger = logging.getLogger(__name__)


class EnvelopeMixin:
    """
    Wraps responses as ``{"success": true, <key>: ...}`` and paginates lists
    with ``?page=&limit=``.
    """
    item_key = 'data'
    results_key = 'results'
    default_limit = 10

    @property
    def paginator(self):
        if not hasattr(self, '_paginator'):
            self._paginator = PageLimitPagination(self.default_limit, self.results_key)
        return self._paginator

    def envelope(self, data, status_code=status.HTTP_200_OK, **extra):
        return Response({'success': True, self.item_key: data, **extra}, status=status_code)

    def retrieve(self, request, *args, **kwargs):
        return self.envelope(self.get_serializer(self.get_object()).data)


def _parse_date_param(request, name):
    """Return the date in ``?name=YYYY-MM-DD``, None when absent."""
    value = request.query_params.get(name)
    if not value:
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Invalid {name}. Use YYYY-MM-DD")
    return parsed


def _year_param(request):
    return parse_positive_int(request.query_params.get('year'), timezone.localdate().year)


def _limit_param(request, default):
    return parse_positive_int(request.query_params.get('limit'), default)


# ============================================================================
# Products
# ============================================================================

class ProductListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    """
    List or create products.

    GET /api/v1/products/?category=Cotton Fabrics&search=silk&sort=-createdAt&page=1&limit=12

    POST /api/v1/products/
    {
        "productName": "Premium Cotton",
        "category": "Cotton Fabrics",
        "unit": "METERS",
        "variants": [{"color": "Red", "pricePerMeters": 120, "stockInMeters": 500}],
        "stockInfo": {"minimumStock": 100, "reorderPoint": 150, "storageLocation": "Rack A"}
    }
    """
    queryset = Product.objects.all()
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter
    item_key = 'product'
    results_key = 'products'
    default_limit = PAGE_SIZES['products']

    def get_serializer_class(self):
        if self.request.method == 'GET':
            return ProductListSerializer
        return ProductSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = ProductService.create_product(serializer.validated_data)
        return self.envelope(ProductSerializer(product).data, status.HTTP_201_CREATED)


class ProductDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    Read, update or delete a product.

    Updates are carried over to the stocks naming the product; a rename is
    also applied to order line items, adjustments and returns.
    """
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    item_key = 'product'

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        product = self.get_object()
        serializer = self.get_serializer(product, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        product = ProductService.update_product(product, serializer.validated_data)
        return self.envelope(self.get_serializer(product).data)

    def destroy(self, request, *args, **kwargs):
        ProductService.delete_product(self.get_object())
        return Response({'success': True, 'message': 'Product deleted successfully'})


@api_view(['GET'])
def product_names(request):
    """All product names, alphabetically."""
    return Response({'success': True, 'productNames': ProductService.product_names()})


@api_view(['POST'])
@parser_classes([MultiPartParser, FormParser])
def upload_product_images(request):
    """
    Store product images.

    POST /api/v1/products/upload-images/  (multipart, field "images", 1 to 5 files)

    Returns:
    - imagePaths: public paths under /uploads/products/
    """
    paths = ProductService.save_images(request.FILES.getlist('images'))
    return Response({'success': True, 'imagePaths': paths})


@api_view(['GET'])
def top_products(request):
    """Products ranked by order revenue. Query params: limit (default 5)."""
    ranked = OrderService.top_products(limit=_limit_param(request, 5))
    return Response({'success': True, 'topProducts': ranked})


@api_view(['GET'])
def product_recent_orders(request, pk):
    """
    Latest orders containing the product.

    Matches line items by product name, falling back to the first word of
    the name. Query params: limit (default 5).
    """
    product = get_object_or_404(Product, pk=pk)
    entries = OrderService.orders_for_product(product.product_name, limit=_limit_param(request, 5))

    orders = [
        {
            'id': str(order.id),
            'orderNumber': order.order_number,
            'customer': order.customer.customer_name,
            'status': order.status,
            'orderDate': order.order_date.isoformat(),
            'deliveryDate': order.delivery_date.isoformat(),
            'items': OrderItemSerializer(items, many=True).data,
            'itemsTotal': float(Order.items_total(items)),
        }
        for order, items in entries
    ]
    return Response({'success': True, 'productName': product.product_name, 'orders': orders})


@api_view(['POST'])
def fix_renamed_products(request):
    """Re-attach order line items that name a product that no longer exists."""
    result = ProductService.fix_renamed_products()
    logger.info(f"Fixed renamed products: {result['totalUpdated']}/{result['totalOrders']} orders updated")
    return Response({'success': True, **result})


@api_view(['POST'])
def fix_stock_inconsistencies(request):
    """Point stocks naming an unknown product at the matching catalogue product."""
    result = ProductService.fix_stock_inconsistencies()
    return Response({'success': True, **result})


@api_view(['POST'])
def sync_product_stocks(request):
    """Rebuild every stock's variant list from its product."""
    result = ProductService.sync_stocks_with_products()
    return Response({'success': True, **result})


# ============================================================================
# Stock
# ============================================================================

class StockListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    """
    List or create stock.

    GET /api/v1/stock/?stockType=Gray Stock&status=low&page=1&limit=10

    POST /api/v1/stock/
    {
        "stockType": "Gray Stock",
        "variants": [{"color": "Red", "quantity": 50, "unit": "METERS"}],
        "stockDetails": {"product": "Premium Cotton", "factory": "Surat Mills"},
        "additionalInfo": {"batchNumber": "B-12", "qualityGrade": "A"}
    }
    """
    queryset = Stock.objects.all()
    serializer_class = StockSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = StockFilter
    item_key = 'stock'
    results_key = 'stocks'
    default_limit = PAGE_SIZES['stocks']

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        stock = StockService.create_stock(serializer.validated_data)
        return self.envelope(self.get_serializer(stock).data, status.HTTP_201_CREATED)


class StockDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Stock.objects.all()
    serializer_class = StockSerializer
    item_key = 'stock'

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        stock = self.get_object()
        serializer = self.get_serializer(stock, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        stock = StockService.update_stock(stock, serializer.validated_data)
        return self.envelope(self.get_serializer(stock).data)

    def destroy(self, request, *args, **kwargs):
        StockService.delete_stock(self.get_object())
        return Response({'success': True, 'message': 'Stock deleted successfully'})


@api_view(['GET'])
def stock_summary(request):
    """
    Stock headline figures.

    Returns:
    - totalStocks, statusCounts, totalQuantity
    - totalStockValue, stockTurnover
    - lowStockItems, outOfStockItems
    """
    return Response({'success': True, **StockService.get_summary()})


@api_view(['GET'])
def stock_category_breakdown(request):
    """Total quantity per stock type, largest first, with chart colours."""
    return Response({'success': True, 'breakdown': StockService.get_category_breakdown()})


@api_view(['GET'])
def stock_movement(request):
    """
    Monthly inbound/outbound quantities.

    Query params:
    - year: defaults to the current year
    """
    year = _year_param(request)
    return Response({'success': True, 'year': year, 'movement': StockService.get_movement_report(year)})


# ============================================================================
# Orders
# ============================================================================

class OrderListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    """
    List or create orders.

    GET /api/v1/orders/?customer=textiles&status=pending&dateFrom=2025-01-01&dateTo=2025-01-31

    POST /api/v1/orders/
    {
        "customer": "Sharma Textiles",
        "status": "confirmed",
        "deliveryDate": "2025-02-01",
        "orderItems": [
            {"product": "Premium Cotton", "color": "Red", "quantity": 20, "unit": "METERS", "pricePerMeters": 120}
        ]
    }

    Orders created as confirmed deduct their items from stock.
    """
    queryset = Order.objects.select_related('customer')
    serializer_class = OrderSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter
    item_key = 'order'
    results_key = 'orders'
    default_limit = PAGE_SIZES['orders']

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = OrderService.create_order(
            customer=data['customer'],
            order_items=data['order_items'],
            delivery_date=data['delivery_date'],
            order_date=data.get('order_date'),
            status=data.get('status', Order.Status.PENDING),
            notes=data.get('notes', ''),
        )
        return self.envelope(self.get_serializer(order).data, status.HTTP_201_CREATED)


class OrderDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    Read, update or delete an order.

    pending -> confirmed deducts stock; confirmed orders cannot go back to
    pending or change their items. Deleting a confirmed order restores stock.
    """
    queryset = Order.objects.select_related('customer')
    serializer_class = OrderSerializer
    item_key = 'order'

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        order = self.get_object()
        serializer = self.get_serializer(order, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        order = OrderService.update_order(order, serializer.validated_data)
        return self.envelope(self.get_serializer(order).data)

    def destroy(self, request, *args, **kwargs):
        OrderService.delete_order(self.get_object())
        return Response({'success': True, 'message': 'Order deleted successfully'})


@api_view(['GET'])
def order_total_revenue(request):
    return Response({'success': True, 'totalRevenue': float(OrderService.total_revenue())})


@api_view(['GET'])
def order_delivered_count(request):
    """Number of confirmed orders."""
    return Response({'success': True, 'deliveredOrdersCount': OrderService.delivered_count()})


@api_view(['GET'])
def order_monthly_sales(request):
    """
    Revenue and order count per month of ``?year=`` (default current year).
    """
    year = _year_param(request)
    return Response({'success': True, 'year': year, 'monthlySales': OrderService.monthly_sales(year)})


# ============================================================================
# Customers
# ============================================================================

class CustomerListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    """
    List or create customers.

    GET /api/v1/customers/?search=sharma&city=Mumbai&customerType=Wholesale
    """
    queryset = Customer.objects.prefetch_related('orders')
    serializer_class = CustomerSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = CustomerFilter
    item_key = 'customer'
    results_key = 'customers'
    default_limit = PAGE_SIZES['customers']

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = CustomerService.create_customer(serializer.validated_data)
        return self.envelope(self.get_serializer(customer).data, status.HTTP_201_CREATED)


class CustomerDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    Read, update or delete a customer. Customers with orders cannot be deleted.
    """
    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    item_key = 'customer'

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        customer = serializer.save()
        logger.info(f"Updated customer '{customer.customer_name}'")
        return self.envelope(serializer.data)

    def destroy(self, request, *args, **kwargs):
        customer = self.get_object()
        customer.delete()
        logger.info(f"Deleted customer '{customer.customer_name}'")
        return Response({'success': True, 'message': 'Customer deleted successfully'})


@api_view(['GET'])
def top_customers(request):
    """Customers ranked by order revenue. Query params: limit (default 10)."""
    ranked = CustomerService.top_customers(limit=_limit_param(request, 10))
    return Response({'success': True, 'topCustomers': ranked})


# ============================================================================
# Returns
# ============================================================================

class ReturnListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    """
    List or create return requests.

    POST /api/v1/returns/
    {
        "order": "<order uuid>",
        "product": "Premium Cotton",
        "color": "Red",
        "quantityInMeters": 5,
        "returnReason": "Colour mismatch"
    }
    """
    queryset = Return.objects.select_related('order__customer')
    serializer_class = ReturnSerializer
    item_key = 'return'
    results_key = 'returns'

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        return_request = ReturnService.create_return(
            order_id=data['order'],
            product=data['product'],
            color=data['color'],
            quantity_in_meters=data['quantity_in_meters'],
            return_reason=data['return_reason'],
        )
        return self.envelope(self.get_serializer(return_request).data, status.HTTP_201_CREATED)


class ReturnDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    Read, update or delete a return. Approved and rejected returns are locked.
    """
    queryset = Return.objects.select_related('order__customer')
    serializer_class = ReturnSerializer
    item_key = 'return'

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        return_request = self.get_object()
        serializer = self.get_serializer(return_request, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        # A return stays attached to the order it was raised against
        data.pop('order', None)
        return_request = ReturnService.update_return(return_request, data)
        return self.envelope(self.get_serializer(return_request).data)

    def destroy(self, request, *args, **kwargs):
        ReturnService.delete_return(self.get_object())
        return Response({'success': True, 'message': 'Return deleted successfully'})


# ============================================================================
# Adjustments
# ============================================================================

class AdjustmentListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    """
    Stock adjustment log.

    POST /api/v1/adjustments/
    {
        "stockId": "<stock uuid>",
        "color": "Red",
        "newQuantity": 150,
        "reason": "Recount"
    }

    The new quantity must exceed the current one. The log is append-only.
    """
    queryset = Adjustment.objects.all()
    serializer_class = AdjustmentSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = AdjustmentFilter
    item_key = 'adjustment'
    results_key = 'adjustments'
    default_limit = PAGE_SIZES['adjustments']

    def create(self, request, *args, **kwargs):
        serializer = AdjustmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        adjustment = AdjustmentService.create_adjustment(
            stock_id=data['stockId'],
            color=data['color'],
            new_quantity=data['newQuantity'],
            reason=data['reason'],
        )
        return self.envelope(
            AdjustmentSerializer(adjustment).data,
            status.HTTP_201_CREATED,
            message='Stock adjusted successfully'
        )


# ============================================================================
# Admins and agents
# ============================================================================

class AdminListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = AdminContact.objects.all()
    serializer_class = AdminContactSerializer
    item_key = 'admin'

    def list(self, request, *args, **kwargs):
        admins = self.get_serializer(self.get_queryset(), many=True).data
        return Response({'success': True, 'admins': admins})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        admin = serializer.save()
        logger.info(f"Added admin {admin.name} ({admin.role})")
        return self.envelope(serializer.data, status.HTTP_201_CREATED)


class AdminDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = AdminContact.objects.all()
    serializer_class = AdminContactSerializer
    item_key = 'admin'

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return self.envelope(serializer.data)

    def destroy(self, request, *args, **kwargs):
        self.get_object().delete()
        return Response({'success': True, 'message': 'Admin deleted successfully'})


class AdminActiveStatusView(APIView):
    """
    Switch an admin's notifications on or off.

    PUT /api/v1/admins/active-status/
    {"id": "<admin uuid>", "active": false}
    """

    def put(self, request, *args, **kwargs):
        serializer = AdminActiveStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        admin = get_object_or_404(AdminContact, pk=serializer.validated_data['id'])
        admin.active = serializer.validated_data['active']
        admin.save(update_fields=['active', 'updated_at'])
        logger.info(f"Admin {admin.name} active={admin.active}")

        return Response({'success': True, 'admin': AdminContactSerializer(admin).data})


class AgentListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Agent.objects.all()
    serializer_class = AgentSerializer
    item_key = 'agent'

    def list(self, request, *args, **kwargs):
        agents = self.get_serializer(self.get_queryset(), many=True).data
        return Response({'success': True, 'agents': agents})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return self.envelope(serializer.data, status.HTTP_201_CREATED)


class AgentDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Agent.objects.all()
    serializer_class = AgentSerializer
    item_key = 'agent'

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return self.envelope(serializer.data)

    def destroy(self, request, *args, **kwargs):
        self.get_object().delete()
        return Response({'success': True, 'message': 'Agent deleted successfully'})


# ============================================================================
# WhatsApp messages and notification settings
# ============================================================================

class WhatsAppMessageListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    """
    Notification log, newest first.

    GET /api/v1/whatsapp-messages/?page=1&limit=4&type=stock_alert

    POST /api/v1/whatsapp-messages/
    {"message": "Warehouse closed tomorrow", "type": "daily_report"}

    Posting broadcasts the message to every active admin.
    """
    queryset = WhatsAppMessage.objects.all()
    serializer_class = WhatsAppMessageSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = WhatsAppMessageFilter
    item_key = 'data'
    results_key = 'messages'
    default_limit = PAGE_SIZES['messages']

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        messages = self.get_serializer(page, many=True).data
        pagination = self.paginator.get_pagination_data()

        return Response({
            'success': True,
            'currentPage': pagination['currentPage'],
            'totalPages': pagination['totalPages'],
            'totalMessages': pagination['totalItems'],
            'messages': messages,
            'pagination': pagination,
        })

    def create(self, request, *args, **kwargs):
        serializer = WhatsAppBroadcastSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        log_entry = NotificationService.dispatch(
            serializer.validated_data['message'],
            serializer.validated_data['type']
        )
        return self.envelope(self.get_serializer(log_entry).data, status.HTTP_201_CREATED)


@api_view(['GET'])
def whatsapp_today_stats(request):
    """
    Messages logged today, in total and per type.

    Returns:
    - date: YYYY-MM-DD
    - stats: {total, stock_alert, order_update, ...}
    """
    today = timezone.localdate()
    todays = WhatsAppMessage.objects.filter(created_at__date=today)

    stats = {'total': todays.count()}
    for message_type in WhatsAppMessage.MessageType.values:
        stats[message_type] = todays.filter(message_type=message_type).count()

    return Response({'success': True, 'date': today.isoformat(), 'stats': stats})


class NotificationSettingsView(APIView):
    """
    Notification toggles.

    GET creates the settings row on first use. PUT updates only the
    supplied toggles; every value must be a JSON boolean.
    """

    def get(self, request, *args, **kwargs):
        settings_row = NotificationSettings.load()
        return Response({'success': True, 'settings': NotificationSettingsSerializer(settings_row).data})

    def put(self, request, *args, **kwargs):
        settings_row = NotificationSettings.load()
        serializer = NotificationSettingsSerializer(settings_row, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info(f"Notification settings updated: {settings_row}")
        return Response({'success': True, 'settings': serializer.data})


# ============================================================================
# Dashboard
# ============================================================================

@api_view(['GET'])
def dashboard_stats(request):
    """Headline counts with their change against the previous 30 days."""
    return Response({'success': True, 'data': DashboardService.get_stats()})


@api_view(['GET'])
def dashboard_recent_orders(request):
    return Response({'success': True, 'recentOrders': DashboardService.get_recent_orders()})


@api_view(['GET'])
def dashboard_latest_products(request):
    return Response({'success': True, 'latestProducts': DashboardService.get_latest_products()})


@api_view(['GET'])
def dashboard_stock_alerts(request):
    """Stocks that are low, out, or hold a variant below the product minimum."""
    return Response({'success': True, 'stockAlerts': DashboardService.get_stock_alerts()})


# ============================================================================
# Reports
# ============================================================================

def _report_range(request):
    date_from = _parse_date_param(request, 'dateFrom')
    date_to = _parse_date_param(request, 'dateTo')
    if date_from and date_to and date_from > date_to:
        raise ValueError("dateFrom must be before or equal to dateTo")
    return date_from, date_to


@api_view(['GET'])
def report_summary(request):
    """
    Sales summary.

    Query params:
    - dateFrom, dateTo: YYYY-MM-DD, both optional

    Returns:
    - totalRevenue, totalOrders, confirmedOrders, pendingOrders, averageOrderValue
    - monthlyPerformance, topProducts, topCustomers
    """
    try:
        date_from, date_to = _report_range(request)
    except ValueError as e:
        return Response({'success': False, 'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'success': True, 'report': ReportService.sales_summary(date_from, date_to)})


@api_view(['GET'])
def report_export(request):
    """
    Download the sales summary.

    Query params:
    - format: csv, xlsx or pdf (default csv)
    - dateFrom, dateTo: YYYY-MM-DD, both optional

    Example:
    GET /api/v1/reports/export/?format=xlsx&dateFrom=2025-01-01&dateTo=2025-03-31
    """
    export_format = request.query_params.get('format', 'csv').lower()
    if export_format not in ('csv', 'xlsx', 'pdf'):
        return Response(
            {'success': False, 'message': 'format must be one of: csv, xlsx, pdf'},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        date_from, date_to = _report_range(request)
    except ValueError as e:
        return Response({'success': False, 'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    summary = ReportService.sales_summary(date_from, date_to)
    filename = f"sales_report_{timezone.localdate().isoformat()}"

    if export_format == 'csv':
        response = HttpResponse(ReportExportService.export_to_csv(summary).getvalue(), content_type='text/csv')
    elif export_format == 'xlsx':
        response = HttpResponse(
            ReportExportService.export_to_xlsx(summary).getvalue(),
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
    else:
        response = HttpResponse(PDFReportService.generate_sales_report_pdf(summary).getvalue(), content_type='application/pdf')

    response['Content-Disposition'] = f'attachment; filename="{filename}.{export_format}"'
    return response


# ============================================================================
# Frontend bundle
# ============================================================================

def frontend(request, path=''):
    """
    Serve the built frontend: real files as-is, every other path gets
    index.html so client-side routing works.
    """
    dist_dir = settings.FRONTEND_DIST_DIR
    if not dist_dir or not os.path.isdir(dist_dir):
        raise Http404("Frontend bundle not found")

    if path and os.path.isfile(os.path.join(dist_dir, path)):
        return serve(request, path, document_root=dist_dir)

    index = os.path.join(dist_dir, 'index.html')
    if not os.path.isfile(index):
        raise Http404("Frontend bundle not found")
    return FileResponse(open(index, 'rb'), content_type='text/html')
