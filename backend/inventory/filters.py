from django_filters import rest_framework as filters
from django.db.models import Q
from .models import Adjustment, Customer, Order, Product, Stock, WhatsAppMessage


class ProductFilter(filters.FilterSet):
    """
    Product catalogue filtering.

    Available filters:
    - category, unit: exact match
    - search: product name, SKU or description (case-insensitive)
    - sort: createdAt, updatedAt, productName (prefix with - for descending)
    """
    category = filters.ChoiceFilter(choices=Product.Category.choices)
    unit = filters.ChoiceFilter(choices=Product.Unit.choices)
    search = filters.CharFilter(
        method='filter_search',
        help_text="Search name, SKU and description"
    )
    sort = filters.OrderingFilter(
        fields=(
            ('created_at', 'createdAt'),
            ('updated_at', 'updatedAt'),
            ('product_name', 'productName'),
        ),
        help_text="Sort field, e.g. -createdAt"
    )

    class Meta:
        model = Product
        fields = ['category', 'unit']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(product_name__icontains=value) |
            Q(sku__icontains=value) |
            Q(description__icontains=value)
        )


class StockFilter(filters.FilterSet):
    stockType = filters.CharFilter(
        method='filter_stock_type',
        help_text="Gray Stock, Factory Stock, Design Stock or all"
    )
    status = filters.ChoiceFilter(choices=Stock.Status.choices)
    product = filters.CharFilter(
        field_name='stock_details__product',
        lookup_expr='icontains',
        help_text="Product name in the stock details"
    )

    class Meta:
        model = Stock
        fields = ['status']

    def filter_stock_type(self, queryset, name, value):
        if not value or value.lower() == 'all':
            return queryset
        return queryset.filter(stock_type=value)


class OrderFilter(filters.FilterSet):
    customer = filters.CharFilter(
        field_name='customer__customer_name',
        lookup_expr='icontains',
        help_text="Customer name (partial, case-insensitive)"
    )
    status = filters.ChoiceFilter(choices=Order.Status.choices)
    dateFrom = filters.DateFilter(field_name='order_date', lookup_expr='gte')
    dateTo = filters.DateFilter(field_name='order_date', lookup_expr='lte')

    class Meta:
        model = Order
        fields = ['status']


class CustomerFilter(filters.FilterSet):
    search = filters.CharFilter(method='filter_search')
    city = filters.ChoiceFilter(choices=Customer.City.choices)
    customerType = filters.ChoiceFilter(field_name='customer_type', choices=Customer.CustomerType.choices)

    class Meta:
        model = Customer
        fields = ['city']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(customer_name__icontains=value) | Q(email__icontains=value)
        )


class AdjustmentFilter(filters.FilterSet):
    stock = filters.UUIDFilter(field_name='stock_id')
    color = filters.CharFilter(field_name='color', lookup_expr='iexact')
    stockType = filters.ChoiceFilter(field_name='stock_type', choices=Stock.StockType.choices)

    class Meta:
        model = Adjustment
        fields = ['color']


class WhatsAppMessageFilter(filters.FilterSet):
    type = filters.ChoiceFilter(field_name='message_type', choices=WhatsAppMessage.MessageType.choices)

    class Meta:
        model = WhatsAppMessage
        fields = []
