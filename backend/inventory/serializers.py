from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from utils.constants import DESIGN_PATTERNS, MAX_PRODUCT_IMAGES, PROCESSING_STAGES, WAREHOUSES
from .models import (
    Adjustment, AdminContact, Agent, Customer, NotificationSettings,
    Order, Product, Return, Stock, WhatsAppMessage
)
from .services.customer_service import CustomerService


class StrictBooleanField(serializers.BooleanField):
    """Accepts JSON true/false only; strings and numbers are rejected."""
    default_error_messages = {
        'invalid': 'Must be a boolean (true or false).',
    }

    def to_internal_value(self, data):
        if not isinstance(data, bool):
            self.fail('invalid')
        return data


def _unique_colors(variants, field_name='variants'):
    colors = [variant.get('color', '').strip().lower() for variant in variants]
    if len(colors) != len(set(colors)):
        raise serializers.ValidationError(f'Each color may appear only once in {field_name}')


# ============================================================================
# Product
# ============================================================================

class ProductVariantSerializer(serializers.Serializer):
    color = serializers.CharField(max_length=100)
    pricePerMeters = serializers.FloatField(source='price_per_meter', min_value=0)
    stockInMeters = serializers.FloatField(source='stock_in_meters', min_value=0, default=0)


class StockInfoSerializer(serializers.Serializer):
    minimumStock = serializers.FloatField(source='minimum_stock', min_value=0, required=False)
    reorderPoint = serializers.FloatField(source='reorder_point', min_value=0, required=False)
    storageLocation = serializers.CharField(
        source='storage_location', max_length=200, allow_blank=True, required=False
    )


class ProductSerializer(serializers.ModelSerializer):
    productName = serializers.CharField(
        source='product_name',
        max_length=200,
        validators=[UniqueValidator(queryset=Product.objects.all(), message='A product with this name already exists')]
    )
    sku = serializers.CharField(
        max_length=50,
        required=False,
        allow_blank=True,
        validators=[UniqueValidator(queryset=Product.objects.all(), message='A product with this SKU already exists')]
    )
    variants = ProductVariantSerializer(many=True, allow_empty=False)
    images = serializers.ListField(
        child=serializers.CharField(max_length=500),
        max_length=MAX_PRODUCT_IMAGES,
        required=False
    )
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    stockInfo = StockInfoSerializer(source='*', required=False)
    totalStock = serializers.FloatField(source='total_stock', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'productName', 'sku', 'description', 'category', 'unit',
            'variants', 'images', 'tags', 'stockInfo', 'totalStock',
            'createdAt', 'updatedAt'
        ]
        read_only_fields = ['id']

    def validate_variants(self, value):
        _unique_colors(value)
        return value


class ProductListSerializer(serializers.ModelSerializer):
    """Lighter representation for product grids."""
    productName = serializers.CharField(source='product_name', read_only=True)
    variants = ProductVariantSerializer(many=True, read_only=True)
    totalStock = serializers.FloatField(source='total_stock', read_only=True)
    stockInfo = StockInfoSerializer(source='*', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'productName', 'sku', 'category', 'unit', 'variants',
            'images', 'tags', 'stockInfo', 'totalStock', 'createdAt'
        ]


# ============================================================================
# Stock
# ============================================================================

class StockVariantSerializer(serializers.Serializer):
    color = serializers.CharField(max_length=100)
    quantity = serializers.FloatField(min_value=0)
    unit = serializers.ChoiceField(choices=Product.Unit.choices, default=Product.Unit.METERS)


class AdditionalInfoSerializer(serializers.Serializer):
    batchNumber = serializers.CharField(source='batch_number', max_length=100, allow_blank=True, required=False)
    qualityGrade = serializers.ChoiceField(
        source='quality_grade', choices=Stock.QualityGrade.choices, allow_blank=True, required=False
    )
    notes = serializers.CharField(allow_blank=True, required=False)


class StockSerializer(serializers.ModelSerializer):
    """
    Stock with its variants, stage details and additional info.

    ``status`` may be supplied (e.g. ``processing``) but is always
    re-derived from the variant quantities when saved.
    """
    stockType = serializers.ChoiceField(source='stock_type', choices=Stock.StockType.choices)
    status = serializers.ChoiceField(choices=Stock.Status.choices, required=False)
    variants = StockVariantSerializer(many=True, allow_empty=False)
    stockDetails = serializers.DictField(source='stock_details', required=False)
    additionalInfo = AdditionalInfoSerializer(source='*', required=False)
    product = serializers.CharField(source='product_name', read_only=True)
    totalQuantity = serializers.FloatField(source='total_quantity', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    DETAIL_CHOICES = {
        'processingStage': PROCESSING_STAGES,
        'design': DESIGN_PATTERNS,
        'warehouse': WAREHOUSES,
    }

    class Meta:
        model = Stock
        fields = [
            'id', 'stockType', 'status', 'variants', 'stockDetails',
            'additionalInfo', 'product', 'totalQuantity', 'createdAt', 'updatedAt'
        ]
        read_only_fields = ['id']

    def validate_variants(self, value):
        _unique_colors(value)
        return value

    def validate_stockDetails(self, value):
        for key, item in value.items():
            if not isinstance(item, str):
                raise serializers.ValidationError(f'{key} must be a string')
        for key, allowed in self.DETAIL_CHOICES.items():
            if key in value and value[key] not in allowed:
                raise serializers.ValidationError(f"{key} must be one of: {', '.join(allowed)}")
        return value


# ============================================================================
# Customer
# ============================================================================

class CustomerSerializer(serializers.ModelSerializer):
    customerName = serializers.CharField(
        source='customer_name',
        max_length=200,
        validators=[UniqueValidator(queryset=Customer.objects.all(), message='A customer with this name already exists')]
    )
    customerType = serializers.ChoiceField(source='customer_type', choices=Customer.CustomerType.choices)
    city = serializers.ChoiceField(choices=Customer.City.choices)
    creditLimit = serializers.DecimalField(
        source='credit_limit', max_digits=14, decimal_places=2, min_value=0, coerce_to_string=False
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Customer
        fields = [
            'id', 'customerName', 'customerType', 'email', 'phone', 'city',
            'creditLimit', 'address', 'createdAt', 'updatedAt'
        ]
        read_only_fields = ['id']

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data.update(CustomerService.credit_position(instance))
        return data


# ============================================================================
# Order
# ============================================================================

class OrderItemSerializer(serializers.Serializer):
    product = serializers.CharField(max_length=200)
    color = serializers.CharField(max_length=100)
    quantity = serializers.FloatField()
    unit = serializers.ChoiceField(choices=Product.Unit.choices, default=Product.Unit.METERS)
    pricePerMeters = serializers.FloatField(source='price_per_meter', min_value=0)
    stockId = serializers.UUIDField(source='stock_id', required=False, allow_null=True)

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError('Quantity must be greater than zero')
        return value

    def to_internal_value(self, data):
        item = super().to_internal_value(data)
        if item.get('stock_id') is not None:
            item['stock_id'] = str(item['stock_id'])
        return item


class OrderSerializer(serializers.ModelSerializer):
    orderNumber = serializers.CharField(source='order_number', read_only=True)
    customer = serializers.SlugRelatedField(
        slug_field='customer_name',
        queryset=Customer.objects.all(),
        error_messages={'does_not_exist': 'Customer "{value}" not found'}
    )
    customerId = serializers.UUIDField(source='customer_id', read_only=True)
    status = serializers.ChoiceField(choices=Order.Status.choices, required=False)
    orderDate = serializers.DateField(source='order_date', required=False)
    deliveryDate = serializers.DateField(source='delivery_date')
    orderItems = OrderItemSerializer(source='order_items', many=True, allow_empty=False)
    totalAmount = serializers.SerializerMethodField()
    customerInfo = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'orderNumber', 'customer', 'customerId', 'customerInfo', 'status',
            'orderDate', 'deliveryDate', 'orderItems', 'notes', 'totalAmount',
            'createdAt', 'updatedAt'
        ]
        read_only_fields = ['id']

    def get_totalAmount(self, obj):
        return float(obj.total_amount)

    def get_customerInfo(self, obj):
        customer = obj.customer
        return {
            'city': customer.city,
            'customerType': customer.customer_type,
            'email': customer.email,
            'phone': customer.phone,
            'address': customer.address,
        }

    def validate(self, data):
        order_date = data.get('order_date') or getattr(self.instance, 'order_date', None)
        delivery_date = data.get('delivery_date') or getattr(self.instance, 'delivery_date', None)
        if order_date and delivery_date and delivery_date < order_date:
            raise serializers.ValidationError({'deliveryDate': 'Delivery date cannot be before the order date'})
        return data


# ============================================================================
# Return
# ============================================================================

class ReturnSerializer(serializers.ModelSerializer):
    returnId = serializers.CharField(source='return_id', read_only=True)
    order = serializers.UUIDField(write_only=True)
    orderId = serializers.UUIDField(source='order_id', read_only=True)
    orderNumber = serializers.CharField(source='order.order_number', read_only=True)
    customer = serializers.CharField(read_only=True)
    quantityInMeters = serializers.FloatField(source='quantity_in_meters')
    returnReason = serializers.CharField(source='return_reason')
    isApproved = serializers.BooleanField(source='is_approved', required=False)
    isRejected = serializers.BooleanField(source='is_rejected', required=False)
    status = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Return
        fields = [
            'id', 'returnId', 'order', 'orderId', 'orderNumber', 'customer',
            'product', 'color', 'quantityInMeters', 'returnReason',
            'isApproved', 'isRejected', 'status', 'createdAt', 'updatedAt'
        ]
        read_only_fields = ['id']

    def validate_quantityInMeters(self, value):
        if value <= 0:
            raise serializers.ValidationError('Quantity must be greater than zero')
        return value


# ============================================================================
# Adjustment
# ============================================================================

class AdjustmentCreateSerializer(serializers.Serializer):
    stockId = serializers.CharField(max_length=64)
    color = serializers.CharField(max_length=100)
    newQuantity = serializers.FloatField()
    reason = serializers.CharField()


class AdjustmentSerializer(serializers.ModelSerializer):
    stockId = serializers.UUIDField(source='stock_id', read_only=True)
    stockType = serializers.CharField(source='stock_type', read_only=True)
    prevQuantity = serializers.FloatField(source='prev_quantity', read_only=True)
    newQuantity = serializers.FloatField(source='new_quantity', read_only=True)
    quantityChange = serializers.FloatField(source='quantity_change', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Adjustment
        fields = [
            'id', 'stockId', 'product', 'stockType', 'color', 'prevQuantity',
            'newQuantity', 'quantityChange', 'reason', 'createdAt'
        ]
        read_only_fields = fields


# ============================================================================
# Admins, agents and notifications
# ============================================================================

class AdminContactSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = AdminContact
        fields = ['id', 'name', 'number', 'role', 'active', 'createdAt', 'updatedAt']
        read_only_fields = ['id']


class AdminActiveStatusSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    active = StrictBooleanField()


class AgentSerializer(serializers.ModelSerializer):
    agentId = serializers.CharField(source='agent_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Agent
        fields = ['id', 'agentId', 'name', 'factory', 'createdAt', 'updatedAt']
        read_only_fields = ['id']


class WhatsAppMessageSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source='message_type', read_only=True)
    sentToCount = serializers.IntegerField(source='sent_to_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = WhatsAppMessage
        fields = ['id', 'message', 'sentToCount', 'type', 'status', 'createdAt']
        read_only_fields = fields


class WhatsAppBroadcastSerializer(serializers.Serializer):
    message = serializers.CharField()
    type = serializers.ChoiceField(choices=WhatsAppMessage.MessageType.choices)


class NotificationSettingsSerializer(serializers.ModelSerializer):
    orderUpdates = StrictBooleanField(source='order_updates', required=False)
    stockAlerts = StrictBooleanField(source='stock_alerts', required=False)
    lowStockWarnings = StrictBooleanField(source='low_stock_warnings', required=False)
    newCustomers = StrictBooleanField(source='new_customers', required=False)
    dailyReports = StrictBooleanField(source='daily_reports', required=False)
    returnRequests = StrictBooleanField(source='return_requests', required=False)
    productUpdates = StrictBooleanField(source='product_updates', required=False)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = NotificationSettings
        fields = [
            'orderUpdates', 'stockAlerts', 'lowStockWarnings', 'newCustomers',
            'dailyReports', 'returnRequests', 'productUpdates', 'updatedAt'
        ]
