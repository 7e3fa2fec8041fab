import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from utils.constants import LOW_STOCK_THRESHOLD, MAX_PRODUCT_IMAGES, OUT_OF_STOCK_QUANTITY


class TimeStampedModel(models.Model):
    """
    Base for every document-like entity: UUID key plus audit timestamps.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


def next_sequence_code(model, field, prefix):
    """
    Return ``PREFIX-NNN`` one past the highest code already issued.

    Codes are compared numerically so ``RET-1000`` sorts after ``RET-999``.
    """
    codes = model.objects.filter(
        **{f'{field}__startswith': f'{prefix}-'}
    ).values_list(field, flat=True)

    highest = 0
    for code in codes:
        try:
            highest = max(highest, int(code.rsplit('-', 1)[1]))
        except (IndexError, ValueError):
            continue
    return f"{prefix}-{highest + 1:03d}"


class Product(TimeStampedModel):
    """
    Fabric product catalogue entry.

    Variants are embedded as a list of dicts:
    ``{"color": str, "price_per_meter": float, "stock_in_meters": float}``.
    Stock documents reference a product by name through their detail blob.
    """

    class Category(models.TextChoices):
        COTTON = 'Cotton Fabrics', 'Cotton Fabrics'
        SILK = 'Silk Fabrics', 'Silk Fabrics'
        POLYESTER = 'Polyester Fabrics', 'Polyester Fabrics'
        BLENDED = 'Blended Fabrics', 'Blended Fabrics'
        DESIGNER_PRINTS = 'Designer Prints', 'Designer Prints'
        SOLID_COLORS = 'Solid Colors', 'Solid Colors'
        TEXTURED = 'Textured Fabrics', 'Textured Fabrics'
        SEASONAL = 'Seasonal Collection', 'Seasonal Collection'

    class Unit(models.TextChoices):
        METERS = 'METERS', 'Meters'
        SETS = 'SETS', 'Sets'

    product_name = models.CharField(
        max_length=200,
        unique=True,
        help_text="Product name, referenced by stock and order line items"
    )
    sku = models.CharField(
        max_length=50,
        unique=True,
        blank=True,
        help_text="Stock keeping unit, derived from the id when left blank"
    )
    description = models.TextField(blank=True, default='')
    category = models.CharField(
        max_length=50,
        choices=Category.choices,
        db_index=True
    )
    unit = models.CharField(
        max_length=10,
        choices=Unit.choices,
        default=Unit.METERS
    )
    variants = models.JSONField(
        default=list,
        help_text="Colour variants with price per meter and stock in meters"
    )
    images = models.JSONField(default=list, blank=True, help_text="Stored image paths")
    tags = models.JSONField(default=list, blank=True)

    # Stock thresholds
    minimum_stock = models.FloatField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Variant quantity below which a stock alert is raised"
    )
    reorder_point = models.FloatField(default=0, validators=[MinValueValidator(0)])
    storage_location = models.CharField(max_length=200, blank=True, default='')

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Product'
        verbose_name_plural = 'Products'

    def __str__(self):
        return f"{self.sku} - {self.product_name}"

    def save(self, *args, **kwargs):
        if not self.sku:
            self.sku = f"SKU-{self.id.hex[-6:].upper()}"
        super().save(*args, **kwargs)

    @property
    def total_stock(self):
        return sum(float(v.get('stock_in_meters') or 0) for v in self.variants)

    @property
    def colors(self):
        return [v.get('color') for v in self.variants]

    def clean(self):
        super().clean()

        if len(self.images or []) > MAX_PRODUCT_IMAGES:
            raise ValidationError({
                'images': f'A product can have at most {MAX_PRODUCT_IMAGES} images'
            })

        if not self.variants:
            raise ValidationError({'variants': 'At least one variant is required'})


class Stock(TimeStampedModel):
    """
    Fabric stock at one processing stage.

    ``status`` is derived: it is recomputed from the variant quantities on
    every save, with ``processing`` kept while any quantity remains.
    """

    class StockType(models.TextChoices):
        GRAY = 'Gray Stock', 'Gray Stock'
        FACTORY = 'Factory Stock', 'Factory Stock'
        DESIGN = 'Design Stock', 'Design Stock'

    class Status(models.TextChoices):
        AVAILABLE = 'available', 'Available'
        LOW = 'low', 'Low'
        OUT = 'out', 'Out of Stock'
        PROCESSING = 'processing', 'Processing'
        QUALITY_CHECK = 'quality_check', 'Quality Check'

    class QualityGrade(models.TextChoices):
        A_PLUS = 'A+', 'A+'
        A = 'A', 'A'
        B_PLUS = 'B+', 'B+'
        B = 'B', 'B'

    stock_type = models.CharField(
        max_length=20,
        choices=StockType.choices,
        db_index=True
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.AVAILABLE,
        db_index=True
    )
    variants = models.JSONField(
        default=list,
        help_text="Colour variants: {color, quantity, unit}"
    )
    stock_details = models.JSONField(
        default=dict,
        help_text="Stage specific details; always carries the product name"
    )

    # Additional info
    batch_number = models.CharField(max_length=100, blank=True, default='')
    quality_grade = models.CharField(
        max_length=2,
        choices=QualityGrade.choices,
        blank=True,
        default=''
    )
    notes = models.TextField(blank=True, default='')

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Stock'
        verbose_name_plural = 'Stock'
        indexes = [
            models.Index(fields=['stock_type', 'status'], name='stock_type_status_idx'),
        ]

    def __str__(self):
        return f"{self.stock_type} - {self.product_name or 'unassigned'} ({self.status})"

    @staticmethod
    def derive_status(total_quantity, current_status=None):
        """Map a total quantity to a status, keeping ``processing`` while stock remains."""
        if total_quantity <= OUT_OF_STOCK_QUANTITY:
            return Stock.Status.OUT
        if current_status == Stock.Status.PROCESSING:
            return Stock.Status.PROCESSING
        if total_quantity < LOW_STOCK_THRESHOLD:
            return Stock.Status.LOW
        return Stock.Status.AVAILABLE

    @property
    def total_quantity(self):
        return sum(float(v.get('quantity') or 0) for v in self.variants)

    @property
    def product_name(self):
        return (self.stock_details or {}).get('product', '')

    def get_variant(self, color):
        for variant in self.variants:
            if variant.get('color') == color:
                return variant
        return None

    def refresh_status(self):
        self.status = self.derive_status(self.total_quantity, self.status)
        return self.status

    def save(self, *args, **kwargs):
        self.refresh_status()
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'status' not in update_fields:
            kwargs['update_fields'] = list(update_fields) + ['status']
        super().save(*args, **kwargs)


class Customer(TimeStampedModel):
    class CustomerType(models.TextChoices):
        WHOLESALE = 'Wholesale', 'Wholesale'
        RETAIL = 'Retail', 'Retail'

    class City(models.TextChoices):
        MUMBAI = 'Mumbai', 'Mumbai'
        DELHI = 'Delhi', 'Delhi'
        BANGALORE = 'Bangalore', 'Bangalore'
        CHENNAI = 'Chennai', 'Chennai'
        PUNE = 'Pune', 'Pune'
        KOLKATA = 'Kolkata', 'Kolkata'
        HYDERABAD = 'Hyderabad', 'Hyderabad'
        AHMEDABAD = 'Ahmedabad', 'Ahmedabad'

    customer_name = models.CharField(max_length=200, unique=True)
    customer_type = models.CharField(max_length=20, choices=CustomerType.choices)
    email = models.EmailField()
    phone = models.CharField(max_length=30)
    city = models.CharField(max_length=30, choices=City.choices, db_index=True)
    credit_limit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text="Maximum total value of outstanding orders"
    )
    address = models.TextField()

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.customer_name} ({self.city})"

    @property
    def total_order_value(self):
        return sum((order.total_amount for order in self.orders.all()), Decimal('0.00'))

    @property
    def remaining_credit(self):
        return self.credit_limit - self.total_order_value


class Order(TimeStampedModel):
    """
    Customer order.

    Line items are embedded as a list of dicts:
    ``{"product", "color", "quantity", "unit", "price_per_meter", "stock_id"}``.
    Stock is deducted when the order becomes confirmed.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        CONFIRMED = 'confirmed', 'Confirmed'

    order_number = models.CharField(max_length=20, unique=True, blank=True)
    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        related_name='orders'
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    order_date = models.DateField(default=timezone.localdate, db_index=True)
    delivery_date = models.DateField()
    order_items = models.JSONField(default=list)
    notes = models.TextField(blank=True, default='')

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.order_number} - {self.customer.customer_name} ({self.status})"

    def save(self, *args, **kwargs):
        if not self.order_number:
            self.order_number = next_sequence_code(Order, 'order_number', 'ORD')
        super().save(*args, **kwargs)

    @staticmethod
    def items_total(items):
        total = Decimal('0.00')
        for item in items:
            total += Decimal(str(item.get('quantity') or 0)) * Decimal(str(item.get('price_per_meter') or 0))
        return total.quantize(Decimal('0.01'))

    @property
    def total_amount(self):
        return self.items_total(self.order_items)

    @property
    def is_confirmed(self):
        return self.status == self.Status.CONFIRMED


class Return(TimeStampedModel):
    """
    Return request against an order.

    pending -> approved | rejected; both outcomes are terminal.
    """
    return_id = models.CharField(max_length=20, unique=True, blank=True)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='returns'
    )
    product = models.CharField(max_length=200)
    color = models.CharField(max_length=100)
    quantity_in_meters = models.FloatField(validators=[MinValueValidator(0)])
    return_reason = models.TextField()
    is_approved = models.BooleanField(default=False)
    is_rejected = models.BooleanField(default=False)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.return_id} - {self.product} ({self.status})"

    def save(self, *args, **kwargs):
        if not self.return_id:
            self.return_id = next_sequence_code(Return, 'return_id', 'RET')
        super().save(*args, **kwargs)

    @property
    def customer(self):
        return self.order.customer.customer_name

    @property
    def status(self):
        if self.is_approved:
            return 'approved'
        if self.is_rejected:
            return 'rejected'
        return 'pending'

    @property
    def is_locked(self):
        return self.is_approved or self.is_rejected

    def clean(self):
        super().clean()
        if self.is_approved and self.is_rejected:
            raise ValidationError('A return cannot be both approved and rejected')


class Adjustment(TimeStampedModel):
    """
    Append-only audit record of a manual stock increase.
    """
    stock = models.ForeignKey(
        Stock,
        null=True,
        on_delete=models.SET_NULL,
        related_name='adjustments'
    )
    product = models.CharField(max_length=200, blank=True, default='')
    stock_type = models.CharField(max_length=20, choices=Stock.StockType.choices)
    color = models.CharField(max_length=100)
    prev_quantity = models.FloatField()
    new_quantity = models.FloatField()
    reason = models.TextField()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['stock', 'color'], name='adjustment_stock_color_idx'),
        ]

    def __str__(self):
        return f"{self.product} {self.color}: {self.prev_quantity} -> {self.new_quantity}"

    @property
    def quantity_change(self):
        return self.new_quantity - self.prev_quantity


class AdminContact(TimeStampedModel):
    """WhatsApp notification recipient."""

    class Role(models.TextChoices):
        OWNER = 'owner', 'Owner'
        MANAGER = 'manager', 'Manager'
        SALES = 'sales', 'Sales'
        INVENTORY_HEAD = 'inventory head', 'Inventory Head'

    name = models.CharField(max_length=200)
    number = models.CharField(max_length=30, help_text="Phone number in E.164 format")
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.OWNER)
    active = models.BooleanField(default=True, db_index=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Admin'
        verbose_name_plural = 'Admins'

    def __str__(self):
        return f"{self.name} ({self.role})"


class Agent(TimeStampedModel):
    agent_id = models.CharField(max_length=20, unique=True, blank=True)
    name = models.CharField(max_length=200)
    factory = models.CharField(max_length=200)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.agent_id} - {self.name}"

    def save(self, *args, **kwargs):
        if not self.agent_id:
            self.agent_id = next_sequence_code(Agent, 'agent_id', 'AGT')
        super().save(*args, **kwargs)


class WhatsAppMessage(TimeStampedModel):
    """Outbound notification log."""

    class MessageType(models.TextChoices):
        STOCK_ALERT = 'stock_alert', 'Stock Alert'
        ORDER_UPDATE = 'order_update', 'Order Update'
        RETURN_REQUEST = 'return_request', 'Return Request'
        PRODUCT_UPDATE = 'product_update', 'Product Update'
        DAILY_REPORT = 'daily_report', 'Daily Report'

    class DeliveryStatus(models.TextChoices):
        DELIVERED = 'Delivered', 'Delivered'
        NOT_DELIVERED = 'Not Delivered', 'Not Delivered'

    message = models.TextField()
    sent_to_count = models.PositiveIntegerField(default=0)
    message_type = models.CharField(
        max_length=20,
        choices=MessageType.choices,
        db_index=True
    )
    status = models.CharField(
        max_length=20,
        choices=DeliveryStatus.choices,
        default=DeliveryStatus.DELIVERED
    )

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'WhatsApp Message'
        verbose_name_plural = 'WhatsApp Messages'

    def __str__(self):
        return f"{self.message_type} to {self.sent_to_count} ({self.status})"


class NotificationSettings(models.Model):
    """
    Singleton row of per-category notification toggles.
    """
    order_updates = models.BooleanField(default=False)
    stock_alerts = models.BooleanField(default=False)
    low_stock_warnings = models.BooleanField(default=False)
    new_customers = models.BooleanField(default=False)
    daily_reports = models.BooleanField(default=False)
    return_requests = models.BooleanField(default=False)
    product_updates = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)

    TOGGLES = (
        'order_updates', 'stock_alerts', 'low_stock_warnings', 'new_customers',
        'daily_reports', 'return_requests', 'product_updates',
    )

    class Meta:
        verbose_name = 'Notification Settings'
        verbose_name_plural = 'Notification Settings'

    def __str__(self):
        enabled = [name for name in self.TOGGLES if getattr(self, name)]
        return f"Notifications: {', '.join(enabled) or 'none'}"

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        settings_row, _ = cls.objects.get_or_create(pk=1)
        return settings_row

    def is_enabled(self, toggle):
        return bool(getattr(self, toggle))
