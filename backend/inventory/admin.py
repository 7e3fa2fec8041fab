from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html
from .models import (
    Adjustment, AdminContact, Agent, Customer, NotificationSettings,
    Order, Product, Return, Stock, WhatsAppMessage
)


STOCK_STATUS_COLORS = {
    'available': '#10B981',      # Green
    'low': '#F59E0B',            # Amber
    'out': '#EF4444',            # Red
    'processing': '#3B82F6',     # Blue
    'quality_check': '#8B5CF6',  # Purple
}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for the product catalogue"""
    list_display = ['sku', 'product_name', 'category', 'unit', 'color_list', 'total_stock_display', 'created_at']
    list_filter = ['category', 'unit', 'created_at']
    search_fields = ['product_name', 'sku', 'description']
    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        ('Product Information', {
            'fields': ('id', 'product_name', 'sku', 'description', 'category', 'unit')
        }),
        ('Variants & Media', {
            'fields': ('variants', 'images', 'tags')
        }),
        ('Stock Thresholds', {
            'fields': ('minimum_stock', 'reorder_point', 'storage_location')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def color_list(self, obj):
        return ', '.join(color for color in obj.colors if color)
    color_list.short_description = 'Colors'

    def total_stock_display(self, obj):
        return f'{obj.total_stock:g} {obj.get_unit_display().lower()}'
    total_stock_display.short_description = 'Stock'


@admin.register(Stock)
class StockAdmin(admin.ModelAdmin):
    list_display = ['product_display', 'stock_type', 'status_badge', 'total_quantity_display', 'batch_number', 'updated_at']
    list_filter = ['stock_type', 'status', 'quality_grade']
    search_fields = ['stock_details__product', 'batch_number', 'notes']
    readonly_fields = ['id', 'status', 'created_at', 'updated_at']

    fieldsets = (
        ('Stock', {
            'fields': ('id', 'stock_type', 'status', 'variants', 'stock_details')
        }),
        ('Additional Info', {
            'fields': ('batch_number', 'quality_grade', 'notes')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def product_display(self, obj):
        return obj.product_name or '-'
    product_display.short_description = 'Product'

    def status_badge(self, obj):
        """Display status with color badge"""
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            STOCK_STATUS_COLORS.get(obj.status, '#6B7280'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def total_quantity_display(self, obj):
        return f'{obj.total_quantity:g}'
    total_quantity_display.short_description = 'Quantity'


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['customer_name', 'customer_type', 'city', 'phone', 'credit_limit_display', 'order_count']
    list_filter = ['customer_type', 'city']
    search_fields = ['customer_name', 'email', 'phone']
    readonly_fields = ['id', 'created_at', 'updated_at']

    def credit_limit_display(self, obj):
        return f'₹{obj.credit_limit:,.2f}'
    credit_limit_display.short_description = 'Credit Limit'
    credit_limit_display.admin_order_field = 'credit_limit'

    def order_count(self, obj):
        """Link to the customer's orders"""
        count = obj.orders.count()
        if count > 0:
            url = reverse('admin:inventory_order_changelist') + f'?customer__id__exact={obj.id}'
            return format_html('<a href="{}">{} orders</a>', url, count)
        return '0 orders'
    order_count.short_description = 'Orders'


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['order_number', 'customer', 'status_badge', 'amount_display', 'order_date', 'delivery_date']
    list_filter = ['status', 'order_date', 'delivery_date']
    search_fields = ['order_number', 'customer__customer_name', 'notes']
    readonly_fields = ['id', 'order_number', 'status', 'order_items', 'created_at', 'updated_at']
    date_hierarchy = 'order_date'
    list_select_related = ['customer']

    def status_badge(self, obj):
        color = '#10B981' if obj.is_confirmed else '#F59E0B'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            color,
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def amount_display(self, obj):
        """Display amount with currency"""
        return f'₹{obj.total_amount:,.2f}'
    amount_display.short_description = 'Amount'


@admin.register(Return)
class ReturnAdmin(admin.ModelAdmin):
    list_display = ['return_id', 'order', 'product', 'color', 'quantity_in_meters', 'status_display', 'created_at']
    list_filter = ['is_approved', 'is_rejected', 'created_at']
    search_fields = ['return_id', 'product', 'order__order_number', 'return_reason']
    readonly_fields = ['id', 'return_id', 'created_at', 'updated_at']

    def status_display(self, obj):
        return obj.status.capitalize()
    status_display.short_description = 'Status'


@admin.register(Adjustment)
class AdjustmentAdmin(admin.ModelAdmin):
    """Read-only view of the adjustment audit log"""
    list_display = ['product', 'stock_type', 'color', 'prev_quantity', 'new_quantity', 'reason', 'created_at']
    list_filter = ['stock_type', 'created_at']
    search_fields = ['product', 'color', 'reason']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AdminContact)
class AdminContactAdmin(admin.ModelAdmin):
    list_display = ['name', 'number', 'role', 'active']
    list_filter = ['role', 'active']
    search_fields = ['name', 'number']
    list_editable = ['active']


@admin.register(Agent)
class AgentAdmin(admin.ModelAdmin):
    list_display = ['agent_id', 'name', 'factory', 'created_at']
    search_fields = ['agent_id', 'name', 'factory']
    readonly_fields = ['agent_id']


@admin.register(WhatsAppMessage)
class WhatsAppMessageAdmin(admin.ModelAdmin):
    list_display = ['message_type', 'message_preview', 'sent_to_count', 'status', 'created_at']
    list_filter = ['message_type', 'status', 'created_at']
    search_fields = ['message']
    readonly_fields = ['id', 'message', 'message_type', 'sent_to_count', 'status', 'created_at']

    def message_preview(self, obj):
        """Show preview of message text"""
        if len(obj.message) > 50:
            return obj.message[:50] + '...'
        return obj.message
    message_preview.short_description = 'Message'


@admin.register(NotificationSettings)
class NotificationSettingsAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'updated_at']

    def has_add_permission(self, request):
        return not NotificationSettings.objects.exists()
