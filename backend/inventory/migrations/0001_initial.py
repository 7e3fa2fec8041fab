import decimal
import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='AdminContact',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=200)),
                ('number', models.CharField(help_text='Phone number in E.164 format', max_length=30)),
                ('role', models.CharField(choices=[('owner', 'Owner'), ('manager', 'Manager'), ('sales', 'Sales'), ('inventory head', 'Inventory Head')], default='owner', max_length=20)),
                ('active', models.BooleanField(db_index=True, default=True)),
            ],
            options={
                'verbose_name': 'Admin',
                'verbose_name_plural': 'Admins',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Agent',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('agent_id', models.CharField(blank=True, max_length=20, unique=True)),
                ('name', models.CharField(max_length=200)),
                ('factory', models.CharField(max_length=200)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('customer_name', models.CharField(max_length=200, unique=True)),
                ('customer_type', models.CharField(choices=[('Wholesale', 'Wholesale'), ('Retail', 'Retail')], max_length=20)),
                ('email', models.EmailField(max_length=254)),
                ('phone', models.CharField(max_length=30)),
                ('city', models.CharField(choices=[('Mumbai', 'Mumbai'), ('Delhi', 'Delhi'), ('Bangalore', 'Bangalore'), ('Chennai', 'Chennai'), ('Pune', 'Pune'), ('Kolkata', 'Kolkata'), ('Hyderabad', 'Hyderabad'), ('Ahmedabad', 'Ahmedabad')], db_index=True, max_length=30)),
                ('credit_limit', models.DecimalField(decimal_places=2, help_text='Maximum total value of outstanding orders', max_digits=14, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('address', models.TextField()),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='NotificationSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('order_updates', models.BooleanField(default=False)),
                ('stock_alerts', models.BooleanField(default=False)),
                ('low_stock_warnings', models.BooleanField(default=False)),
                ('new_customers', models.BooleanField(default=False)),
                ('daily_reports', models.BooleanField(default=False)),
                ('return_requests', models.BooleanField(default=False)),
                ('product_updates', models.BooleanField(default=False)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Notification Settings',
                'verbose_name_plural': 'Notification Settings',
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product_name', models.CharField(help_text='Product name, referenced by stock and order line items', max_length=200, unique=True)),
                ('sku', models.CharField(blank=True, help_text='Stock keeping unit, derived from the id when left blank', max_length=50, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('category', models.CharField(choices=[('Cotton Fabrics', 'Cotton Fabrics'), ('Silk Fabrics', 'Silk Fabrics'), ('Polyester Fabrics', 'Polyester Fabrics'), ('Blended Fabrics', 'Blended Fabrics'), ('Designer Prints', 'Designer Prints'), ('Solid Colors', 'Solid Colors'), ('Textured Fabrics', 'Textured Fabrics'), ('Seasonal Collection', 'Seasonal Collection')], db_index=True, max_length=50)),
                ('unit', models.CharField(choices=[('METERS', 'Meters'), ('SETS', 'Sets')], default='METERS', max_length=10)),
                ('variants', models.JSONField(default=list, help_text='Colour variants with price per meter and stock in meters')),
                ('images', models.JSONField(blank=True, default=list, help_text='Stored image paths')),
                ('tags', models.JSONField(blank=True, default=list)),
                ('minimum_stock', models.FloatField(default=0, help_text='Variant quantity below which a stock alert is raised', validators=[django.core.validators.MinValueValidator(0)])),
                ('reorder_point', models.FloatField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ('storage_location', models.CharField(blank=True, default='', max_length=200)),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Stock',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('stock_type', models.CharField(choices=[('Gray Stock', 'Gray Stock'), ('Factory Stock', 'Factory Stock'), ('Design Stock', 'Design Stock')], db_index=True, max_length=20)),
                ('status', models.CharField(choices=[('available', 'Available'), ('low', 'Low'), ('out', 'Out of Stock'), ('processing', 'Processing'), ('quality_check', 'Quality Check')], db_index=True, default='available', max_length=20)),
                ('variants', models.JSONField(default=list, help_text='Colour variants: {color, quantity, unit}')),
                ('stock_details', models.JSONField(default=dict, help_text='Stage specific details; always carries the product name')),
                ('batch_number', models.CharField(blank=True, default='', max_length=100)),
                ('quality_grade', models.CharField(blank=True, choices=[('A+', 'A+'), ('A', 'A'), ('B+', 'B+'), ('B', 'B')], default='', max_length=2)),
                ('notes', models.TextField(blank=True, default='')),
            ],
            options={
                'verbose_name': 'Stock',
                'verbose_name_plural': 'Stock',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['stock_type', 'status'], name='stock_type_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='WhatsAppMessage',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('message', models.TextField()),
                ('sent_to_count', models.PositiveIntegerField(default=0)),
                ('message_type', models.CharField(choices=[('stock_alert', 'Stock Alert'), ('order_update', 'Order Update'), ('return_request', 'Return Request'), ('product_update', 'Product Update'), ('daily_report', 'Daily Report')], db_index=True, max_length=20)),
                ('status', models.CharField(choices=[('Delivered', 'Delivered'), ('Not Delivered', 'Not Delivered')], default='Delivered', max_length=20)),
            ],
            options={
                'verbose_name': 'WhatsApp Message',
                'verbose_name_plural': 'WhatsApp Messages',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('order_number', models.CharField(blank=True, max_length=20, unique=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed')], db_index=True, default='pending', max_length=20)),
                ('order_date', models.DateField(db_index=True, default=django.utils.timezone.localdate)),
                ('delivery_date', models.DateField()),
                ('order_items', models.JSONField(default=list)),
                ('notes', models.TextField(blank=True, default='')),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='inventory.customer')),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Return',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('return_id', models.CharField(blank=True, max_length=20, unique=True)),
                ('product', models.CharField(max_length=200)),
                ('color', models.CharField(max_length=100)),
                ('quantity_in_meters', models.FloatField(validators=[django.core.validators.MinValueValidator(0)])),
                ('return_reason', models.TextField()),
                ('is_approved', models.BooleanField(default=False)),
                ('is_rejected', models.BooleanField(default=False)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='returns', to='inventory.order')),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Adjustment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.CharField(blank=True, default='', max_length=200)),
                ('stock_type', models.CharField(choices=[('Gray Stock', 'Gray Stock'), ('Factory Stock', 'Factory Stock'), ('Design Stock', 'Design Stock')], max_length=20)),
                ('color', models.CharField(max_length=100)),
                ('prev_quantity', models.FloatField()),
                ('new_quantity', models.FloatField()),
                ('reason', models.TextField()),
                ('stock', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='adjustments', to='inventory.stock')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['stock', 'color'], name='adjustment_stock_color_idx')],
            },
        ),
    ]
