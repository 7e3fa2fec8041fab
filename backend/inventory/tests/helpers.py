"""Shared builders for the inventory tests."""

from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from inventory.models import Customer, Order, Product, Stock


def make_customer(name='Rajesh Textiles', credit_limit='100000.00', city=Customer.City.MUMBAI):
    return Customer.objects.create(
        customer_name=name,
        customer_type=Customer.CustomerType.WHOLESALE,
        email=f"{name.split()[0].lower()}@example.com",
        phone='919876543210',
        city=city,
        credit_limit=Decimal(credit_limit),
        address='123 Textile Market, Mumbai',
    )


def make_product(name='Premium Cotton', colors=('Red', 'Blue'), price=100, stock_in_meters=500, **extra):
    return Product.objects.create(
        product_name=name,
        category=Product.Category.COTTON,
        variants=[
            {'color': color, 'price_per_meter': price, 'stock_in_meters': stock_in_meters}
            for color in colors
        ],
        **extra
    )


def make_stock(product='Premium Cotton', variants=None, stock_type=Stock.StockType.GRAY, details=None, **extra):
    if variants is None:
        variants = {'Red': 200}
    return Stock.objects.create(
        stock_type=stock_type,
        variants=[
            {'color': color, 'quantity': quantity, 'unit': 'METERS'}
            for color, quantity in variants.items()
        ],
        stock_details={'product': product, **(details or {})},
        **extra
    )


def order_item(product='Premium Cotton', color='Red', quantity=10, price=100, stock_id=None):
    item = {
        'product': product,
        'color': color,
        'quantity': quantity,
        'unit': 'METERS',
        'price_per_meter': price,
    }
    if stock_id:
        item['stock_id'] = str(stock_id)
    return item


def make_order(customer, items, status=Order.Status.PENDING, delivery_in_days=10, order_date=None):
    return Order.objects.create(
        customer=customer,
        status=status,
        order_items=items,
        order_date=order_date or timezone.localdate(),
        delivery_date=timezone.localdate() + timedelta(days=delivery_in_days),
    )
