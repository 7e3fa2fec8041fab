"""
Management command to insert sample customers.

Customers that already exist (by name) are left untouched, so the command
is safe to run multiple times.

Usage:
    python manage.py seed_customers
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from inventory.models import Customer


SAMPLE_CUSTOMERS = [
    {
        'customer_name': 'Rajesh Textiles',
        'customer_type': Customer.CustomerType.WHOLESALE,
        'email': 'rajesh@rajeshtextiles.com',
        'phone': '919876543210',
        'city': Customer.City.MUMBAI,
        'credit_limit': Decimal('500000'),
        'address': '123 Textile Market, Mumbai, Maharashtra',
    },
    {
        'customer_name': 'Fashion Hub',
        'customer_type': Customer.CustomerType.RETAIL,
        'email': 'orders@fashionhub.com',
        'phone': '918765432109',
        'city': Customer.City.DELHI,
        'credit_limit': Decimal('300000'),
        'address': '456 Fashion Street, Delhi',
    },
    {
        'customer_name': 'Style Point',
        'customer_type': Customer.CustomerType.WHOLESALE,
        'email': 'info@stylepoint.com',
        'phone': '917654321098',
        'city': Customer.City.BANGALORE,
        'credit_limit': Decimal('400000'),
        'address': '789 Commercial Complex, Bangalore, Karnataka',
    },
    {
        'customer_name': 'Modern Fabrics',
        'customer_type': Customer.CustomerType.WHOLESALE,
        'email': 'purchase@modernfabrics.com',
        'phone': '916543210987',
        'city': Customer.City.CHENNAI,
        'credit_limit': Decimal('250000'),
        'address': '321 Industrial Area, Chennai, Tamil Nadu',
    },
    {
        'customer_name': 'Premium Garments',
        'customer_type': Customer.CustomerType.RETAIL,
        'email': 'sales@premiumgarments.com',
        'phone': '915432109876',
        'city': Customer.City.PUNE,
        'credit_limit': Decimal('200000'),
        'address': '654 Shopping Mall, Pune, Maharashtra',
    },
]


class Command(BaseCommand):
    help = 'Inserts sample customers that do not exist yet'

    def handle(self, *args, **options):
        created_count = 0

        for data in SAMPLE_CUSTOMERS:
            defaults = {key: value for key, value in data.items() if key != 'customer_name'}
            customer, created = Customer.objects.get_or_create(
                customer_name=data['customer_name'],
                defaults=defaults
            )
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'Created customer: {customer.customer_name}'))
            else:
                self.stdout.write(f'Customer already exists: {customer.customer_name}')

        self.stdout.write(self.style.SUCCESS(
            f'\nSeeded {created_count} customers ({len(SAMPLE_CUSTOMERS) - created_count} already present)'
        ))
