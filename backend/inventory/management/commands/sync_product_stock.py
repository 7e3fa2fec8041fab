"""
Management command to bring stock records back in line with the product
catalogue.

Runs, in order:
1. fix_stock_inconsistencies: stocks naming an unknown product are pointed
   at the catalogue product sharing the first word of the name
2. sync_stocks_with_products: stock variant lists are rebuilt from the
   product colours, keeping quantities
3. fix_renamed_products (with --orders): order line items are re-attached

Usage:
    python manage.py sync_product_stock [--orders]
"""

from django.core.management.base import BaseCommand, CommandParser
from inventory.services import ProductService


class Command(BaseCommand):
    help = 'Synchronises stock variants (and optionally order items) with the product catalogue'

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            '--orders',
            action='store_true',
            help='Also re-attach order line items that name a renamed product.'
        )

    def handle(self, *args, **options):
        fixed = ProductService.fix_stock_inconsistencies()
        for fix in fixed['fixes']:
            self.stdout.write(f"Stock {fix['stockId']}: '{fix['from']}' -> '{fix['to']}'")
        self.stdout.write(f"Renamed {fixed['totalFixed']} of {fixed['totalStocks']} stocks")

        synced = ProductService.sync_stocks_with_products()
        self.stdout.write(self.style.SUCCESS(
            f"Synced {synced['syncedCount']} stocks, skipped {synced['skippedCount']}"
        ))
        for error in synced['errors']:
            self.stderr.write(self.style.ERROR(f"Stock {error['stockId']}: {error['error']}"))

        if options['orders']:
            renamed = ProductService.fix_renamed_products()
            self.stdout.write(self.style.SUCCESS(
                f"Updated {renamed['totalUpdated']} of {renamed['totalOrders']} orders"
            ))
            if renamed['unresolved']:
                self.stdout.write(self.style.WARNING(
                    f"Unresolved product names: {', '.join(renamed['unresolved'])}"
                ))
