from django.core.management.base import BaseCommand, CommandParser
from inventory.services import StockService


class Command(BaseCommand):
    help = 'Re-derives the status of every stock from its variant quantities.'

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Only report the status changes without saving them.'
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        changes = StockService.recompute_all_statuses(dry_run=dry_run)

        for stock, old_status, new_status in changes:
            self.stdout.write(
                f'{stock.stock_type} {stock.id} ({stock.product_name or "unassigned"}): '
                f'{old_status} -> {new_status}'
            )

        prefix = '[Dry Run] Would update' if dry_run else 'Updated'
        self.stdout.write(self.style.SUCCESS(f'{prefix} {len(changes)} stock statuses.'))
