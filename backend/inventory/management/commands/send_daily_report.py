from django.core.management.base import BaseCommand, CommandParser
from inventory.tasks import send_daily_report


class Command(BaseCommand):
    help = "Composes today's summary and sends it to the active admins over WhatsApp."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            '--force',
            action='store_true',
            help='Send even when daily reports are switched off in the notification settings.'
        )

    def handle(self, *args, **options):
        sent = send_daily_report(force=options['force'])

        if sent:
            self.stdout.write(self.style.SUCCESS('Daily report sent.'))
        else:
            self.stdout.write(self.style.WARNING('Daily reports are disabled; use --force to send anyway.'))
