from celery import shared_task
import logging

from .models import WhatsAppMessage

logger = logging.getLogger(__name__)


@shared_task
def dispatch_whatsapp_message(message, message_type):
    """Fan a notification out to the active admins and return the log entry id."""
    from .services.notification_service import NotificationService

    log_entry = NotificationService.dispatch(message, message_type)
    return str(log_entry.id)


@shared_task
def send_daily_report(force=False):
    """
    Compose today's summary and dispatch it.

    Skipped unless the daily reports toggle is on, or ``force`` is set.
    """
    from .services.notification_service import NotificationService
    from .services.report_service import ReportService

    message = ReportService.daily_report_message()

    if force:
        log_entry = NotificationService.dispatch(message, WhatsAppMessage.MessageType.DAILY_REPORT)
        logger.info(f"Daily report dispatched to {log_entry.sent_to_count} admins")
        return True

    queued = NotificationService.notify(
        'daily_reports', message, WhatsAppMessage.MessageType.DAILY_REPORT
    )
    if not queued:
        logger.info("Daily reports are disabled; nothing sent")
    return queued
