"""
In-process APScheduler running the periodic management commands.

Started from CommonConfig.ready() in the serving process only.
"""
import atexit
import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from django.core.management import call_command
from django.utils import timezone

logger = logging.getLogger(__name__)

# (job id, label, management command, CronTrigger fields)
JOBS = [
    ('sync_room_statuses', 'Sync room statuses', 'sync_room_statuses', {'minute': 5}),
    ('send_checkout_reminders', 'Checkout reminders', 'send_checkout_reminders', {'minute': 0}),
    ('purge_deleted_bookings', 'Purge booking trash', 'purge_deleted_bookings', {'hour': 3, 'minute': 0}),
]

_scheduler = None


def run_command_job(command):
    """
    Job body. Errors are logged and swallowed so one failing run does not
    unschedule the job.
    """
    logger.info(f"Scheduled job {command} starting")
    try:
        call_command(command)
    except Exception as exc:
        logger.error(f"Error in scheduled job {command}: {exc}", exc_info=True)
        return
    logger.info(f"Scheduled job {command} finished")


def build_scheduler():
    tz = timezone.get_current_timezone()
    scheduler = BackgroundScheduler(timezone=tz)
    for job_id, label, command, fields in JOBS:
        scheduler.add_job(
            run_command_job,
            CronTrigger(timezone=tz, **fields),
            args=[command],
            id=job_id,
            name=label,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
    return scheduler


def start_scheduler():
    global _scheduler
    if _scheduler is not None and _scheduler.running:
        logger.warning("Scheduler already running; start ignored")
        return
    _scheduler = build_scheduler()
    _scheduler.start()
    atexit.register(stop_scheduler)
    for job in _scheduler.get_jobs():
        logger.info(f"Scheduled {job.name}: next run {job.next_run_time}")


def stop_scheduler():
    global _scheduler
    if _scheduler is None:
        return
    if _scheduler.running:
        _scheduler.shutdown(wait=True)
        logger.info("Scheduler stopped")
    _scheduler = None
