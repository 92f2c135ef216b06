import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

# Commands that must never spin up the background jobs
NO_SCHEDULER_COMMANDS = {'migrate', 'makemigrations', 'test', 'collectstatic', 'shell'}


class CommonConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'common'
    verbose_name = 'Site settings'

    def ready(self):
        # RUN_MAIN is only set in the autoreloader's serving child
        if os.environ.get('RUN_MAIN') != 'true':
            return
        if len(sys.argv) > 1 and sys.argv[1] in NO_SCHEDULER_COMMANDS:
            return
        if not settings.ENABLE_BACKGROUND_SCHEDULER:
            logger.info("Background scheduler disabled by ENABLE_BACKGROUND_SCHEDULER")
            return

        from common.scheduler import start_scheduler
        start_scheduler()
