"""
WSGI config for the staydesk project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'staydesk.settings')

application = get_wsgi_application()
