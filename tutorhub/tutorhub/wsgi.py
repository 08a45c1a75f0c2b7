"""
WSGI config for tutorhub project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'tutorhub.settings')

application = get_wsgi_application()
