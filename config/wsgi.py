# WSGI (Web Server Gateway Interface) configuration for production deployment
#
# GUNICORN (Recommended)
# Run: gunicorn config.wsgi:application --bind 0.0.0.0:8000 --workers 4
#
# Put a reverse proxy (Nginx) in front to serve /media/ and /static/
# and set DEBUG=False, SECRET_KEY, ALLOWED_HOSTS in the environment.
# ==============================================================================

import os
from django.core.wsgi import get_wsgi_application

# Points to config/settings.py
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()
