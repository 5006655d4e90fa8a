# FLOAT CRM - DJANGO MANAGEMENT SCRIPT
#
# Common commands:
# - python manage.py migrate            # Create / upgrade the database (SQLite unless DB_ENGINE is set)
# - python manage.py createsuperuser    # First admin (role=admin)
# - python manage.py runserver          # JSON API on :8000, /api/...
# - python manage.py test apps          # Run every app's tests
#
# Background email (task assignment):
# - celery -A config worker -l info
# ==============================================================================

import os
import sys


def main():
    """Run a management command against config.settings"""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Install the project first "
            "(pip install -e .) or activate its virtual environment."
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
