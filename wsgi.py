"""
WSGI entry point for production deployment
Used by Gunicorn: gunicorn wsgi:application
"""
from pregnancy_tracker import create_app

application = app = create_app()
