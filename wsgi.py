"""
WSGI entry point for production servers
gunicorn wsgi:application
"""
from ncd_clinic import create_app

application = create_app()
