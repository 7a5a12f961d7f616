# wsgi.py
# gunicorn wsgi:app
import logging

from app import create_app, LOG_FORMAT

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

app = create_app()
