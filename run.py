"""
Development server entry point
Run with: python run.py (or: flask --app run run)
"""
import logging
import os

from ncd_clinic import create_app

app = create_app()
logger = logging.getLogger(__name__)

if __name__ == '__main__':
    host = os.getenv('FLASK_HOST', '0.0.0.0')
    port = int(os.getenv('FLASK_PORT', 5000))
    env = os.getenv('FLASK_ENV', 'development')

    logger.info(f"Starting NCD clinic backend on {host}:{port} ({env})")
    logger.info(f"Database: {app.config['SQLALCHEMY_DATABASE_URI']}")
    app.run(host=host, port=port, debug=env == 'development', threaded=True)
