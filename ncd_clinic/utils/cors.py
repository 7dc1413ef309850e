"""
CORS Configuration
Centralized CORS settings for the application
"""

CORS_CONFIG = {
    "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    "allow_headers": [
        "Content-Type",
        "Authorization",
        "X-Requested-With",
        "Accept",
        "Origin",
    ],
    "expose_headers": [
        "Content-Type",
        "Authorization",
    ],
    "max_age": 86400,  # 24 hours
}


def parse_origins(value):
    """CORS_ORIGINS is "*" or a comma separated list of origins"""
    if not value or value.strip() == "*":
        return "*"
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def init_cors(app):
    """
    Initialize CORS for the API routes
    """
    from flask_cors import CORS

    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    CORS(app,
         resources={r"/api/*": {"origins": origins}},
         methods=CORS_CONFIG["methods"],
         allow_headers=CORS_CONFIG["allow_headers"],
         expose_headers=CORS_CONFIG["expose_headers"],
         max_age=CORS_CONFIG["max_age"])

    app.logger.info(f"CORS enabled for origins: {origins}")
