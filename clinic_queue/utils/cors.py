"""
CORS Configuration
Centralized CORS settings for the application
"""

# CORS Configuration - browser front-ends call the API with bearer tokens
CORS_CONFIG = {
    "origins": "*",
    "methods": ["GET", "POST", "PUT", "OPTIONS"],
    "allow_headers": [
        "Content-Type",
        "Authorization",
        "Accept",
    ],
    "expose_headers": [
        "Content-Type",
    ],
    "supports_credentials": False,
    "max_age": 86400,  # 24 hours
}


def init_cors(app):
    """
    Initialize CORS for the API blueprints
    """
    from flask_cors import CORS

    CORS(app,
         resources={r"/api/*": {"origins": CORS_CONFIG["origins"]}},
         methods=CORS_CONFIG["methods"],
         allow_headers=CORS_CONFIG["allow_headers"],
         expose_headers=CORS_CONFIG["expose_headers"],
         supports_credentials=CORS_CONFIG["supports_credentials"],
         max_age=CORS_CONFIG["max_age"])

    app.logger.info("CORS enabled for /api/*")
