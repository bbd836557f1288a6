"""
app.py
------
Flask application factory for the annotated-response example service.

Usage
~~~~~
Development::

    set FLASK_ENV=development
    python backend/app.py

Production (gunicorn example)::

    gunicorn --chdir backend "app:create_app()" --bind 0.0.0.0:5000 --workers 4

Environment variables
~~~~~~~~~~~~~~~~~~~~~
FLASK_ENV                         – "development" (default) or "production"
FLASK_PORT                        – port to listen on (default 5000)
ANNOTATED_RESPONSE_EXPOSE_ERRORS  – "true" to show exception text on 5xx
                                    responses (default false)

Architecture
~~~~~~~~~~~~
``create_app()`` is the sole entry point.  It:

1. Registers the ``api_bp`` Blueprint (all routes live in ``routes.py``).
2. Attaches the global error handlers from ``annotated_response`` so every
   response – including Flask's own 404/405 pages – is an annotated body.
"""

import logging
import os

from flask import Flask

from annotated_response.flask_response import EXPOSE_ERRORS_KEY, register_error_handlers
from routes import api_bp


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.DEBUG if os.getenv("FLASK_ENV") == "development" else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app() -> Flask:
    """
    Build and return a configured Flask application instance.

    The test suite calls ``create_app().test_client()`` directly, so nothing
    here may depend on import-time side effects beyond logging setup.
    """
    app = Flask(__name__)
    app.config[EXPOSE_ERRORS_KEY] = (
        os.getenv("ANNOTATED_RESPONSE_EXPOSE_ERRORS", "false").lower() == "true"
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    register_error_handlers(app)

    logger.info("Flask app created – blueprint registered at /api")
    return app


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    port = int(os.getenv("FLASK_PORT", 5000))
    debug = os.getenv("FLASK_ENV", "development") == "development"

    application = create_app()

    logger.info("Starting Flask dev server on port %d  (debug=%s)", port, debug)
    application.run(host="0.0.0.0", port=port, debug=debug)
