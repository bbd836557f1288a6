"""
flask_response.py
-----------------
Flask glue for ``AnnotatedResponse``.

* ``to_json_response()`` turns an ``AnnotatedResponse`` into a
  ``flask.Response`` carrying its body, status code and any extra headers.
* ``register_error_handlers()`` makes every error a Flask app raises,
  including werkzeug's own 404/405 pages, come back as an annotated JSON body.

The body keeps the ``result, message, user_messages, data`` key order.
``jsonify()`` sorts keys by default, so it is not used here.

Configuration
~~~~~~~~~~~~~
ANNOTATED_RESPONSE_EXPOSE_ERRORS – ``app.config`` key.  When false (the
default outside debug mode) unhandled 5xx errors are reported as
"Internal server error." instead of the exception text.
"""

import logging
from typing import Mapping, Optional

from flask import Flask, Response, current_app, json
from werkzeug.exceptions import HTTPException

from .response import AnnotatedResponse

logger = logging.getLogger(__name__)

EXPOSE_ERRORS_KEY:      str = "ANNOTATED_RESPONSE_EXPOSE_ERRORS"
HIDDEN_ERROR_MESSAGE:   str = "Internal server error."
JSON_MIMETYPE:          str = "application/json"


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------

def to_json_response(
    response: AnnotatedResponse,
    headers:  Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Return a Flask JSON response for ``response``.

    Parameters
    ----------
    response : AnnotatedResponse
        Supplies the body (``serialize()``) and status (``get_http_status()``).
    headers : Mapping[str, str], optional
        Extra headers to send.

    Example body::

        {"result":"created","message":"","user_messages":[],"data":{}}
    """
    body = json.dumps(response.serialize(), sort_keys=False, separators=(",", ":"))
    return Response(
        body,
        status=response.get_http_status(),
        headers=dict(headers or {}),
        mimetype=JSON_MIMETYPE,
    )


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

def _forwarded_headers(exc: HTTPException) -> dict:
    """Headers an HTTP error wants sent (e.g. ``Allow`` for 405), minus Content-Type."""
    return {
        name: value
        for name, value in exc.get_headers()
        if name.lower() != "content-type"
    }


def _expose_errors() -> bool:
    return bool(current_app.config.get(EXPOSE_ERRORS_KEY, current_app.debug))


def register_error_handlers(app: Flask) -> None:
    """
    Attach handlers that render every error as an annotated JSON response.

    * ``HTTPException`` (``abort(404)``, unknown routes, wrong methods):
      the status comes from the exception, the message from its description.
    * Any other ``Exception``: status 500 unless the exception carries a
      valid HTTP ``code``.  5xx messages are hidden unless
      ``ANNOTATED_RESPONSE_EXPOSE_ERRORS`` is set.
    """

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        response = AnnotatedResponse.create_from_exception(exc)
        if exc.description:
            response.set_message(exc.description)
        logger.debug("HTTP error %s on request: %s", exc.code, exc.description)
        return to_json_response(response, headers=_forwarded_headers(exc))

    @app.errorhandler(Exception)
    def handle_exception(exc: Exception):
        response = AnnotatedResponse.create_from_exception(exc)
        if response.get_http_status() >= 500:
            logger.exception("Unhandled server error")
            if not _expose_errors():
                response.set_message(HIDDEN_ERROR_MESSAGE)
        return to_json_response(response)

    logger.debug("Annotated error handlers registered on %s", app.name)
