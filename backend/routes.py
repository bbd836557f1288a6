"""
routes.py
---------
Flask Blueprint for the annotated-response example service.

Routes
~~~~~~
GET  /api/health   – Liveness probe.
POST /api/echo     – Echo a JSON object back as ``data`` with status 201.

Response body (all routes)
~~~~~~~~~~~~~~~~~~~~~~~~~~
Every response – success or failure – is an ``AnnotatedResponse``::

    {"result": str, "message": str, "user_messages": [...], "data": {...}}
"""

import logging
from http import HTTPStatus

from flask import Blueprint, request

from annotated_response import AnnotatedResponse, HttpError, LogLevel
from annotated_response.flask_response import to_json_response

logger = logging.getLogger(__name__)

# Blueprint – all routes are mounted under /api (configured in app.py).
api_bp = Blueprint("api", __name__)


@api_bp.route("/health", methods=["GET"])
def health():
    """
    GET /api/health

    Response::

        {"result": "succeeded", "message": "", "user_messages": [],
         "data": {"status": "ok"}}
    """
    return to_json_response(
        AnnotatedResponse.create()
        .set_http_status(HTTPStatus.OK)
        .set_data({"status": "ok"})
    )


@api_bp.route("/echo", methods=["POST"])
def echo():
    """
    POST /api/echo

    Request body must be a JSON object; anything else is a 400.

    Response::

        {"result": "created", "message": "Payload received.",
         "user_messages": [{"level": "info", "message": "Stored {count} field(s).",
                            "context": {"count": 2}}],
         "data": {...the request body...}}
    """
    body = request.get_json(silent=True)  # silent=True: bad JSON → None, not 400
    if not isinstance(body, dict):
        raise HttpError("Request body must be a JSON object.", code=HTTPStatus.BAD_REQUEST)

    logger.debug("Echoing %d field(s)", len(body))
    return to_json_response(
        AnnotatedResponse.create()
        .set_http_status(HTTPStatus.CREATED)
        .set_message("Payload received.")
        .set_data(body)
        .add_user_message(LogLevel.INFO, "Stored {count} field(s).", {"count": len(body)})
    )
