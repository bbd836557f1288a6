"""
response.py
-----------
Annotated structure for REST responses.

Every response body built here has the same shape, always in this key order:

.. code-block:: json

    {
        "result":        "succeeded",
        "message":       "Login complete.",
        "user_messages": [{"level": "info", "message": "...", "context": {}}],
        "data":          { ... }
    }

Usage
~~~~~
Inside a Flask view::

    return to_json_response(
        AnnotatedResponse.create()
        .set_http_status(406)
        .set_message("Event can't be loaded.")
    )

When something raises::

    try:
        ...
    except Exception as exc:
        return to_json_response(AnnotatedResponse.create_from_exception(exc))

Result derivation
~~~~~~~~~~~~~~~~~
The ``result`` is filled in from the status code by ``set_http_status()``
only while it is still empty.  Once a result exists, whether set explicitly
or derived, later status changes leave it alone.
"""

import copy
import json
import logging
from http import HTTPStatus
from typing import Any, Optional

from .errors import InvalidResultError
from .result import ResultByCode, default_english

logger = logging.getLogger(__name__)

# Longest result accepted by ``set_result()``.
RESULT_MAX_LENGTH: int = 30

# Status codes ``create_from_exception()`` will take from an exception.
_HTTP_STATUS_MIN: int = 100
_HTTP_STATUS_MAX: int = 600


def _http_code_from(error: BaseException) -> Optional[int]:
    """
    Return the HTTP status carried by ``error``, or ``None``.

    ``code`` is checked first (werkzeug's ``HTTPException``, ``HttpError``),
    then ``status_code``.  Values that are not ints in [100, 600) are ignored.
    """
    for attribute in ("code", "status_code"):
        code = getattr(error, attribute, None)
        if code is None:
            continue
        if isinstance(code, int) and not isinstance(code, bool) \
                and _HTTP_STATUS_MIN <= code < _HTTP_STATUS_MAX:
            return int(code)
        return None
    return None


class AnnotatedResponse:
    """
    Fluent builder for an annotated REST response.

    Parameters
    ----------
    result_by_code : ResultByCode, optional
        Strategy that maps a status code to a default result.  Defaults to
        ``default_english``.
    """

    def __init__(self, result_by_code: Optional[ResultByCode] = None):
        self.set_result_by_code(result_by_code or default_english)
        self._status_code: int = int(HTTPStatus.OK)
        self._body: dict = {
            "result":        "",
            "message":       "",
            "user_messages": [],
            "data":          {},
        }

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(cls) -> "AnnotatedResponse":
        """Return a new response with status 200 and an empty body."""
        return cls()

    @classmethod
    def create_from_exception(cls, error: BaseException) -> "AnnotatedResponse":
        """
        Return a new response describing ``error``.

        The status is 500 unless the exception carries an HTTP status code
        (see ``_http_code_from``), in which case that code is used.  The
        message is ``str(error)``.  The result is derived from the first
        status set, so it is always "failed" with the default strategy.
        """
        response = cls()
        response.set_http_status(HTTPStatus.INTERNAL_SERVER_ERROR)
        code = _http_code_from(error)
        if code is not None:
            response.set_http_status(code)

        return response.set_message(str(error))

    # ------------------------------------------------------------------
    # Builder operations
    # ------------------------------------------------------------------

    def set_result_by_code(self, result_by_code: ResultByCode) -> "AnnotatedResponse":
        """
        Set the strategy used when the status is set and no result exists.

        Does not touch a result that has already been set.
        """
        self._result_by_code = result_by_code
        return self

    def set_result(self, result: str) -> "AnnotatedResponse":
        """
        Set a result word or phrase, e.g. "succeeded", "deleted".

        Raises
        ------
        InvalidResultError
            When ``result`` is longer than ``RESULT_MAX_LENGTH`` characters.
        """
        if len(result) > RESULT_MAX_LENGTH:
            raise InvalidResultError(
                f"The length may not exceed {RESULT_MAX_LENGTH} characters"
            )
        self._body["result"] = result
        return self

    def set_http_status(self, code: int) -> "AnnotatedResponse":
        """
        Set the HTTP status code, deriving the result if none is set yet.
        """
        if not self._body["result"]:
            result = self._result_by_code(code)
            if result:
                self.set_result(result)
                logger.debug("Result derived from status %s → %r", code, result)
        self._status_code = int(code)
        return self

    def get_http_status(self) -> int:
        return self._status_code

    @property
    def status_code(self) -> int:
        return self._status_code

    def set_message(self, message: str) -> "AnnotatedResponse":
        """
        Set a message describing the result to the client.

        Compare with ``add_user_message()``, which is meant for the end user.
        """
        self._body["message"] = message
        return self

    def add_user_message(
        self,
        level:   str,
        message: str,
        context: Optional[dict] = None,
    ) -> "AnnotatedResponse":
        """
        Append a message meant for the end user.

        Parameters
        ----------
        level : str
            Usually one of the ``LogLevel`` constants; not validated.
        message : str
            Text to show the user.
        context : dict, optional
            Values for placeholders in ``message``.  Defaults to ``{}``.
        """
        self._body["user_messages"].append({
            "level":   level,
            "message": message,
            "context": {} if context is None else context,
        })
        return self

    def set_data(self, data: Any) -> "AnnotatedResponse":
        """Replace the data payload (no merging)."""
        self._body["data"] = data
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(self) -> dict:
        """
        Return the response body as a plain dict.

        Keys are ordered ``result, message, user_messages, data``.  The
        returned dict is a copy; the status code is not part of it.
        """
        return copy.deepcopy(self._body)

    def to_json(self) -> str:
        """Return ``serialize()`` as compact JSON text."""
        return json.dumps(self.serialize(), separators=(",", ":"))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={self._status_code}, "
            f"result={self._body['result']!r})"
        )
