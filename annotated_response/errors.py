"""
errors.py
---------
Exceptions raised by, or understood by, ``AnnotatedResponse``.
"""

from http import HTTPStatus


class InvalidResultError(ValueError):
    """Raised when a result word or phrase exceeds the allowed length."""


class HttpError(Exception):
    """
    An application error that carries the HTTP status it should produce.

    ``AnnotatedResponse.create_from_exception()`` reads ``code`` and uses it
    as the response status when it is a valid HTTP status (100-599)::

        raise HttpError("Access denied", code=HTTPStatus.FORBIDDEN)
    """

    def __init__(self, message: str, code: int = HTTPStatus.INTERNAL_SERVER_ERROR):
        super().__init__(message)
        self.message = message
        self.code = int(code)
