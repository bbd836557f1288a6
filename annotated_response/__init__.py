"""Annotated REST response bodies with status-derived result keywords."""

from .errors import HttpError, InvalidResultError
from .levels import LogLevel
from .response import RESULT_MAX_LENGTH, AnnotatedResponse
from .result import ResultByCode, default_english

__all__ = [
    "AnnotatedResponse",
    "HttpError",
    "InvalidResultError",
    "LogLevel",
    "RESULT_MAX_LENGTH",
    "ResultByCode",
    "default_english",
]
