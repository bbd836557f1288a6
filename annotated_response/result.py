"""
result.py
---------
Default mapping from an HTTP status code to a result word or phrase.

The result completes the sentence "The request has ____", e.g. "succeeded",
"failed", "created".  ``AnnotatedResponse`` calls the mapping the first time
a status is set while no result exists yet.

Swapping the vocabulary
~~~~~~~~~~~~~~~~~~~~~~~
Any callable matching ``ResultByCode`` can replace ``default_english``::

    def default_german(code: int) -> str:
        return "fehlgeschlagen" if str(abs(code))[0] >= "4" else "erfolgreich"

    AnnotatedResponse.create().set_result_by_code(default_german)

Replacements must stay pure: no I/O, no state, same output for the same code.
"""

from typing import Callable

ResultByCode = Callable[[int], str]


def default_english(http_status_code: int) -> str:
    """
    Return the English result for ``http_status_code``.

    ============== ===========
    Leading digit   Result
    ============== ===========
    4 and above     failed
    201 (exact)     created
    anything else   succeeded
    ============== ===========

    The sign is ignored when reading the leading digit, so the function never
    raises for codes outside 100-599 (``0`` → "succeeded", ``1000`` →
    "succeeded", ``-404`` → "failed").
    """
    category = int(str(abs(int(http_status_code)))[0])
    if category >= 4:
        return "failed"
    if http_status_code == 201:
        return "created"
    return "succeeded"
