"""Domain validation errors."""

from __future__ import annotations


class ValidationError(Exception):
    """A prefix, code, or post field failed directory validation.

    Always recoverable: callers reject the single record or operation.
    """
