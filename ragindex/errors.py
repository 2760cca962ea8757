# ragindex/errors.py
"""
Exceptions raised around the retrieval core.

The index itself never raises for content: empty corpora and zero-token
documents give empty results. These cover configuration and the
text-generation collaborator used by the pipeline.
"""

from typing import Optional


class RagIndexError(Exception):
    """Base class for every ragindex error."""


class ConfigError(RagIndexError, ValueError):
    """A setting is missing or malformed."""


class GenerationError(RagIndexError):
    """
    The text-generation backend failed.

    status is the HTTP-like status code reported by the backend, if any.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
