"""
sharecount/core/errors.py
Failures raised by the SharedCount client. All of them are absorbed by
ShareCountCache, which falls back to whatever counts it already has.
"""


class ShareCountError(Exception):
    """Base class: counts could not be fetched."""


class ConfigurationMissing(ShareCountError):
    """No API key / domain, or no URL to query."""


class TransportFailure(ShareCountError):
    """Network error, non-200 response, or an API-reported error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedPayload(ShareCountError):
    """Response body is not a JSON object of service counts."""
