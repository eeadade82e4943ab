"""
Error kinds raised while turning an uploaded timetable into GroupData.

Failures from the Gemini API and its transport are not wrapped: callers
receive the SDK's or httpx's own exception. EXTERNAL_SERVICE_ERRORS lists
those types for code that needs to tell them apart.
"""

from typing import Any, Dict, List, Optional

import httpx
from google.genai.errors import APIError as ExternalServiceError

__all__ = [
    "ScheduleExtractionError",
    "FileReadError",
    "MalformedResponseError",
    "ResponseValidationError",
    "ExternalServiceError",
    "EXTERNAL_SERVICE_ERRORS",
]

# Everything the Gemini call can fail with on the network side: API errors
# (auth, quota, model) and transport errors from the SDK's HTTP client.
EXTERNAL_SERVICE_ERRORS = (ExternalServiceError, httpx.HTTPError)


class ScheduleExtractionError(Exception):
    """Base class for extraction failures raised by this project."""


class FileReadError(ScheduleExtractionError):
    """The uploaded file could not be read or encoded."""


class MalformedResponseError(ScheduleExtractionError):
    """Gemini answered with a body that is not JSON."""

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message)
        self.body = body


class ResponseValidationError(ScheduleExtractionError):
    """Gemini answered with JSON that does not match the expected schedule shape."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []
