"""Errors raised by the upload client"""
from typing import List, Optional, Tuple


class GDataError(Exception):
    """Base class for every error raised by the client"""


class AuthenticationError(GDataError):
    """The API rejected our credentials (HTTP 403)"""

    def __init__(self, message: Optional[str], status_code: int = 403):
        super().__init__(message)
        self.status_code = status_code


class UploadError(GDataError):
    """The API refused the request.

    `errors` holds the (field, code) pairs reported by the API, in order.
    It is empty for login failures, where the message is the login error string.
    """

    def __init__(
        self,
        message: Optional[str],
        status_code: Optional[int] = None,
        errors: Optional[List[Tuple[str, str]]] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []


class ResponseParseError(GDataError):
    """A successful response did not contain what the operation expected"""
