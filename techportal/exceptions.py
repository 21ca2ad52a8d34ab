"""Errors raised by the list-view data layer"""

from typing import Optional


class FetchError(Exception):
    """
    Raised when a list could not be fetched from the upstream API.

    The message is safe to show to the user; ``status_code`` is set when the
    upstream answered with a non-2xx status.
    """

    def __init__(self, message: str, *, path: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.path = path
        self.status_code = status_code
