"""Errors raised at the task backend boundary"""

from typing import Optional


class TaskApiError(Exception):
    """Raised when the task backend returns an error or an unusable response"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionExpiredError(TaskApiError):
    """Raised when the backend rejects the access token"""

    pass
