"""Domain errors raised by services and auth dependencies.

Routes let these propagate; the handlers registered in main.create_app
turn them into HTTP responses (404, 400, and the 401 entry-point body).
"""

from typing import Optional


class NotFoundError(Exception):
    """A referenced session, user, or teacher does not exist."""


class BadRequestError(Exception):
    """The request conflicts with current state (e.g. already participating)."""


class UnauthorizedError(Exception):
    """No authenticated identity, bad credentials, or an ownership mismatch."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message)
        self.message = message
