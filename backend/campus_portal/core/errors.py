"""Error taxonomy shared by every handler.

Each error carries the HTTP status and the fixed public message that is sent
back to the caller. Anything more specific belongs in the log, never in the
response body.
"""

from fastapi import status


class PortalError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str = "Processing failed. Please try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        if message is not None:
            self.public_message = message


class ValidationError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Invalid request"


class Unauthorized(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    public_message = "Unauthorized"


class Forbidden(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    public_message = "Forbidden"


class RateLimited(PortalError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    public_message = "Too many requests. Please try again later."


class NotFoundOrExpired(PortalError):
    # Missing, already decided and expired tokens are indistinguishable.
    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "This approval link is invalid, expired, or already processed."


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    public_message = "Not found"


class UpstreamFailure(PortalError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Processing failed. Please try again."
