"""Application error taxonomy.

Every error carries the HTTP status it maps to and a message that is safe to
show to the client. Internal detail stays in the server log.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """A required field is missing or a value is malformed"""

    status_code = 400
    default_message = "Invalid request"


class AlreadySubscribedError(ValidationError):
    default_message = "Email already subscribed"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class StoreError(AppError):
    """Persistence layer failure; the cause is logged, never returned"""

    default_message = "Error processing your request"


class NotificationError(AppError):
    """Email delivery failure"""

    default_message = "Error sending message"
