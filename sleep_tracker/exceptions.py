class TrackerError(Exception):
    """Base error of the tracker; carries the HTTP status it maps to."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(TrackerError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidInput(TrackerError):
    status_code = 400
    default_message = "Invalid input"


class NotFound(TrackerError):
    # also used for resources owned by someone else
    status_code = 404
    default_message = "Not found"


class Conflict(TrackerError):
    status_code = 409
    default_message = "Conflict"


class Internal(TrackerError):
    status_code = 500
