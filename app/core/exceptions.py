class BookingError(Exception):
    """Base class for errors surfaced to API clients as ``{"error": message}``."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Missing or malformed booking field."""

    status_code = 400


class InvalidIdError(BookingError):
    """Booking id that is not an integer."""

    status_code = 400

    def __init__(self, message: str = "invalid id"):
        super().__init__(message)


class NotFoundError(BookingError):
    status_code = 404

    def __init__(self, message: str = "booking not found"):
        super().__init__(message)
