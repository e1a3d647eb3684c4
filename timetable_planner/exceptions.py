class TimetableError(Exception):
    """Base class for errors raised around timetable generation."""

    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class GeneratedResultsInvalid(TimetableError):
    """The generated combinations failed the post-generation audit."""
