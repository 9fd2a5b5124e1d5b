"""Base exception for failed assertions."""


class AssertionFailure(AssertionError):
    """Raised by a failed check.

    Attributes:
        message: Human-readable description, e.g. "expected 1 to equal 2".
            The executor reports it verbatim as the second failing event.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
