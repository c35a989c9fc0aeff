class NotFoundError(ValueError):
    """Raised when a referenced attempt, quiz, question, athlete or progress record does not exist."""


class AttemptStateError(ValueError):
    """Raised when an attempt or quiz is not in a state that allows the requested transition."""
