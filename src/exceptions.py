"""
Exceptions raised by the PrepPilot core.

Generation backend failures never appear here: they are absorbed by
fallbacks. Everything below is meant to reach the caller.
"""


class PrepPilotError(Exception):
    """Base class for errors surfaced to callers."""
    pass


class ResponseValidationError(PrepPilotError):
    """Raised when an answer is missing content for its declared type."""
    pass


class InterviewNotFoundError(PrepPilotError):
    """Raised when an interview id does not exist."""

    def __init__(self, interview_id: str):
        super().__init__(f"Interview not found: {interview_id}")
        self.interview_id = interview_id


class QuestionNotFoundError(PrepPilotError):
    """Raised when a question id or index does not exist."""
    pass


class StateTransitionError(PrepPilotError):
    """Raised when an invalid state transition is attempted."""
    pass


class StorageError(PrepPilotError):
    """Raised when a database write or media upload fails."""
    pass


class InterviewCreationError(PrepPilotError):
    """Raised when an interview could not be created with its questions."""
    pass


class CompletionError(PrepPilotError):
    """Raised when the final completion update fails after the last answer was saved."""
    pass
