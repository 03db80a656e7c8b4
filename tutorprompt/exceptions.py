"""
Exceptions raised by TutorPrompt.
"""


class TutorPromptError(Exception):
    """Base class for TutorPrompt errors."""


class SubjectNotFoundError(TutorPromptError, LookupError):
    """No example library or template exists for the requested subject."""

    def __init__(self, subject: str, available: tuple = ()):
        self.subject = subject
        self.available = tuple(available)
        message = f"No examples available for subject: {subject!r}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class InvalidQueryError(TutorPromptError, ValueError):
    """The student query is empty, so relevance cannot be scored."""
