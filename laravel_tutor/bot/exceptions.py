"""Custom exceptions for lesson generation and exercise grading."""


class TutorError(Exception):
    """Base exception for tutor bot errors."""
    pass


class ProviderError(TutorError):
    """Content provider call failed (network, quota, server or auth)."""

    def __init__(self, message: str, transient: bool = True):
        super().__init__(message)
        self.transient = transient


class ShapeError(TutorError):
    """Provider returned a response that is missing required parts."""
    pass


class ContentGenerationError(TutorError):
    """User-facing failure after all attempts were used up."""
    pass


class GradingPrecondition(TutorError):
    """Answers were checked while some blanks are still empty."""
    pass


class ExerciseLocked(TutorError):
    """The exercise is already solved and its answers are read-only."""
    pass
