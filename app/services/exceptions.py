"""Domain errors raised by the review workflow."""


class ClinicalWorkflowError(Exception):
    """Base class for review workflow errors."""


class InvalidTransitionError(ClinicalWorkflowError):
    """Operation not allowed in the session's current step."""

    def __init__(self, operation: str, step: str):
        self.operation = operation
        self.step = step
        super().__init__(f"Cannot {operation} while session is at step '{step}'")


class AnalysisValidationError(ClinicalWorkflowError):
    """Model response was not valid JSON or did not match the clinical schema."""


class AnalysisTransportError(ClinicalWorkflowError):
    """Model service was unreachable, timed out, or returned nothing."""


class AssistantUnavailableError(ClinicalWorkflowError):
    """Chat or handout generation failed. The analysis itself is unaffected."""


class SessionResetError(ClinicalWorkflowError):
    """Session was reset while a model call was in flight; its result was dropped."""
