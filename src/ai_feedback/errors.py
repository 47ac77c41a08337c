# src/ai_feedback/errors.py


class FeedbackError(Exception):
    """Base error for everything surfaced to the user."""


class InputRejected(FeedbackError):
    """No active document, or a file type we do not review."""


class CompletionTimeout(FeedbackError):
    """The model call exceeded its deadline."""


class EmptyFeedbackError(FeedbackError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"AI returned no feedback after {attempts} attempts")


class PdfRenderError(FeedbackError):
    pass
