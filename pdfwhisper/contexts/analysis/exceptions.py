"""Custom exceptions for the analysis context with user-facing messages."""

from typing import Optional


class AnalysisError(Exception):
    """
    Base class for whole-operation analysis failures.

    Raw decoder errors never reach the caller directly; they are chained as
    original_error on one of the subclasses below.

    Attributes:
        message: User-facing error description
        document: Filename involved, if the failure is tied to one document
        original_error: Underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        document: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.document = document
        self.original_error = original_error

        parts = [message]

        if document:
            parts.append(f"Document: {document}")

        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class PDFProcessingError(AnalysisError):
    """Outline extraction could not produce a result for a document."""

    DEFAULT_MESSAGE = "Failed to process PDF. Please ensure it's a valid PDF file."

    def __init__(
        self,
        message: str = DEFAULT_MESSAGE,
        document: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, document=document, original_error=original_error)


class DocumentAnalysisError(AnalysisError):
    """Persona analysis could not use any of its documents."""

    DEFAULT_MESSAGE = "Failed to analyze documents for persona."

    def __init__(
        self,
        message: str = DEFAULT_MESSAGE,
        document: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, document=document, original_error=original_error)


class AnalysisInProgressError(AnalysisError):
    """Raised when a ProcessingState is claimed while another operation holds it."""

    def __init__(self, active_operation: str):
        self.active_operation = active_operation
        super().__init__(f"An analysis is already in progress ({active_operation})")


class AnalysisConfigError(ValueError):
    """
    Exception raised when analysis settings cannot be built.

    Covers unknown keys and values of the wrong type in presets or overrides.
    """

    pass
