"""
Caller-owned in-progress state for analysis entry points.

The presentation layer creates one ProcessingState, passes it to every entry
point call and reads is_processing to gate its controls. Only one operation
may hold the state at a time.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from pdfwhisper.contexts.analysis.exceptions import AnalysisInProgressError


class ProcessingState:
    """
    Single-slot in-progress token.

    Example:
        >>> state = ProcessingState()
        >>> with state.claim("outline"):
        ...     assert state.is_processing
        >>> state.is_processing
        False
    """

    def __init__(self):
        self._active: Optional[str] = None

    @property
    def is_processing(self) -> bool:
        return self._active is not None

    @property
    def active_operation(self) -> Optional[str]:
        return self._active

    @contextmanager
    def claim(self, operation: str) -> Iterator["ProcessingState"]:
        """
        Hold the state for the duration of one operation.

        Raises:
            AnalysisInProgressError: If another operation holds the state
        """
        if self._active is not None:
            raise AnalysisInProgressError(self._active)

        self._active = operation
        try:
            yield self
        finally:
            self._active = None
