from __future__ import annotations

from typing import Optional


class ContentAcquisitionError(Exception):
    """Base class for every failure raised inside the acquisition layer."""


class TransportError(ContentAcquisitionError):
    """Connection, protocol or timeout failure for a single strategy attempt."""


class RemoteStatusError(ContentAcquisitionError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class ParseError(ContentAcquisitionError):
    """Body does not parse as the declared (or guessed) data format."""


class ShapeValidationError(ContentAcquisitionError):
    """Parsed payload violates the QuizQuestion / LearningPathStep rules."""


class InvocationError(ContentAcquisitionError):
    """
    Every strategy of a ladder failed.
    `failures` keeps one error per attempt, in the order they were tried;
    the message is the last failure's message.
    """

    def __init__(self, message: str, failures: Optional[list[ContentAcquisitionError]] = None):
        super().__init__(message)
        self.failures = list(failures or [])
