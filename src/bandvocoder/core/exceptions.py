"""
Custom Exception Classes for Vocoder Processing

This module defines the exception hierarchy raised by the vocoder engine and
its collaborators. Every job failure surfaces as exactly one of these classes:

- ValidationError: bad width value, empty input, malformed channel data
- DecodeError: input bytes not decodable as supported audio
- EngineError: internal graph construction or rendering failure
- QueueFullError: the job queue rejected a submission

All of them derive from VocoderError so callers can catch the whole family.
"""

from typing import Optional


class VocoderError(Exception):
    """
    Base class for all vocoder errors.

    Attributes:
        message (str): Explanation of the error
    """

    default_message = "Vocoder processing failed."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(VocoderError):
    """
    Exception raised when job parameters or decoded buffers are invalid.

    Raised before any rendering work starts: width outside [0, 100], an
    empty or zero-length input, a non-positive sample rate, or channel data
    that is not a finite 2-D float array.

    Attributes:
        message (str): Explanation of the error
        field (Optional[str]): Name of the offending parameter, if any
    """

    default_message = "Invalid vocoder input."

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class DecodeError(VocoderError):
    """
    Exception raised when input bytes cannot be decoded into PCM audio.

    Attributes:
        message (str): Explanation of the error
        source (Optional[str]): Which input failed ("modulator", "carrier", or a path)
    """

    default_message = "Audio could not be decoded."

    def __init__(self, message: Optional[str] = None, source: Optional[str] = None) -> None:
        if source:
            message = f"{message or self.default_message} Source: {source}"
        super().__init__(message)
        self.source = source


class EngineError(VocoderError):
    """
    Exception raised for internal graph construction or rendering failures.

    These indicate a defect rather than bad user input.

    Attributes:
        message (str): Explanation of the error
        operation (Optional[str]): The engine stage that failed
    """

    default_message = "An error occurred while rendering."

    def __init__(self, message: Optional[str] = None, operation: Optional[str] = None) -> None:
        if operation:
            message = f"{message or self.default_message} Operation: {operation}"
        super().__init__(message)
        self.operation = operation


class QueueFullError(VocoderError):
    """Exception raised when the job queue is full and its overflow policy is 'reject'."""

    default_message = "The vocoder queue is full."
