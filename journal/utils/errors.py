"""
Error taxonomy for the journal core.

Store-level failures never reach the caller as exceptions: the record store
and the service facade catch them and report absent / failed results tagged
with an ErrorCode. The exceptions below only travel between the layers of
the core.
"""
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Outcome codes reported by failed core operations."""

    NOT_FOUND = "NOT_FOUND"
    PARSE_FAILURE = "PARSE_FAILURE"
    BACKEND_FAILURE = "BACKEND_FAILURE"
    INVALID_INPUT = "INVALID_INPUT"


class JournalError(Exception):
    """Base exception for the journal core"""
    code: ErrorCode = ErrorCode.BACKEND_FAILURE

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.key = key


class RecordNotFoundError(JournalError):
    """No record (or no food entry) exists for the given key"""
    code = ErrorCode.NOT_FOUND


class RecordParseError(JournalError):
    """Stored value is not a readable day record"""
    code = ErrorCode.PARSE_FAILURE


class BackendError(JournalError):
    """Read or write against the persistence backend failed"""
    code = ErrorCode.BACKEND_FAILURE


class InvalidInputError(JournalError, ValueError):
    """Value rejected at the write boundary"""
    code = ErrorCode.INVALID_INPUT
